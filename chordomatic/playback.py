"""Play/pause control over an external media player holding one audio clip."""

from typing import Protocol


class MediaPlayer(Protocol):
    def is_playing(self) -> bool: ...

    def start(self) -> None: ...

    def pause(self) -> None: ...


class PlaybackController:
    """Guards start/pause so each is only sent when it changes player state."""

    def __init__(self, player: MediaPlayer) -> None:
        self.player = player

    def play(self) -> bool:
        """Start playback; returns False if the player was already playing."""
        if self.player.is_playing():
            return False
        self.player.start()
        return True

    def pause(self) -> bool:
        """Pause playback; returns False if the player was not playing."""
        if not self.player.is_playing():
            return False
        self.player.pause()
        return True
