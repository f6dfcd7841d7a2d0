"""SongBuilder: assembles a song as a most-recent-first list of key+suffix chords."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from chordomatic.catalog import ChordCatalog
from chordomatic.chord_shape import ChordShape


class UnknownKeyError(ValueError):
    """Raised when selecting a key that is not in the catalog."""


class UnknownChordError(ValueError):
    """Raised when selecting a chord suffix that is not in the catalog."""


class AddResult(Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"


class RemoveResult(Enum):
    OK = "ok"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


@dataclass(frozen=True)
class Key:
    name: str


@dataclass(frozen=True)
class SongChord:
    """
    One chord of a song: a key paired with a chord suffix.

    Two song chords are equal when their combined names are equal, so
    "A" + "maj" and "Am" + "aj" are the same entry.
    """

    key: str = field(compare=False)
    suffix: str = field(compare=False)
    name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.key + self.suffix)

    @classmethod
    def parse(cls, token: str, separator: str = ":") -> SongChord:
        """
        Parse ``"KEY:SUFFIX"`` (the suffix may be empty).

        Raises:
            ValueError: If the separator is missing or the key is empty.
        """
        key, sep, suffix = token.partition(separator)
        if not sep or not key:
            raise ValueError(f"Expected KEY{separator}SUFFIX, got {token!r}.")
        return cls(key, suffix)


class SongBuilder:
    """
    Collects song chords chosen by key and suffix.

    ``on_success`` is called with no arguments after every operation that
    changes state (key selection, an add, a removal), standing in for the
    user feedback of a UI layer.
    """

    def __init__(
        self,
        catalog: ChordCatalog,
        on_success: Callable[[], None] | None = None,
    ) -> None:
        self.catalog = catalog
        self.on_success = on_success
        self._selected_key = Key(catalog.keys[0])
        self._song_chords: list[SongChord] = []

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _notify(self) -> None:
        if self.on_success is not None:
            self.on_success()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def selected_key(self) -> Key:
        return self._selected_key

    @property
    def song_chords(self) -> tuple[SongChord, ...]:
        return tuple(self._song_chords)

    def __len__(self) -> int:
        return len(self._song_chords)

    def select_key(self, name: str) -> None:
        """
        Make ``name`` the key used for subsequent chord selections.

        Raises:
            UnknownKeyError: If the catalog has no such key.
        """
        if not self.catalog.knows_key(name):
            raise UnknownKeyError(f"Unknown key '{name}'.")
        self._selected_key = Key(name)
        self._notify()

    def select_chord_suffix(self, suffix: str) -> AddResult:
        """
        Add the selected key with ``suffix`` to the front of the song.

        Raises:
            UnknownChordError: If the catalog has no shape for ``suffix``.
        """
        if suffix not in self.catalog.shapes:
            raise UnknownChordError(f"Unknown chord suffix '{suffix}'.")
        song_chord = SongChord(self._selected_key.name, suffix)
        if song_chord in self._song_chords:
            return AddResult.ALREADY_PRESENT
        self._song_chords.insert(0, song_chord)
        self._notify()
        return AddResult.ADDED

    def remove_song_chord_at(self, index: int) -> RemoveResult:
        if not 0 <= index < len(self._song_chords):
            return RemoveResult.INDEX_OUT_OF_RANGE
        del self._song_chords[index]
        self._notify()
        return RemoveResult.OK

    def shape_for(self, song_chord: SongChord) -> ChordShape:
        """Resolve a song chord to the catalog shape drawn for it."""
        try:
            return self.catalog.shape(song_chord.suffix)
        except KeyError:
            raise UnknownChordError(f"Unknown chord suffix '{song_chord.suffix}'.") from None
