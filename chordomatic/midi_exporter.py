"""MidiExporter: writes a song's chord shapes as a single-track guitar MIDI file."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import Final

from midiutil import MIDIFile

from chordomatic.chord_shape import ChordShape, StringKind

#: Standard tuning, low to high: E2 A2 D3 G3 B3 E4
STANDARD_TUNING: Final[tuple[int, ...]] = (40, 45, 50, 55, 59, 64)

TRACK: Final[int] = 0
CHANNEL: Final[int] = 0

#: General MIDI program 25 "Acoustic Guitar (nylon)", 0-based
NYLON_GUITAR_PROGRAM: Final[int] = 24


def shape_to_pitches(shape: ChordShape, tuning: Sequence[int] = STANDARD_TUNING) -> list[int]:
    """
    MIDI pitches sounded by a chord shape, low string first.

    Muted strings are skipped; open strings sound the tuning pitch.

    Raises:
        ValueError: If the tuning does not have one pitch per string.
    """
    if len(tuning) != len(shape.fret_positions):
        raise ValueError(
            f"Tuning has {len(tuning)} strings but chord '{shape.suffix}' "
            f"has {len(shape.fret_positions)}."
        )
    return [
        open_pitch + position.fret
        for open_pitch, position in zip(tuning, shape.fret_positions)
        if position.kind is not StringKind.MUTED
    ]



def parse_time_signature(text: str) -> tuple[int, int]:
    """
    Parse ``"N/D"`` into a (beats per bar, beat unit) pair.

    Raises:
        ValueError: If the text is malformed or the beat unit is not a power of two.
    """
    match = re.match(r"^(\d+)/(\d+)$", text.strip())
    if not match:
        raise ValueError(f"Expected a time signature like 4/4, got {text!r}.")
    numerator, denominator = int(match.group(1)), int(match.group(2))
    _check_time_signature(numerator, denominator)
    return numerator, denominator


def _check_time_signature(numerator: int, denominator: int) -> None:
    if not 1 <= numerator <= 255:
        raise ValueError(f"Time signature numerator must be 1-255, got {numerator}.")
    if denominator < 1 or denominator & (denominator - 1):
        raise ValueError(f"Time signature denominator must be a power of two, got {denominator}.")


class MidiExporter:
    """
    Writes one block chord per song entry into a Standard MIDI File.

    Layout
    ------
    A single track on channel 0 carries the track name (song title), tempo,
    time signature and a nylon-guitar program change at beat 0. Entries are
    laid out back to back: each chord is held for its own duration (or
    ``beats_per_chord`` when no durations are given), and a ``None`` entry is
    a rest that only advances time.
    """

    DEFAULT_TEMPO = 100     # BPM
    DEFAULT_VELOCITY = 100  # MIDI velocity (0-127)
    DEFAULT_BEATS_PER_CHORD = 4
    DEFAULT_TIME_SIGNATURE = (4, 4)
    CLOCKS_PER_TICK = 24    # MIDI clocks per metronome click

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        velocity: int = DEFAULT_VELOCITY,
        beats_per_chord: float = DEFAULT_BEATS_PER_CHORD,
        time_signature: tuple[int, int] = DEFAULT_TIME_SIGNATURE,
    ) -> None:
        """
        Args:
            tempo:           Playback tempo in beats per minute.
            velocity:        MIDI note-on velocity for every note.
            beats_per_chord: Default length of each entry, in beats.
            time_signature:  (beats per bar, beat unit), e.g. (3, 4).
        """
        if not (math.isfinite(beats_per_chord) and beats_per_chord > 0):
            raise ValueError(f"beats_per_chord must be positive, got {beats_per_chord}.")
        _check_time_signature(*time_signature)
        self.tempo = tempo
        self.velocity = velocity
        self.beats_per_chord = beats_per_chord
        self.time_signature = time_signature

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve_durations(
        self,
        entries: Sequence[ChordShape | None],
        durations: Sequence[float] | None,
    ) -> list[float]:
        if durations is None:
            return [self.beats_per_chord] * len(entries)
        if len(durations) != len(entries):
            raise ValueError(
                f"Got {len(durations)} duration(s) for {len(entries)} song entr"
                f"{'y' if len(entries) == 1 else 'ies'}."
            )
        for beats in durations:
            if not (math.isfinite(beats) and beats > 0):
                raise ValueError(f"Durations must be positive, got {beats}.")
        return list(durations)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(
        self,
        entries: Sequence[ChordShape | None],
        title: str = "",
        durations: Sequence[float] | None = None,
    ) -> MIDIFile:
        """
        Lay out ``entries`` in order and return the populated MIDIFile.

        Args:
            entries:   Chord shapes to sound; ``None`` marks a rest.
            title:     Track name.
            durations: Beats per entry; defaults to ``beats_per_chord`` each.

        Raises:
            ValueError: If durations do not match the entries or are not positive.
        """
        lengths = self._resolve_durations(entries, durations)
        numerator, denominator = self.time_signature

        midi = MIDIFile(numTracks=1)
        midi.addTrackName(TRACK, 0, title or "chordomatic")
        midi.addTempo(TRACK, 0, self.tempo)
        # denominator is written as a power of two: 4 -> 2, 8 -> 3
        midi.addTimeSignature(
            TRACK, 0, numerator, denominator.bit_length() - 1, self.CLOCKS_PER_TICK
        )
        midi.addProgramChange(TRACK, CHANNEL, 0, NYLON_GUITAR_PROGRAM)

        start_beat = 0.0
        for shape, beats in zip(entries, lengths):
            if shape is not None:
                for pitch in shape_to_pitches(shape):
                    midi.addNote(
                        track=TRACK,
                        channel=CHANNEL,
                        pitch=pitch,
                        time=start_beat,
                        duration=beats,
                        volume=self.velocity,
                    )
            start_beat += beats
        return midi

    def export(
        self,
        entries: Sequence[ChordShape | None],
        output_path: str,
        title: str = "",
        durations: Sequence[float] | None = None,
    ) -> None:
        """
        Write ``entries`` to ``output_path`` as a MIDI file.

        Raises:
            ValueError: If durations do not match the entries or are not positive.
            OSError: If the output file cannot be opened for writing.
        """
        midi = self.build(entries, title, durations)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
