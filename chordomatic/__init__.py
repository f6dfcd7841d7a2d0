"""chordomatic: build a song from chords and render fretboard chord diagrams."""

__version__ = "0.1.0"
