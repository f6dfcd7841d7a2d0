"""ChordShape and ChordDiagramModel: per-string fret positions of a guitar chord."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

STRING_COUNT: Final[int] = 6
MAX_FRET: Final[int] = 24

#: Highest fret that still fits the fixed 4-fret window below the nut.
ABSOLUTE_MODE_MAX_FRET: Final[int] = 4

MUTED_SYMBOL: Final[str] = "x"
OPEN_SYMBOL: Final[str] = "0"

# '1'-'9' -> 1-9, 'a'-'o' -> 10-24
_FRET_SYMBOLS: Final[str] = "123456789abcdefghijklmno"


class InvalidEncodingError(ValueError):
    """Raised when a chord encoding holds a symbol outside the fret alphabet."""


class StringKind(Enum):
    MUTED = "muted"
    OPEN = "open"
    FRETTED = "fretted"


@dataclass(frozen=True)
class StringPosition:
    """
    What one string does in a chord shape.

    Attributes:
        kind: Muted (not played), open (played unfretted) or fretted.
        fret: Fret number for fretted strings (1-24); 0 otherwise.
    """

    kind: StringKind
    fret: int = 0

    @classmethod
    def muted(cls) -> StringPosition:
        return cls(StringKind.MUTED)

    @classmethod
    def open(cls) -> StringPosition:
        return cls(StringKind.OPEN)

    @classmethod
    def fretted(cls, fret: int) -> StringPosition:
        if not 1 <= fret <= MAX_FRET:
            raise InvalidEncodingError(f"Fret {fret} is outside 1-{MAX_FRET}.")
        return cls(StringKind.FRETTED, fret)

    @property
    def is_fretted(self) -> bool:
        return self.kind is StringKind.FRETTED

    @property
    def symbol(self) -> str:
        """The single encoding symbol for this position."""
        if self.kind is StringKind.MUTED:
            return MUTED_SYMBOL
        if self.kind is StringKind.OPEN:
            return OPEN_SYMBOL
        return _FRET_SYMBOLS[self.fret - 1]


def decode_symbol(symbol: str) -> StringPosition:
    """
    Decode one encoding symbol into a StringPosition.

    Raises:
        InvalidEncodingError: If the symbol is not in the fret alphabet.
    """
    if symbol == MUTED_SYMBOL:
        return StringPosition.muted()
    if symbol == OPEN_SYMBOL:
        return StringPosition.open()
    if len(symbol) == 1 and symbol in _FRET_SYMBOLS:
        return StringPosition.fretted(_FRET_SYMBOLS.index(symbol) + 1)
    raise InvalidEncodingError(f"Unrecognised fret symbol {symbol!r}.")


@dataclass(frozen=True)
class ChordShape:
    """
    An immutable chord shape template.

    Attributes:
        suffix:         Chord label shown to the user, e.g. "m7".
        fret_positions: One StringPosition per string, left to right.
        barre_fret:     Fret pressed by a barre finger; 0 when there is none.
    """

    suffix: str
    fret_positions: tuple[StringPosition, ...]
    barre_fret: int = 0

    def __post_init__(self) -> None:
        if len(self.fret_positions) != STRING_COUNT:
            raise InvalidEncodingError(
                f"Chord '{self.suffix}' needs {STRING_COUNT} string positions, "
                f"got {len(self.fret_positions)}."
            )
        if not 0 <= self.barre_fret <= MAX_FRET:
            raise InvalidEncodingError(
                f"Barre fret {self.barre_fret} of chord '{self.suffix}' is outside 0-{MAX_FRET}."
            )

    @classmethod
    def from_encoding(cls, suffix: str, encoding: str, barre_fret: int = 0) -> ChordShape:
        """
        Build a shape from a 6-symbol encoding such as ``"x32010"``.

        Raises:
            InvalidEncodingError: If the encoding has the wrong length or an
                unrecognised symbol.
        """
        if len(encoding) != STRING_COUNT:
            raise InvalidEncodingError(
                f"Encoding {encoding!r} must have exactly {STRING_COUNT} symbols."
            )
        positions = tuple(decode_symbol(symbol) for symbol in encoding)
        return cls(suffix=suffix, fret_positions=positions, barre_fret=barre_fret)

    @property
    def encoding(self) -> str:
        return "".join(position.symbol for position in self.fret_positions)


class ChordDiagramModel:
    """
    Query layer over a ChordShape used by the diagram renderer.

    String indices are 0-based, 0 being the leftmost (lowest) string.
    """

    def __init__(self, shape: ChordShape) -> None:
        self.shape = shape

    @classmethod
    def from_encoding(cls, suffix: str, encoding: str, barre_fret: int = 0) -> ChordDiagramModel:
        return cls(ChordShape.from_encoding(suffix, encoding, barre_fret))

    @property
    def string_count(self) -> int:
        return len(self.shape.fret_positions)

    @property
    def barre_fret(self) -> int:
        return self.shape.barre_fret

    def classify_string(self, index: int) -> StringPosition:
        """
        Return the position of the string at ``index``.

        Raises:
            IndexError: If ``index`` is not a valid string index.
        """
        if not 0 <= index < self.string_count:
            raise IndexError(f"String index {index} is outside 0-{self.string_count - 1}.")
        return self.shape.fret_positions[index]

    def fret_range(self) -> tuple[int, int]:
        """
        Lowest and highest fretted position, both seeded from the barre fret.

        A barre lower or higher than every fretted note still widens the range,
        so the barre anchors the diagram window.
        """
        min_fret = max_fret = self.barre_fret
        for position in self.shape.fret_positions:
            if not position.is_fretted:
                continue
            min_fret = min(min_fret, position.fret)
            max_fret = max(max_fret, position.fret)
        return min_fret, max_fret

    def barre_span(self) -> tuple[int, int] | None:
        """
        Leftmost and rightmost strings fretted at the barre fret.

        Returns None unless at least two strings share the barre fret.
        """
        barre_strings = [
            index
            for index, position in enumerate(self.shape.fret_positions)
            if position.is_fretted and position.fret == self.barre_fret
        ]
        if len(barre_strings) < 2:
            return None
        return barre_strings[0], barre_strings[-1]

    @property
    def offset_mode(self) -> bool:
        """True when the shape sits too high up the neck for the nut window."""
        _, max_fret = self.fret_range()
        return max_fret > ABSOLUTE_MODE_MAX_FRET

    def row_for(self, fret: int) -> int:
        """Diagram row for ``fret``; offset mode maps the lowest fret to row 1."""
        if self.offset_mode:
            min_fret, _ = self.fret_range()
            return fret - min_fret + 1
        return fret
