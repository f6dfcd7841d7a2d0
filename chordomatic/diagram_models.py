"""Data models for chord diagram rendering: surface geometry and draw primitives."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, Union

from chordomatic.chord_shape import STRING_COUNT

DEFAULT_FRET_ROW_COUNT: Final[int] = 5


class Style(Enum):
    """Paint style tag carried by every primitive."""

    BACKGROUND = "background"
    NORMAL = "normal"
    OUTLINE = "outline"
    THICK = "thick"
    BARRE = "barre"


@dataclass(frozen=True)
class RenderGeometry:
    """
    Size of the target surface and the grid laid over it.

    Spacings are derived on every access; resize by building a new geometry.
    """

    width: float
    height: float
    string_count: int = STRING_COUNT
    fret_row_count: int = DEFAULT_FRET_ROW_COUNT

    def __post_init__(self) -> None:
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            raise ValueError(f"Surface size must be finite, got {self.width}x{self.height}.")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Surface size must be positive, got {self.width}x{self.height}.")
        if self.string_count < 1 or self.fret_row_count < 1:
            raise ValueError("String and fret row counts must be at least 1.")

    @property
    def string_spacing(self) -> float:
        return self.width / (self.string_count + 1)

    @property
    def fret_spacing(self) -> float:
        return self.height / self.fret_row_count

    def resized(self, width: float, height: float) -> RenderGeometry:
        return replace(self, width=width, height=height)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned filled rectangle (the diagram background)."""

    x: float
    y: float
    width: float
    height: float
    style: Style = Style.BACKGROUND


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    style: Style = Style.NORMAL
    stroke_width: float = 2.0


@dataclass(frozen=True)
class Circle:
    """Circle; NORMAL is filled, OUTLINE is stroked only."""

    cx: float
    cy: float
    r: float
    style: Style = Style.NORMAL


@dataclass(frozen=True)
class Text:
    text: str
    x: float
    y: float
    style: Style = Style.NORMAL


DrawPrimitive = Union[Rect, Line, Circle, Text]
