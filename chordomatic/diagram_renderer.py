"""ChordDiagramRenderer: turns a chord model into an ordered list of draw primitives."""

from __future__ import annotations

from typing import Final

from chordomatic.chord_shape import ChordDiagramModel, StringKind
from chordomatic.diagram_models import (
    Circle,
    DrawPrimitive,
    Line,
    Rect,
    RenderGeometry,
    Style,
    Text,
)

# Stroke widths in surface units
NORMAL_STROKE: Final[float] = 2.0
THICK_STROKE: Final[float] = 10.0

# Glyph placement, in fractions of a grid cell
_MUTED_HALF_WIDTH: Final[float] = 0.25
_MUTED_TOP: Final[float] = 0.30
_MUTED_BOTTOM: Final[float] = 0.70
_OPEN_RADIUS: Final[float] = 1 / 6
_DOT_RADIUS: Final[float] = 1 / 4
_BARRE_THICKNESS: Final[float] = 1 / 2
_LABEL_X: Final[float] = 0.2
_LABEL_Y: Final[float] = 1.57


class ChordDiagramRenderer:
    """
    Lay out a chord diagram on a string/fret grid.

    Layout
    ------
    Row 0 of the grid (above fret boundary 1) holds the muted "X" and open
    "O" markers. Fret boundaries are drawn at rows 1 to ``fret_row_count``
    and a note on row ``r`` sits half a cell below boundary ``r``.

    Two display modes exist:

    - **Absolute**: the highest fretted position is 4 or lower. Frets are
      drawn as-is and a thick nut line sits on boundary 1.
    - **Offset**: the shape sits further up the neck. Every fret is shifted
      so the lowest one lands on row 1, and the real starting fret is written
      as a label to the left of the grid instead of the nut.

    Paint order is fixed (background, strings, frets, per-string markers,
    barre, nut or label) so later primitives draw over earlier ones.
    """

    def __init__(self, geometry: RenderGeometry) -> None:
        self.geometry = geometry

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _column(self, string_index: int) -> float:
        return (string_index + 1) * self.geometry.string_spacing

    def _row_center(self, row: float) -> float:
        return (row + 0.5) * self.geometry.fret_spacing

    def _fret_line(self, boundary: int, style: Style, stroke_width: float) -> Line:
        ss = self.geometry.string_spacing
        y = boundary * self.geometry.fret_spacing
        return Line(ss, y, self.geometry.string_count * ss, y, style, stroke_width)

    def _background(self) -> list[DrawPrimitive]:
        return [Rect(0.0, 0.0, self.geometry.width, self.geometry.height)]

    def _grid(self) -> list[DrawPrimitive]:
        fs = self.geometry.fret_spacing
        bottom = self.geometry.fret_row_count * fs
        primitives: list[DrawPrimitive] = [
            Line(self._column(i), fs, self._column(i), bottom, Style.NORMAL, NORMAL_STROKE)
            for i in range(self.geometry.string_count)
        ]
        primitives.extend(
            self._fret_line(boundary, Style.NORMAL, NORMAL_STROKE)
            for boundary in range(1, self.geometry.fret_row_count + 1)
        )
        return primitives

    def _muted_marker(self, string_index: int) -> list[DrawPrimitive]:
        ss = self.geometry.string_spacing
        fs = self.geometry.fret_spacing
        left = self._column(string_index) - _MUTED_HALF_WIDTH * ss
        right = self._column(string_index) + _MUTED_HALF_WIDTH * ss
        top = _MUTED_TOP * fs
        bottom = _MUTED_BOTTOM * fs
        return [
            Line(left, bottom, right, top, Style.NORMAL, NORMAL_STROKE),
            Line(left, top, right, bottom, Style.NORMAL, NORMAL_STROKE),
        ]

    def _string_markers(self, model: ChordDiagramModel) -> list[DrawPrimitive]:
        fs = self.geometry.fret_spacing
        primitives: list[DrawPrimitive] = []
        for index in range(model.string_count):
            position = model.classify_string(index)
            if position.kind is StringKind.MUTED:
                primitives.extend(self._muted_marker(index))
            elif position.kind is StringKind.OPEN:
                primitives.append(
                    Circle(self._column(index), self._row_center(0), fs * _OPEN_RADIUS, Style.OUTLINE)
                )
            else:
                row = model.row_for(position.fret)
                primitives.append(
                    Circle(self._column(index), self._row_center(row), fs * _DOT_RADIUS, Style.NORMAL)
                )
        return primitives

    def _barre(self, model: ChordDiagramModel) -> list[DrawPrimitive]:
        span = model.barre_span()
        if span is None:
            return []
        first, last = span
        y = self._row_center(model.row_for(model.barre_fret))
        thickness = self.geometry.fret_spacing * _BARRE_THICKNESS
        return [Line(self._column(first), y, self._column(last), y, Style.BARRE, thickness)]

    def _nut_or_label(self, model: ChordDiagramModel) -> list[DrawPrimitive]:
        if not model.offset_mode:
            return [self._fret_line(1, Style.THICK, THICK_STROKE)]
        min_fret, _ = model.fret_range()
        return [
            Text(
                str(min_fret),
                _LABEL_X * self.geometry.string_spacing,
                _LABEL_Y * self.geometry.fret_spacing,
            )
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, model: ChordDiagramModel) -> list[DrawPrimitive]:
        """
        Produce the primitives for one draw pass.

        Raises:
            ValueError: If the geometry and the model disagree on string count.
        """
        if model.string_count != self.geometry.string_count:
            raise ValueError(
                f"Geometry has {self.geometry.string_count} strings but chord "
                f"'{model.shape.suffix}' has {model.string_count}."
            )
        return [
            *self._background(),
            *self._grid(),
            *self._string_markers(model),
            *self._barre(model),
            *self._nut_or_label(model),
        ]


def render(model: ChordDiagramModel, geometry: RenderGeometry) -> list[DrawPrimitive]:
    """Render ``model`` onto a surface described by ``geometry``."""
    return ChordDiagramRenderer(geometry).render(model)
