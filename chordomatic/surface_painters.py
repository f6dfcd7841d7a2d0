"""Surface painters: turn draw primitives into SVG and printable HTML sheets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import svgwrite
import svgwrite.base

from chordomatic.diagram_models import (
    Circle,
    DrawPrimitive,
    Line,
    Rect,
    RenderGeometry,
    Style,
    Text,
)


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class SurfacePainter(ABC):
    """Abstract painter for a rendered primitive list."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this painter."""

    @abstractmethod
    def paint(self, primitives: Sequence[DrawPrimitive], geometry: RenderGeometry) -> str:
        """Paint primitives into a file content string."""


class SvgPainter(SurfacePainter):
    """Paint primitives as a standalone SVG document using svgwrite."""

    BACKGROUND_COLOR = "lightgray"
    FOREGROUND_COLOR = "black"
    OUTLINE_STROKE = 1.0
    FONT_FAMILY = "sans-serif"

    @property
    def default_extension(self) -> str:
        return ".svg"

    def paint(self, primitives: Sequence[DrawPrimitive], geometry: RenderGeometry) -> str:
        dwg = svgwrite.Drawing(
            size=(geometry.width, geometry.height),
            viewBox=f"0 0 {geometry.width} {geometry.height}",
        )
        for primitive in primitives:
            dwg.add(self._element(dwg, primitive, geometry))
        return dwg.tostring()

    def _element(
        self,
        dwg: svgwrite.Drawing,
        primitive: DrawPrimitive,
        geometry: RenderGeometry,
    ) -> svgwrite.base.BaseElement:
        fg = self.FOREGROUND_COLOR
        if isinstance(primitive, Rect):
            return dwg.rect(
                (primitive.x, primitive.y),
                (primitive.width, primitive.height),
                fill=self.BACKGROUND_COLOR,
            )
        if isinstance(primitive, Line):
            linecap = "round" if primitive.style is Style.BARRE else "butt"
            return dwg.line(
                (primitive.x1, primitive.y1),
                (primitive.x2, primitive.y2),
                stroke=fg,
                stroke_width=primitive.stroke_width,
                stroke_linecap=linecap,
            )
        if isinstance(primitive, Circle):
            if primitive.style is Style.OUTLINE:
                return dwg.circle(
                    center=(primitive.cx, primitive.cy),
                    r=primitive.r,
                    fill="none",
                    stroke=fg,
                    stroke_width=self.OUTLINE_STROKE,
                )
            return dwg.circle(center=(primitive.cx, primitive.cy), r=primitive.r, fill=fg)
        if isinstance(primitive, Text):
            return dwg.text(
                primitive.text,
                insert=(primitive.x, primitive.y),
                fill=fg,
                font_size=f"{geometry.fret_spacing / 2:.1f}px",
                font_family=self.FONT_FAMILY,
            )
        raise TypeError(f"Unsupported primitive {primitive!r}.")


def build_song_sheet_html(title: str, diagrams: Sequence[tuple[str, str]]) -> str:
    """
    Wrap labelled SVG diagrams in a self-contained HTML document.

    Each ``(label, svg)`` pair is placed in its own ``.chord`` figure. The
    stylesheet lays diagrams out in a grid on screen and avoids splitting a
    diagram across pages when printed.
    """
    title_safe = _escape_html(title)
    heading = f"  <h1>{title_safe}</h1>\n" if title else ""
    figures = "\n".join(
        f'  <figure class="chord">{svg}<figcaption>{_escape_html(label)}</figcaption></figure>'
        for label, svg in diagrams
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: Georgia, serif;
      background: #f0f0f0;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{
      text-align: center;
      font-size: 1.6rem;
      margin-bottom: 2rem;
      color: #222;
    }}
    .sheet {{
      display: flex;
      flex-wrap: wrap;
      gap: 1.5rem;
      justify-content: center;
    }}
    .chord {{
      background: #fff;
      box-shadow: 0 2px 8px rgba(0, 0, 0, 0.15);
      margin: 0;
      padding: 0.75rem;
      text-align: center;
    }}
    .chord svg {{
      display: block;
    }}
    .chord figcaption {{
      margin-top: 0.5rem;
      font-weight: bold;
    }}
    @media print {{
      body {{
        background: #fff;
        padding: 0;
      }}
      .chord {{
        box-shadow: none;
        page-break-inside: avoid;
      }}
    }}
  </style>
</head>
<body>
{heading}  <div class="sheet">
{figures}
  </div>
</body>
</html>"""
