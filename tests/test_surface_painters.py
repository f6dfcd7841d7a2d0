"""Unit tests for the SVG painter and the HTML song sheet."""

from chordomatic.chord_shape import ChordDiagramModel
from chordomatic.diagram_models import RenderGeometry
from chordomatic.diagram_renderer import render
from chordomatic.surface_painters import SvgPainter, build_song_sheet_html

GEOMETRY = RenderGeometry(width=140, height=100)


def _svg(encoding: str, barre: int = 0) -> str:
    model = ChordDiagramModel.from_encoding("test", encoding, barre)
    return SvgPainter().paint(render(model, GEOMETRY), GEOMETRY)


def test_svg_painter_extension() -> None:
    assert SvgPainter().default_extension == ".svg"


def test_svg_painter_produces_svg_root() -> None:
    svg = _svg("x32010")
    assert svg.startswith("<svg")
    assert svg.rstrip().endswith("</svg>")


def test_svg_painter_element_counts() -> None:
    svg = _svg("x32010")
    assert svg.count("<rect") == 1
    assert svg.count("<circle") == 5
    # 6 strings + 5 frets + 2 muted strokes + nut
    assert svg.count("<line") == 14
    assert "<text" not in svg


def test_svg_painter_outline_circles_are_unfilled() -> None:
    svg = _svg("000000")
    assert svg.count('fill="none"') == 6


def test_svg_painter_offset_label() -> None:
    svg = _svg("57756x", 5)
    assert "<text" in svg
    assert ">5</text>" in svg
    assert 'stroke-linecap="round"' in svg


def test_song_sheet_title_and_h1() -> None:
    html = build_song_sheet_html("My Song", [("Am", "<svg></svg>")])
    assert "<title>My Song</title>" in html
    assert "<h1>My Song</h1>" in html


def test_song_sheet_empty_title_no_h1() -> None:
    html = build_song_sheet_html("", [("Am", "<svg></svg>")])
    assert "<h1>" not in html


def test_song_sheet_escapes_title_and_labels() -> None:
    html = build_song_sheet_html("Fur & <Feathers>", [("A<b>", "<svg></svg>")])
    assert "Fur &amp; &lt;Feathers&gt;" in html
    assert "<figcaption>A&lt;b&gt;</figcaption>" in html


def test_song_sheet_one_figure_per_chord() -> None:
    html = build_song_sheet_html("Song", [("Am", "<svg>1</svg>"), ("Dm7", "<svg>2</svg>")])
    assert html.count('<figure class="chord">') == 2
    assert html.index("<svg>1</svg>") < html.index("<svg>2</svg>")


def test_song_sheet_is_printable_html() -> None:
    html = build_song_sheet_html("Song", [])
    assert html.startswith("<!DOCTYPE html>")
    assert "@media print" in html
    assert "</html>" in html
