"""chordomatic CLI entry point."""

import math
import re
import sys

import click

from chordomatic import __version__
from chordomatic.catalog import load_catalog
from chordomatic.chord_shape import ChordDiagramModel, ChordShape
from chordomatic.diagram_models import RenderGeometry
from chordomatic.diagram_renderer import render
from chordomatic.midi_exporter import MidiExporter, parse_time_signature
from chordomatic.song import AddResult, SongBuilder, SongChord
from chordomatic.surface_painters import SvgPainter, build_song_sheet_html

DEFAULT_WIDTH = 140
DEFAULT_HEIGHT = 175


def _name_to_filename(name: str, extension: str) -> str:
    """Turn a chord or song name into a safe filename with ``extension``."""
    sanitized = name.replace("#", "sharp")
    sanitized = re.sub(r"[^\w\s-]", "", sanitized)
    sanitized = re.sub(r"\s+", "_", sanitized.strip())
    return f"{sanitized or 'chord'}{extension}"


def _paint_svg(shape: ChordShape, geometry: RenderGeometry) -> str:
    primitives = render(ChordDiagramModel(shape), geometry)
    return SvgPainter().paint(primitives, geometry)


def _build_song(tokens: tuple[str, ...]) -> tuple[SongBuilder, list[SongChord]]:
    """
    Add each ``KEY:SUFFIX`` token to a new song, reporting duplicates.

    Returns the builder and the song chords in the order they were given
    (the builder itself keeps the most recent chord first).
    """
    builder = SongBuilder(load_catalog())
    for token in tokens:
        try:
            song_chord = SongChord.parse(token)
            builder.select_key(song_chord.key)
            result = builder.select_chord_suffix(song_chord.suffix)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="CHORDS") from exc
        if result is AddResult.ALREADY_PRESENT:
            click.echo(f"  WARNING: '{song_chord.name}' is already in the song, skipped.", err=True)
    return builder, list(reversed(builder.song_chords))


def _geometry(width: float, height: float) -> RenderGeometry:
    try:
        return RenderGeometry(width, height)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordomatic")
def main() -> None:
    """chordomatic — build songs from chords and draw fretboard diagrams."""


# ── keys / chords subcommands ──────────────────────────────────────────────────

@main.command()
def keys() -> None:
    """List the keys chords can be selected in."""
    click.echo(" ".join(load_catalog().keys))


@main.command()
def chords() -> None:
    """
    List the chord shapes in the catalog.

    Frets read low string to high: x = muted, 0 = open, 1-9 and a-o = frets 1-24.
    """
    for shape in load_catalog():
        barre = f"  barre {shape.barre_fret}" if shape.barre_fret else ""
        click.echo(f"  {shape.suffix:<8} {shape.encoding}{barre}")


# ── diagram subcommand ─────────────────────────────────────────────────────────

width_option = click.option(
    "--width",
    type=click.FloatRange(min=1),
    default=DEFAULT_WIDTH,
    show_default=True,
    help="Diagram width in pixels.",
)
height_option = click.option(
    "--height",
    type=click.FloatRange(min=1),
    default=DEFAULT_HEIGHT,
    show_default=True,
    help="Diagram height in pixels.",
)


@main.command()
@click.argument("suffix")
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination SVG file path. Defaults to <suffix>.svg.",
)
@width_option
@height_option
def diagram(suffix: str, output: str | None, width: float, height: float) -> None:
    """
    Draw the catalog chord SUFFIX as an SVG fretboard diagram.

    \b
    Examples:
      chordomatic diagram m7
      chordomatic diagram major -o major.svg --width 280 --height 350
    """
    catalog = load_catalog()
    if suffix not in catalog.shapes:
        raise click.BadParameter(
            f"Unknown chord suffix '{suffix}'. Run 'chordomatic chords' to list them.",
            param_hint="SUFFIX",
        )
    geometry = _geometry(width, height)
    resolved_output = output if output is not None else _name_to_filename(suffix, ".svg")

    click.echo(f"[1/2] Rendering '{suffix}' ({catalog.shape(suffix).encoding})...")
    svg = _paint_svg(catalog.shape(suffix), geometry)

    click.echo(f"[2/2] Writing SVG file → '{resolved_output}'...")
    try:
        with open(resolved_output, "w", encoding="utf-8") as fh:
            fh.write(svg)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write SVG file — {exc}", err=True)
        sys.exit(1)

    click.echo(f"Done!  Open '{resolved_output}' in any browser or image viewer.")


# ── sheet subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("chord_tokens", metavar="CHORDS...", nargs=-1, required=True)
@click.option("--title", default="", metavar="TEXT", help="Title shown at the top of the sheet.")
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination HTML file path. Defaults to <title>.html or song.html.",
)
@width_option
@height_option
def sheet(
    chord_tokens: tuple[str, ...],
    title: str,
    output: str | None,
    width: float,
    height: float,
) -> None:
    """
    Draw every chord of a song on one printable HTML sheet.

    CHORDS are KEY:SUFFIX pairs, e.g. A:m7 or C#:major.

    \b
    Examples:
      chordomatic sheet A:m D:m7 E:major
      chordomatic sheet A:m D:m7 --title "My Song" -o my_song.html
    """
    geometry = _geometry(width, height)
    builder, song_chords = _build_song(chord_tokens)
    resolved_output = output if output is not None else _name_to_filename(title or "song", ".html")

    click.echo(f"chordomatic v{__version__}")
    click.echo(f"  Chords : {' '.join(chord.name for chord in song_chords)}")
    click.echo(f"  Output : {resolved_output}")
    click.echo()

    click.echo(f"[1/2] Rendering {len(song_chords)} diagram(s)...")
    diagrams = [
        (song_chord.name, _paint_svg(builder.shape_for(song_chord), geometry))
        for song_chord in song_chords
    ]

    click.echo("[2/2] Writing HTML file...")
    try:
        with open(resolved_output, "w", encoding="utf-8") as fh:
            fh.write(build_song_sheet_html(title, diagrams))
    except OSError as exc:
        click.echo(f"  ERROR: Could not write HTML file — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Done!  Open '{resolved_output}' in any browser. Use Print → Save as PDF.")


# ── midi subcommand ────────────────────────────────────────────────────────────

def _parse_time_signature(ctx: click.Context, param: click.Parameter, value: str) -> tuple[int, int]:
    try:
        return parse_time_signature(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _parse_durations(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> list[float] | None:
    if value is None:
        return None
    try:
        durations = [float(item) for item in value.split(",")]
    except ValueError as exc:
        raise click.BadParameter(f"Expected comma-separated beat counts, got {value!r}.") from exc
    if not all(math.isfinite(beats) and beats > 0 for beats in durations):
        raise click.BadParameter(f"Beat counts must be positive numbers, got {value!r}.")
    return durations


@main.command()
@click.argument("chord_tokens", metavar="CHORDS...", nargs=-1, required=True)
@click.option("--title", default="", metavar="TEXT", help="Track name stored in the MIDI file.")
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination MIDI file path. Defaults to <title>.mid or song.mid.",
)
@click.option(
    "--tempo",
    type=click.IntRange(20, 300),
    default=MidiExporter.DEFAULT_TEMPO,
    show_default=True,
    help="Playback tempo in BPM.",
)
@click.option(
    "--beats",
    type=click.FloatRange(min=0.25, max=64),
    default=MidiExporter.DEFAULT_BEATS_PER_CHORD,
    show_default=True,
    help="Beats each chord is held for when --durations is not given.",
)
@click.option(
    "--durations",
    default=None,
    metavar="BEATS,...",
    callback=_parse_durations,
    help="Comma-separated beats for each chord, in song order, e.g. 4,2,2.",
)
@click.option(
    "--time-signature",
    "time_signature",
    default="4/4",
    show_default=True,
    metavar="N/D",
    callback=_parse_time_signature,
    help="Time signature written to the MIDI file.",
)
def midi(
    chord_tokens: tuple[str, ...],
    title: str,
    output: str | None,
    tempo: int,
    beats: float,
    durations: list[float] | None,
    time_signature: tuple[int, int],
) -> None:
    """
    Write a song as a guitar MIDI file, one block chord per entry.

    CHORDS are KEY:SUFFIX pairs, e.g. A:m7 or C#:major.

    \b
    Examples:
      chordomatic midi A:m D:m7 E:major
      chordomatic midi A:m D:m7 --tempo 80 --beats 2 -o practice.mid
      chordomatic midi A:m D:m7 E:major --durations 3,3,6 --time-signature 3/4
    """
    if math.isnan(beats):
        raise click.BadParameter("Beats must be a number.", param_hint="'--beats'")
    builder, song_chords = _build_song(chord_tokens)
    if durations is not None and len(durations) != len(song_chords):
        raise click.BadParameter(
            f"Got {len(durations)} beat count(s) for {len(song_chords)} chord(s) in the song.",
            param_hint="'--durations'",
        )
    resolved_output = output if output is not None else _name_to_filename(title or "song", ".mid")

    click.echo(f"[1/1] Writing MIDI file → '{resolved_output}'...")
    exporter = MidiExporter(tempo=tempo, beats_per_chord=beats, time_signature=time_signature)
    try:
        exporter.export(
            [builder.shape_for(song_chord) for song_chord in song_chords],
            resolved_output,
            title=title,
            durations=durations,
        )
    except OSError as exc:
        click.echo(f"  ERROR: Could not write MIDI file — {exc}", err=True)
        sys.exit(1)

    click.echo(f"Done!  Open '{resolved_output}' in GarageBand, MuseScore, or any MIDI player.")
