"""fretvoice CLI entry point."""

import logging
import sys

import click

from fretvoice import __version__
from fretvoice.chord import Chord, parse_chord_name
from fretvoice.diatonic import TONALITIES, diatonic_chords
from fretvoice.midi_exporter import ChordMidiExporter
from fretvoice.renderers import build_renderer
from fretvoice.search import VoicingSearch
from fretvoice.voicing_strategy import SearchVoicer, StandardVoicer, VoicingStrategy

OUTPUT_FORMATS = ["text", "json"]


def _get_voicer(search_only: bool) -> VoicingStrategy:
    """Return the appropriate VoicingStrategy for the requested mode."""
    if search_only:
        return SearchVoicer()
    return StandardVoicer()


def _parse_or_exit(name: str) -> Chord:
    try:
        return parse_chord_name(name)
    except ValueError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretvoice")
@click.option("--verbose", "-v", is_flag=True, help="Log search details to stderr.")
def main(verbose: bool) -> None:
    """fretvoice — playable guitar chord voicings in standard tuning."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


# ── chord subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("name")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="text",
    show_default=True,
    help="Chart output format.",
)
@click.option(
    "--search-only",
    is_flag=True,
    help="Ignore the built-in beginner shapes and always use the searched voicing.",
)
def chord(name: str, output_format: str, search_only: bool) -> None:
    """
    Show the diagram for one chord.

    NAME is a triad such as C, F#m, Bbdim or Eaug.

    \b
    Examples:
      fretvoice chord Am
      fretvoice chord F --search-only
      fretvoice chord C#m --format json
    """
    parsed = _parse_or_exit(name)
    shape = _get_voicer(search_only).voice(parsed)
    click.echo(build_renderer(output_format).render(title=parsed.name, shape=shape))


# ── search subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("name")
@click.option(
    "--start-fret",
    type=click.IntRange(1, VoicingSearch.MAX_FRET),
    default=1,
    show_default=True,
    help="Window position; 1 includes open strings.",
)
@click.option(
    "--limit",
    type=click.IntRange(1, None),
    default=5,
    show_default=True,
    help="Number of ranked voicings to list.",
)
def search(name: str, start_fret: int, limit: int) -> None:
    """
    List the ranked voicings of a chord at one fret window.

    \b
    Examples:
      fretvoice search G
      fretvoice search Bbm --start-fret 6 --limit 10
    """
    parsed = _parse_or_exit(name)
    ranked = VoicingSearch().search(parsed.tones, parsed.root, start_fret)

    if not ranked:
        click.echo(f"No voicing of {parsed.name} fits the window at fret {start_fret}.", err=True)
        sys.exit(1)

    window = ranked[0].voicing
    click.echo(f"{parsed.name}  (frets {window.window_start}-{window.window_end}, {len(ranked)} voicing(s))")
    for rank, item in enumerate(ranked[:limit], start=1):
        click.echo(f"  {rank:>2}. {item.voicing.pattern:<18} score {item.score:6.2f}")


# ── key subcommand ─────────────────────────────────────────────────────────────

@main.command()
@click.argument("key_name", metavar="KEY")
@click.option(
    "--tonality",
    type=click.Choice(TONALITIES, case_sensitive=False),
    default="major",
    show_default=True,
    help="Scale of the key. A KEY ending in 'm' is always minor.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="text",
    show_default=True,
    help="Chart output format.",
)
def key(key_name: str, tonality: str, output_format: str) -> None:
    """
    Show the diagrams of the seven diatonic triads of a key.

    \b
    Examples:
      fretvoice key G
      fretvoice key Ebm
      fretvoice key A --tonality minor --format json
    """
    try:
        diagrams = diatonic_chords(key_name, tonality.lower())
    except ValueError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo(build_renderer(output_format).render_diagrams(diagrams))


# ── midi subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("names", nargs=-1, required=True, metavar="CHORD...")
@click.option(
    "--output",
    "-o",
    default="progression.mid",
    show_default=True,
    metavar="PATH",
    help="Destination MIDI file path.",
)
@click.option(
    "--tempo",
    type=click.IntRange(20, 300),
    default=ChordMidiExporter.DEFAULT_TEMPO,
    show_default=True,
    help="Playback tempo in BPM.",
)
@click.option(
    "--beats",
    type=click.FloatRange(0.5, 16),
    default=ChordMidiExporter.DEFAULT_BEATS_PER_CHORD,
    show_default=True,
    help="Beats each chord rings for.",
)
@click.option("--search-only", is_flag=True, help="Ignore the built-in beginner shapes.")
def midi(names: tuple[str, ...], output: str, tempo: int, beats: float, search_only: bool) -> None:
    """
    Strum a chord progression into a MIDI file.

    \b
    Examples:
      fretvoice midi C G Am F
      fretvoice midi Em C G D -o song.mid --tempo 100 --beats 2
    """
    voicer = _get_voicer(search_only)
    chords = [_parse_or_exit(name) for name in names]

    click.echo(f"fretvoice v{__version__}")
    click.echo(f"  Chords : {' '.join(c.name for c in chords)}")
    click.echo(f"  Tempo  : {tempo} BPM  |  {beats:g} beat(s) per chord")
    click.echo()

    shapes = []
    for parsed in chords:
        shape = voicer.voice(parsed)
        pattern = "-".join("x" if fret is None else str(fret) for fret in shape.frets)
        click.echo(f"        {parsed.name:<6} {pattern}")
        shapes.append(shape)

    exporter = ChordMidiExporter(tempo=tempo, beats_per_chord=beats)
    try:
        exporter.export(shapes, output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write MIDI file — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Done!  Open '{output}' in GarageBand, MuseScore, or any MIDI player.")
