"""Unit tests for the reference-shape table and voicing strategies."""

from fretvoice.chord import parse_chord_name
from fretvoice.models import Barre
from fretvoice.reference_shapes import REFERENCE_SHAPES, reference_shape
from fretvoice.search import VoicingSearch
from fretvoice.voicing_strategy import SearchVoicer, StandardVoicer


def test_reference_f_major_barre_shape() -> None:
    shape = StandardVoicer().voice(parse_chord_name("F"))
    assert shape.frets == (1, 3, 3, 2, 1, 1)
    assert shape.fingers == (1, 3, 4, 2, 1, 1)
    assert shape.start_fret == 1
    assert shape.barre == Barre(fret=1, from_string=0, to_string=5, finger=1)


def test_reference_c_major_overrides_search() -> None:
    shape = StandardVoicer().voice(parse_chord_name("C"))
    assert shape.frets == (None, 3, 2, 0, 1, 0)
    assert shape.fingers == (None, 3, 2, None, 1, None)
    assert shape.barre is None


def test_reference_bm_starts_at_second_fret() -> None:
    shape = reference_shape("Bm")
    assert shape is not None
    assert shape.start_fret == 2
    assert shape.barre == Barre(fret=2, from_string=1, to_string=5)


def test_every_reference_shape_sounds_its_chord() -> None:
    open_strings = (4, 9, 2, 7, 11, 4)
    for name, (frets, _) in REFERENCE_SHAPES.items():
        chord = parse_chord_name(name)
        sounded = {(pc + fret) % 12 for pc, fret in zip(open_strings, frets) if fret is not None}
        assert sounded == set(chord.tones), name


def test_reference_lookup_is_exact() -> None:
    assert reference_shape("Cm") is None
    assert reference_shape("c") is None
    assert reference_shape("Bb") is None


def test_standard_voicer_falls_back_to_search() -> None:
    chord = parse_chord_name("Ebm")
    expected = VoicingSearch().best_voicing(chord.tones, chord.root)
    assert StandardVoicer().voice(chord) == expected


def test_search_voicer_ignores_reference_table() -> None:
    chord = parse_chord_name("G")
    expected = VoicingSearch().best_voicing(chord.tones, chord.root)
    assert SearchVoicer().voice(chord) == expected


def test_voicer_uses_injected_searcher() -> None:
    searcher = VoicingSearch(max_fret=1)
    voicer = SearchVoicer(searcher)
    assert voicer.searcher is searcher
    assert voicer.voice(parse_chord_name("F#")).frets == (None,) * 6
