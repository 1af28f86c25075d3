"""Unit tests for VoicingSearch enumeration, scoring and position scan."""

import math

import pytest

from fretvoice.chord import Chord, required_intervals
from fretvoice.fingering import synthesize
from fretvoice.models import Voicing
from fretvoice.pitch import normalize_pitch
from fretvoice.search import STANDARD_TUNING, STANDARD_TUNING_MIDI, VoicingSearch

C_MAJOR = frozenset({0, 4, 7})
ALL_TRIADS = [Chord.from_root(root, quality) for root in range(12) for quality in ("major", "minor")]


def _voicing(frets: tuple, pitches: tuple) -> Voicing:
    sounded = [fret for fret in frets if fret is not None]
    return Voicing(
        frets=frets,
        string_pitches=pitches,
        min_fret=min(sounded, default=0),
        max_fret=max(sounded, default=0),
        window_start=0,
        window_end=3,
    )


def test_standard_tuning_pitch_classes() -> None:
    assert STANDARD_TUNING == (4, 9, 2, 7, 11, 4)
    assert len(STANDARD_TUNING_MIDI) == 6


def test_c_major_open_position_top_result() -> None:
    ranked = VoicingSearch().search(C_MAJOR, 0, 1)
    top = ranked[0].voicing

    assert top.frets == (0, 3, 2, 0, 1, 0)
    assert ranked[0].score == pytest.approx(10.0)
    assert top.max_fret <= 3
    assert {pc for pc in top.string_pitches if pc is not None} == {0, 4, 7}
    assert top.sounded_count >= 4
    assert top.muted_count <= 2


def test_c_major_open_position_forbids_muting_capable_strings() -> None:
    # Every string can reach C, E or G in frets 0-3, so none may be muted.
    ranked = VoicingSearch().search(C_MAJOR, 0, 1)
    assert [item.voicing.pattern for item in ranked] == [
        "0-3-2-0-1-0",
        "0-3-2-0-1-3",
        "3-3-2-0-1-0",
        "3-3-2-0-1-3",
    ]


def test_results_sorted_ascending() -> None:
    ranked = VoicingSearch().search({2, 5, 9}, 2, 5)
    scores = [item.score for item in ranked]
    assert scores == sorted(scores)


def test_window_above_the_nut() -> None:
    ranked = VoicingSearch().search({7, 11, 2}, 7, 5)
    assert ranked
    for item in ranked:
        assert item.voicing.window_start == 5
        assert item.voicing.window_end == 8
        assert item.voicing.min_fret >= 5


def test_window_capped_at_max_fret() -> None:
    voicings = VoicingSearch().enumerate_voicings({4, 8, 11}, 4, 11)
    for voicing in voicings:
        assert voicing.window_end == 12


@pytest.mark.parametrize("chord", ALL_TRIADS, ids=lambda c: f"{c.root}-{c.quality}")
def test_every_returned_voicing_is_complete_and_compact(chord: Chord) -> None:
    searcher = VoicingSearch()
    required = required_intervals(chord.intervals)

    for start_fret in (1, 4, 8):
        for item in searcher.search(chord.tones, chord.root, start_fret):
            voicing = item.voicing
            sounded = {normalize_pitch(pc - chord.root) for pc in voicing.string_pitches if pc is not None}
            assert required <= sounded
            assert voicing.max_fret - voicing.min_fret <= 3
            assert 3 <= voicing.sounded_count <= 6
            assert math.isfinite(item.score)


def test_enumeration_has_no_duplicate_patterns() -> None:
    searcher = VoicingSearch()
    for start_fret in range(1, 13):
        voicings = searcher.enumerate_voicings({9, 0, 4}, 9, start_fret)
        patterns = [voicing.frets for voicing in voicings]
        assert len(patterns) == len(set(patterns))


def test_string_pitches_match_tuning() -> None:
    for voicing in VoicingSearch().enumerate_voicings({11, 2, 6}, 11, 2):
        for open_pitch, fret, pitch in zip(STANDARD_TUNING, voicing.frets, voicing.string_pitches):
            if fret is None:
                assert pitch is None
            else:
                assert pitch == normalize_pitch(open_pitch + fret)


def test_fifth_completeness() -> None:
    searcher = VoicingSearch()
    for start_fret in range(1, 13):
        for item in searcher.search({0, 3, 6}, 0, start_fret):
            intervals = {normalize_pitch(pc) for pc in item.voicing.string_pitches if pc is not None}
            assert 6 in intervals


def test_search_is_idempotent() -> None:
    searcher = VoicingSearch()
    assert searcher.search({4, 7, 11}, 4, 1) == searcher.search({4, 7, 11}, 4, 1)
    assert VoicingSearch().best_voicing({1, 4, 8}, 1) == VoicingSearch().best_voicing({1, 4, 8}, 1)


def test_search_accepts_unnormalised_tones() -> None:
    searcher = VoicingSearch()
    assert searcher.search([12, 16, 19], 12, 1) == searcher.search([0, 4, 7], 0, 1)


def test_search_rejects_root_outside_chord() -> None:
    with pytest.raises(ValueError):
        VoicingSearch().search(C_MAJOR, 2, 1)


def test_search_rejects_start_fret_below_one() -> None:
    with pytest.raises(ValueError):
        VoicingSearch().search(C_MAJOR, 0, 0)


def test_constructor_rejects_inverted_string_bounds() -> None:
    with pytest.raises(ValueError):
        VoicingSearch(min_strings=5, max_strings=4)


def test_score_open_d_shape() -> None:
    voicing = _voicing((None, None, 0, 2, 3, 2), (None, None, 2, 9, 2, 6))
    # span 3*2 + 2 muted; root in the bass; four strings; open position.
    assert VoicingSearch().score(voicing, 2) == pytest.approx(8.0)


def test_score_penalises_jumps_and_bass() -> None:
    voicing = _voicing((None, 1, 6, None, None, None), (None, 10, 8, None, None, None))
    # span 5*2 + jump 2 + 4 muted + bass 2 + strings 2 + position 0.2
    assert VoicingSearch().score(voicing, 8) == pytest.approx(20.2)


def test_score_empty_voicing_is_infinite() -> None:
    voicing = _voicing((None,) * 6, (None,) * 6)
    assert VoicingSearch().score(voicing, 0) == math.inf


def test_target_strings_is_configurable() -> None:
    voicing = _voicing((None, None, 0, 2, 3, 2), (None, None, 2, 9, 2, 6))
    assert VoicingSearch(target_strings=6).score(voicing, 2) == pytest.approx(10.0)


@pytest.mark.parametrize("chord", ALL_TRIADS, ids=lambda c: f"{c.root}-{c.quality}")
def test_best_voicing_for_every_major_and_minor_triad(chord: Chord) -> None:
    shape = VoicingSearch().best_voicing(chord.tones, chord.root)
    assert 3 <= shape.sounded_count <= 6


def test_best_voicing_is_synthesized_from_best_scored() -> None:
    searcher = VoicingSearch()
    best = searcher.best_scored({7, 10, 2}, 7)
    assert best is not None
    assert searcher.best_voicing({7, 10, 2}, 7) == synthesize(best.voicing.frets)


def test_best_scored_beats_open_position_with_higher_windows() -> None:
    searcher = VoicingSearch()
    best = searcher.best_scored(C_MAJOR, 0)
    assert best is not None
    open_best = searcher.search(C_MAJOR, 0, 1)[0]
    assert best.score <= open_best.score


@pytest.mark.parametrize(
    ("tones", "root", "frets"),
    [
        ({10, 2, 5}, 10, (1, 1, 3, 3, 3, 1)),
        ({1, 4, 7}, 1, (0, None, 2, 0, 2, 0)),
        ({11, 3, 7}, 11, (3, 2, 1, 0, 0, 3)),
    ],
    ids=["Bb", "C#dim", "Baug"],
)
def test_best_voicing_keys_stored_penalty_to_its_window_start(tones: set, root: int, frets: tuple) -> None:
    # An open-position best found early keeps a zero position penalty, so a
    # later window must beat its raw score by the full start-fret penalty.
    assert VoicingSearch().best_voicing(tones, root).frets == frets


def test_search_may_omit_extension_tones() -> None:
    ranked = VoicingSearch().search({0, 4, 7, 10}, 0, 1)
    without_seventh = [
        item.voicing for item in ranked if 10 not in item.voicing.string_pitches
    ]
    assert without_seventh
    assert (0, 3, 2, 0, 1, 0) in [voicing.frets for voicing in without_seventh]


def test_score_without_bass_pitch_skips_bass_penalty() -> None:
    voicing = _voicing((0, 2, 2, None, None, None), (None, None, None, None, None, None))
    # span 2*2 + 3 muted + strings 1; no bass pitch to compare with the root.
    assert VoicingSearch().score(voicing, 4) == pytest.approx(8.0)


def test_standard_tuning_midi_notes() -> None:
    assert STANDARD_TUNING_MIDI == (40, 45, 50, 55, 59, 64)


def test_best_voicing_falls_back_to_muted_shape() -> None:
    # With only frets 0-1 available F# major cannot reach three strings.
    shape = VoicingSearch(max_fret=1).best_voicing({6, 10, 1}, 6)
    assert shape.frets == (None,) * 6
    assert shape.barre is None
