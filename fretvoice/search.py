"""VoicingSearch: enumerates, filters and ranks guitar fingerings for a chord."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from fretvoice.chord import fifth_intervals, required_intervals
from fretvoice.fingering import muted_shape, synthesize
from fretvoice.models import CandidateFret, ChordDiagramShape, FretValue, ScoredVoicing, Voicing
from fretvoice.pitch import normalize_pitch, pitch_class_to_midi

logger = logging.getLogger(__name__)

# ── Tuning constants ────────────────────────────────────────────────────────

#: Open-string MIDI notes, low to high: E2 A2 D3 G3 B3 E4.
STANDARD_TUNING_MIDI: tuple[int, ...] = (
    pitch_class_to_midi(4, 2),
    pitch_class_to_midi(9, 2),
    pitch_class_to_midi(2, 3),
    pitch_class_to_midi(7, 3),
    pitch_class_to_midi(11, 3),
    pitch_class_to_midi(4, 4),
)

#: Open-string pitch classes, low to high: E A D G B E.
STANDARD_TUNING: tuple[int, ...] = tuple(normalize_pitch(note) for note in STANDARD_TUNING_MIDI)


class VoicingSearch:
    """
    Exhaustive search for playable voicings of a chord in standard tuning.

    Algorithm overview
    ------------------
    1. **Window** – A start fret of 1 or below opens the window at the nut
       (fret 0, so open strings are free); any higher start fret opens it at
       that fret. The window covers ``window_span`` frets beyond its start,
       capped at ``max_fret``.

    2. **Candidates** – Each string lists the frets in the window whose pitch
       class is a chord tone.

    3. **Enumeration** – Backtracking over the six strings, each either muted
       or held at one of its candidates. Branches that cannot reach
       ``min_strings`` sounded strings, or already exceed ``max_strings``,
       are cut. A completed assignment must sound every required interval
       (root, third, fifth family), fit inside the window span, and leave no
       string muted that could have supplied a required tone.

    4. **Fifth filter** – If any voicing sounds the fifth, voicings without
       it are dropped.

    5. **Scoring** – See :meth:`score`. Results are sorted ascending.

    :meth:`best_voicing` repeats the search for every start fret and keeps the
    best candidate, lightly penalising higher positions.
    """

    WINDOW_SPAN = 3       # frets beyond the window start, inclusive
    MAX_FRET = 12         # highest fret considered anywhere
    MIN_STRINGS = 3       # fewer sounded strings is not chord-like
    MAX_STRINGS = 6
    TARGET_STRINGS = 4    # most comfortable chord density

    SPAN_WEIGHT = 2.0
    JUMP_TOLERANCE = 3    # neighbouring-string stretch allowed for free
    BASS_PENALTY = 2.0
    POSITION_WEIGHT = 0.2
    START_FRET_WEIGHT = 0.3

    def __init__(
        self,
        window_span: int = WINDOW_SPAN,
        max_fret: int = MAX_FRET,
        min_strings: int = MIN_STRINGS,
        max_strings: int = MAX_STRINGS,
        target_strings: int = TARGET_STRINGS,
    ) -> None:
        """
        Args:
            window_span:    Width of the fret window beyond its first fret.
            max_fret:       Ceiling for window ends and for the position scan.
            min_strings:    Minimum number of sounded strings.
            max_strings:    Maximum number of sounded strings.
            target_strings: Sounded-string count the scoring prefers.
        """
        if not 1 <= min_strings <= max_strings <= len(STANDARD_TUNING):
            raise ValueError(
                f"String bounds must satisfy 1 <= min ({min_strings}) <= max ({max_strings}) "
                f"<= {len(STANDARD_TUNING)}."
            )
        self.window_span = window_span
        self.max_fret = max_fret
        self.min_strings = min_strings
        self.max_strings = max_strings
        self.target_strings = target_strings
        self.tuning = STANDARD_TUNING

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _window(self, start_fret: int) -> tuple[int, int]:
        window_start = 0 if start_fret <= 1 else start_fret
        return window_start, min(window_start + self.window_span, self.max_fret)

    def _validate(self, tones: frozenset[int], root: int, start_fret: int) -> None:
        if root not in tones:
            raise ValueError(f"Root {root} is not one of the chord tones {sorted(tones)}.")
        if start_fret < 1:
            raise ValueError(f"start_fret must be >= 1, got {start_fret}.")

    def _candidates(
        self, tones: frozenset[int], window_start: int, window_end: int
    ) -> list[list[CandidateFret]]:
        """Per string, the in-window frets that sound a chord tone."""
        per_string: list[list[CandidateFret]] = []
        for open_pitch in self.tuning:
            per_string.append(
                [
                    CandidateFret(fret=fret, pitch_class=normalize_pitch(open_pitch + fret))
                    for fret in range(window_start, window_end + 1)
                    if normalize_pitch(open_pitch + fret) in tones
                ]
            )
        return per_string

    def _must_sound(
        self, required: set[int], root: int, window_start: int, window_end: int
    ) -> list[bool]:
        """Per string, whether it can reach a required interval (and so may not be muted)."""
        return [
            any(
                normalize_pitch(open_pitch + fret - root) in required
                for fret in range(window_start, window_end + 1)
            )
            for open_pitch in self.tuning
        ]

    def _has_fifth(self, voicing: Voicing, root: int, fifths: set[int]) -> bool:
        return any(
            pitch is not None and normalize_pitch(pitch - root) in fifths
            for pitch in voicing.string_pitches
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def enumerate_voicings(self, chord_tones: Iterable[int], root: int, start_fret: int) -> list[Voicing]:
        """
        Enumerate every valid voicing in the window for ``start_fret``.

        This is the raw enumeration, before the fifth filter and scoring.
        Each fret pattern appears at most once.

        Raises:
            ValueError: If ``root`` is not a chord tone or ``start_fret < 1``.
        """
        tones = frozenset(normalize_pitch(tone) for tone in chord_tones)
        root = normalize_pitch(root)
        self._validate(tones, root, start_fret)

        window_start, window_end = self._window(start_fret)
        intervals = sorted(normalize_pitch(tone - root) for tone in tones)
        required = required_intervals(intervals)
        candidates = self._candidates(tones, window_start, window_end)
        must_sound = self._must_sound(required, root, window_start, window_end)
        string_count = len(self.tuning)

        voicings: list[Voicing] = []
        seen_patterns: set[tuple[FretValue, ...]] = set()
        selection: list[CandidateFret | None] = [None] * string_count

        def record() -> None:
            active = [choice for choice in selection if choice is not None]
            if not self.min_strings <= len(active) <= self.max_strings:
                return

            present = {normalize_pitch(choice.pitch_class - root) for choice in active}
            if not required <= present:
                return

            fretted = [choice.fret for choice in active]
            min_fret, max_fret = min(fretted), max(fretted)
            if max_fret - min_fret > self.window_span:
                return

            frets = tuple(choice.fret if choice is not None else None for choice in selection)
            if any(fret is None and must for fret, must in zip(frets, must_sound)):
                return

            if frets in seen_patterns:
                return
            seen_patterns.add(frets)

            voicings.append(
                Voicing(
                    frets=frets,
                    string_pitches=tuple(
                        choice.pitch_class if choice is not None else None for choice in selection
                    ),
                    min_fret=min_fret,
                    max_fret=max_fret,
                    window_start=window_start,
                    window_end=window_end,
                )
            )

        def walk(string_index: int, active_count: int) -> None:
            if string_index == string_count:
                record()
                return

            remaining = string_count - string_index
            if active_count > self.max_strings or active_count + remaining < self.min_strings:
                return

            selection[string_index] = None
            walk(string_index + 1, active_count)

            for candidate in candidates[string_index]:
                selection[string_index] = candidate
                walk(string_index + 1, active_count + 1)
            selection[string_index] = None

        walk(0, 0)

        logger.debug(
            "Window %d-%d for root %d: %d voicing(s) from candidates %s",
            window_start,
            window_end,
            root,
            len(voicings),
            [len(c) for c in candidates],
        )
        return voicings

    def score(self, voicing: Voicing, root: int) -> float:
        """
        Playability score of a voicing; lower is easier.

        Sum of: fret span x 2; for each pair of neighbouring sounded strings,
        the fret jump beyond 3; the number of muted strings; 2 when the bass
        is not the root; the distance from the target string count; and the
        lowest fret x 0.2. A voicing with nothing sounded scores infinity.
        """
        sounded = [fret for fret in voicing.frets if fret is not None]
        if not sounded:
            return math.inf

        min_fret, max_fret = min(sounded), max(sounded)
        span_penalty = (max_fret - min_fret) * self.SPAN_WEIGHT

        jump_penalty = 0
        for current, following in zip(voicing.frets, voicing.frets[1:]):
            if current is not None and following is not None:
                diff = abs(current - following)
                if diff > self.JUMP_TOLERANCE:
                    jump_penalty += diff - self.JUMP_TOLERANCE

        bass_index = next(index for index, fret in enumerate(voicing.frets) if fret is not None)
        bass_pitch = voicing.string_pitches[bass_index]
        bass_penalty = 0.0
        if bass_pitch is not None and bass_pitch != normalize_pitch(root):
            bass_penalty = self.BASS_PENALTY

        string_penalty = abs(self.target_strings - len(sounded))
        position_penalty = min_fret * self.POSITION_WEIGHT

        return (
            span_penalty
            + jump_penalty
            + voicing.muted_count
            + bass_penalty
            + string_penalty
            + position_penalty
        )

    def search(self, chord_tones: Iterable[int], root: int, start_fret: int) -> list[ScoredVoicing]:
        """
        Rank the voicings of a chord in the window for ``start_fret``.

        Args:
            chord_tones: Pitch classes of the chord, root included.
            root:        Root pitch class.
            start_fret:  Window position, 1 or higher (1 = open position).

        Returns:
            ScoredVoicings sorted by ascending score; empty if nothing in the
            window sounds the chord completely.

        Raises:
            ValueError: If ``root`` is not a chord tone or ``start_fret < 1``.
        """
        tones = frozenset(normalize_pitch(tone) for tone in chord_tones)
        root = normalize_pitch(root)
        voicings = self.enumerate_voicings(tones, root, start_fret)

        fifths = set(fifth_intervals(sorted(normalize_pitch(tone - root) for tone in tones)))
        if any(self._has_fifth(voicing, root, fifths) for voicing in voicings):
            voicings = [voicing for voicing in voicings if self._has_fifth(voicing, root, fifths)]

        scored = [ScoredVoicing(voicing=voicing, score=self.score(voicing, root)) for voicing in voicings]
        return sorted(
            (item for item in scored if math.isfinite(item.score)),
            key=lambda item: item.score,
        )

    def best_scored(self, chord_tones: Iterable[int], root: int) -> ScoredVoicing | None:
        """
        Scan every start fret and return the best-placed voicing, if any.

        A candidate found at ``start_fret`` replaces the current best when
        ``score + start_fret * 0.3`` is below ``best.score +
        best.window_start * 0.3``. The stored best keys its penalty to the
        window actually used, so an open-position voicing keeps a zero
        position penalty wherever the scan found it.
        """
        tones = frozenset(normalize_pitch(tone) for tone in chord_tones)
        best: ScoredVoicing | None = None

        for start_fret in range(1, self.max_fret + 1):
            ranked = self.search(tones, root, start_fret)
            if not ranked:
                continue
            candidate = ranked[0]
            adjusted = candidate.score + start_fret * self.START_FRET_WEIGHT
            if best is None or adjusted < best.score + best.voicing.window_start * self.START_FRET_WEIGHT:
                best = candidate

        return best

    def best_voicing(self, chord_tones: Iterable[int], root: int) -> ChordDiagramShape:
        """
        Diagram shape of the best voicing along the neck.

        Falls back to an all-muted shape when no position yields a voicing.
        """
        tones = frozenset(normalize_pitch(tone) for tone in chord_tones)
        best = self.best_scored(tones, root)
        if best is None:
            logger.warning("No voicing found for tones %s (root %d); using muted shape", sorted(tones), root)
            return muted_shape()

        logger.debug("Best voicing %s (score %.2f)", best.voicing.pattern, best.score)
        return synthesize(best.voicing.frets)
