"""Fingering synthesis: barre detection and finger-number assignment."""

from __future__ import annotations

from collections.abc import Sequence

from fretvoice.models import Barre, ChordDiagramShape, FretValue

STRING_COUNT = 6
MAX_FINGER = 4
BARRE_FINGER = 1


def _fretted(frets: Sequence[FretValue]) -> list[tuple[int, int]]:
    """(string index, fret) for every string held down behind a fret."""
    return [(index, fret) for index, fret in enumerate(frets) if fret is not None and fret > 0]


def detect_barre(frets: Sequence[FretValue]) -> Barre | None:
    """
    Detect an index-finger barre.

    A barre exists when two or more fretted strings share the lowest fretted
    value. It spans from the lowest to the highest of those string indices,
    including any strings in between.
    """
    fretted = _fretted(frets)
    if not fretted:
        return None

    min_fret = min(fret for _, fret in fretted)
    barre_strings = [index for index, fret in fretted if fret == min_fret]
    if len(barre_strings) < 2:
        return None

    return Barre(
        fret=min_fret,
        from_string=min(barre_strings),
        to_string=max(barre_strings),
        finger=BARRE_FINGER,
    )


def assign_fingers(frets: Sequence[FretValue]) -> tuple[int | None, ...]:
    """
    Give each distinct fretted value a finger, lowest fret first.

    Fingers run 1..4; a fifth distinct fret reuses finger 4. Open and muted
    strings get ``None``.
    """
    fingers: list[int | None] = [None] * len(frets)
    fretted = _fretted(frets)

    for rank, fret_value in enumerate(sorted({fret for _, fret in fretted})):
        finger = min(rank + 1, MAX_FINGER)
        for index, fret in fretted:
            if fret == fret_value:
                fingers[index] = finger

    return tuple(fingers)


def synthesize(
    frets: Sequence[FretValue],
    fingers: Sequence[int | None] | None = None,
) -> ChordDiagramShape:
    """
    Build a diagram shape from a per-string fret pattern.

    Args:
        frets:   Six fret values, low E first; ``None`` = muted.
        fingers: Hand-authored finger numbers. When omitted they are derived
                 with :func:`assign_fingers`. The barre is always detected
                 from ``frets``.

    Returns:
        ChordDiagramShape whose ``start_fret`` is the lowest fretted value,
        or 1 for shapes that sit at the nut.

    Raises:
        ValueError: If ``frets`` or ``fingers`` does not have six entries.
    """
    if len(frets) != STRING_COUNT:
        raise ValueError(f"Expected {STRING_COUNT} fret values, got {len(frets)}.")
    if fingers is not None and len(fingers) != STRING_COUNT:
        raise ValueError(f"Expected {STRING_COUNT} finger values, got {len(fingers)}.")

    fretted = [fret for _, fret in _fretted(frets)]
    min_fret = min(fretted) if fretted else 1

    return ChordDiagramShape(
        frets=tuple(frets),
        fingers=tuple(fingers) if fingers is not None else assign_fingers(frets),
        start_fret=min_fret if min_fret > 1 else 1,
        barre=detect_barre(frets),
    )


def muted_shape() -> ChordDiagramShape:
    """All strings muted: the placeholder shown when no voicing exists."""
    return synthesize([None] * STRING_COUNT)
