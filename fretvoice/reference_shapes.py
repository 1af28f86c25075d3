"""Hand-authored open and first-position shapes for common chords."""

from __future__ import annotations

from fretvoice.fingering import synthesize
from fretvoice.models import ChordDiagramShape, FretValue

#: Exact chord name -> (frets, fingers), low E first. ``None`` = muted / open.
REFERENCE_SHAPES: dict[str, tuple[tuple[FretValue, ...], tuple[int | None, ...]]] = {
    "C": ((None, 3, 2, 0, 1, 0), (None, 3, 2, None, 1, None)),
    "D": ((None, None, 0, 2, 3, 2), (None, None, None, 1, 3, 2)),
    "E": ((0, 2, 2, 1, 0, 0), (None, 2, 3, 1, None, None)),
    "G": ((3, 2, 0, 0, 0, 3), (2, 1, None, None, None, 3)),
    "A": ((None, 0, 2, 2, 2, 0), (None, None, 1, 2, 3, None)),
    "Am": ((None, 0, 2, 2, 1, 0), (None, None, 2, 3, 1, None)),
    "Em": ((0, 2, 2, 0, 0, 0), (None, 2, 3, None, None, None)),
    "Dm": ((None, None, 0, 2, 3, 1), (None, None, None, 2, 3, 1)),
    "F": ((1, 3, 3, 2, 1, 1), (1, 3, 4, 2, 1, 1)),
    "Bm": ((None, 2, 4, 4, 3, 2), (None, 1, 3, 4, 2, 1)),
    "B": ((None, 2, 4, 4, 4, 2), (None, 1, 3, 3, 3, 1)),
}


def reference_shape(name: str) -> ChordDiagramShape | None:
    """Return the canonical shape for ``name`` (exact match), or ``None``."""
    entry = REFERENCE_SHAPES.get(name)
    if entry is None:
        return None
    frets, fingers = entry
    return synthesize(frets, fingers)
