"""Data models for guitar voicings and chord diagram shapes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

#: A fret number, or ``None`` for a muted string.
FretValue = int | None


@dataclass(frozen=True)
class CandidateFret:
    """A fret inside the active window that sounds a chord tone on one string."""

    fret: int
    pitch_class: int


@dataclass(frozen=True)
class Voicing:
    """
    One fingering of a chord across all six strings.

    Attributes:
        frets:          Per-string fret number, low E first; ``None`` = muted.
        string_pitches: Per-string sounding pitch class; ``None`` = muted.
        min_fret:       Lowest sounded fret (open strings count as 0).
        max_fret:       Highest sounded fret.
        window_start:   First fret of the search window that produced it.
        window_end:     Last fret of that window (inclusive).
    """

    frets: tuple[FretValue, ...]
    string_pitches: tuple[int | None, ...]
    min_fret: int
    max_fret: int
    window_start: int
    window_end: int

    @property
    def sounded_count(self) -> int:
        return sum(1 for fret in self.frets if fret is not None)

    @property
    def muted_count(self) -> int:
        return sum(1 for fret in self.frets if fret is None)

    @property
    def pattern(self) -> str:
        """Fret pattern in tab notation, e.g. ``x-3-2-0-1-0``."""
        return "-".join("x" if fret is None else str(fret) for fret in self.frets)


@dataclass(frozen=True)
class ScoredVoicing:
    """A voicing with its playability score (lower is better)."""

    voicing: Voicing
    score: float


@dataclass(frozen=True)
class Barre:
    """A single finger laid across ``from_string``..``to_string`` at ``fret``."""

    fret: int
    from_string: int
    to_string: int
    finger: int = 1


@dataclass(frozen=True)
class ChordDiagramShape:
    """Diagram-ready fingering: frets, fingers, display start fret and barre."""

    frets: tuple[FretValue, ...]
    fingers: tuple[int | None, ...]
    start_fret: int
    barre: Barre | None = None

    @property
    def sounded_count(self) -> int:
        return sum(1 for fret in self.frets if fret is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "frets": list(self.frets),
            "fingers": list(self.fingers),
            "start_fret": self.start_fret,
            "barre": asdict(self.barre) if self.barre is not None else None,
        }


@dataclass(frozen=True)
class ChordDiagram:
    """A named chord on a scale degree, paired with its diagram shape."""

    id: str
    degree: str
    name: str
    shape: ChordDiagramShape
