"""Chord: triad qualities, chord-name parsing and interval helpers."""

from __future__ import annotations

from dataclasses import dataclass

from fretvoice.pitch import format_accidental, normalize_pitch, parse_note_name

# ── Interval tables ─────────────────────────────────────────────────────────

#: Triad intervals (semitones above the root) per quality.
QUALITY_INTERVALS: dict[str, tuple[int, ...]] = {
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "diminished": (0, 3, 6),
    "augmented": (0, 4, 8),
}

QUALITY_SUFFIXES: dict[str, str] = {
    "major": "",
    "minor": "m",
    "diminished": "dim",
    "augmented": "aug",
}

# Accepted spellings of each suffix when parsing chord names
_SUFFIX_ALIASES: dict[str, str] = {
    "": "major",
    "M": "major",
    "maj": "major",
    "m": "minor",
    "min": "minor",
    "-": "minor",
    "dim": "diminished",
    "o": "diminished",
    "°": "diminished",
    "aug": "augmented",
    "+": "augmented",
}

MINOR_THIRD = 3
MAJOR_THIRD = 4
FIFTH_FAMILY: frozenset[int] = frozenset({6, 7, 8})


@dataclass(frozen=True)
class Chord:
    """
    An abstract chord: a root and the set of pitch classes it contains.

    Attributes:
        root:  Pitch class of the root (0=C, ..., 11=B).
        tones: All chord tones, root included.
        name:  Display name, e.g. ``"F#m"``. Used for reference-shape lookup.
    """

    root: int
    tones: frozenset[int]
    name: str = ""

    def __post_init__(self) -> None:
        if self.root not in self.tones:
            raise ValueError(f"Root {self.root} is not one of the chord tones {sorted(self.tones)}.")

    @property
    def intervals(self) -> list[int]:
        """Chord tones as sorted intervals above the root."""
        return sorted(normalize_pitch(tone - self.root) for tone in self.tones)

    @property
    def quality(self) -> str:
        return chord_quality(self.intervals)

    @classmethod
    def from_root(cls, root: int, quality: str, name: str = "") -> Chord:
        """Build a triad of ``quality`` on ``root``."""
        if quality not in QUALITY_INTERVALS:
            raise ValueError(f"Unknown chord quality '{quality}'.")
        tones = frozenset(normalize_pitch(root + iv) for iv in QUALITY_INTERVALS[quality])
        return cls(root=normalize_pitch(root), tones=tones, name=name)


def chord_quality(intervals: list[int]) -> str:
    """Name the triad quality of a sorted interval list (``"major"`` if unknown)."""
    for quality, pattern in QUALITY_INTERVALS.items():
        if tuple(intervals) == pattern:
            return quality
    return "major"


def chord_suffix(quality: str) -> str:
    return QUALITY_SUFFIXES.get(quality, "")


def parse_chord_name(name: str) -> Chord:
    """
    Parse a triad name such as ``"C"``, ``"F#m"``, ``"Bbdim"`` or ``"Eaug"``.

    The returned chord is named canonically (``"Dbmin"`` becomes ``"Dbm"``)
    so that it matches the reference-shape table.

    Raises:
        ValueError: If the root or the quality suffix is not recognised.
    """
    trimmed = name.strip()
    if not trimmed:
        raise ValueError("Empty chord name.")

    split = 1
    while split < len(trimmed) and trimmed[split] in "#b":
        split += 1
    root_part, suffix = trimmed[:split], trimmed[split:]

    quality = _SUFFIX_ALIASES.get(suffix)
    if quality is None:
        supported = ", ".join(repr(s) for s in sorted(_SUFFIX_ALIASES) if s)
        raise ValueError(f"Unsupported chord suffix '{suffix}' in '{name}'. Use one of: {supported}.")

    root = parse_note_name(root_part)
    canonical = f"{root.letter}{format_accidental(root.accidental)}{chord_suffix(quality)}"
    return Chord.from_root(root.pitch_class, quality, name=canonical)


def fifth_intervals(intervals: list[int]) -> list[int]:
    """Intervals of the fifth family (b5, 5, #5) present in ``intervals``."""
    return [iv for iv in intervals if iv in FIFTH_FAMILY]


def required_intervals(intervals: list[int]) -> set[int]:
    """
    Intervals every accepted voicing must sound.

    The root, the first third found (minor before major) and all fifth-family
    intervals. Other chord tones are optional.
    """
    required = {0}
    third = next((iv for iv in intervals if iv in (MINOR_THIRD, MAJOR_THIRD)), None)
    if third is not None:
        required.add(third)
    required.update(fifth_intervals(intervals))
    return required
