"""Diatonic triads of a key, each paired with a guitar diagram."""

from __future__ import annotations

from fretvoice.chord import Chord, chord_quality, chord_suffix
from fretvoice.models import ChordDiagram
from fretvoice.pitch import normalize_pitch, scale_notes
from fretvoice.voicing_strategy import StandardVoicer, VoicingStrategy

MAJOR_SCALE: list[int] = [0, 2, 4, 5, 7, 9, 11]
NATURAL_MINOR_SCALE: list[int] = [0, 2, 3, 5, 7, 8, 10]

ROMAN_MAJOR: list[str] = ["I", "ii", "iii", "IV", "V", "vi", "vii°"]
ROMAN_MINOR: list[str] = ["i", "ii°", "III", "iv", "v", "VI", "VII"]

TONALITIES = ("major", "minor")


def split_key_name(key_name: str, tonality: str = "major") -> tuple[str, str]:
    """
    Separate a key such as ``"F#m"`` into its tonic and tonality.

    A trailing ``m`` always means minor; otherwise ``tonality`` is used.

    Raises:
        ValueError: If ``tonality`` is neither ``"major"`` nor ``"minor"``.
    """
    if tonality not in TONALITIES:
        raise ValueError(f"Unknown tonality '{tonality}'. Use 'major' or 'minor'.")
    trimmed = key_name.strip()
    if len(trimmed) > 1 and trimmed.endswith("m"):
        return trimmed[:-1], "minor"
    return trimmed, tonality


def diatonic_chords(
    key_name: str,
    tonality: str = "major",
    voicer: VoicingStrategy | None = None,
) -> list[ChordDiagram]:
    """
    Build the seven triads of a key with their diagrams.

    Args:
        key_name: Tonic, optionally with a minor suffix (``"Eb"``, ``"C#m"``).
        tonality: ``"major"`` or ``"minor"``; ignored when ``key_name`` ends
                  in ``m``.
        voicer:   Strategy used for each diagram (defaults to StandardVoicer).

    Returns:
        One ChordDiagram per scale degree, tonic first.

    Raises:
        ValueError: If the key or tonality cannot be parsed.
    """
    tonic, tonality = split_key_name(key_name, tonality)
    intervals = MAJOR_SCALE if tonality == "major" else NATURAL_MINOR_SCALE
    degree_labels = ROMAN_MAJOR if tonality == "major" else ROMAN_MINOR
    notes = scale_notes(tonic, intervals)
    voicer = voicer if voicer is not None else StandardVoicer()

    diagrams: list[ChordDiagram] = []
    for index, note in enumerate(notes):
        tones = [notes[(index + step) % len(notes)].pitch_class for step in (0, 2, 4)]
        quality = chord_quality(sorted(normalize_pitch(tone - note.pitch_class) for tone in tones))
        name = f"{note.name}{chord_suffix(quality)}"
        chord = Chord(root=note.pitch_class, tones=frozenset(tones), name=name)

        diagrams.append(
            ChordDiagram(
                id=f"{tonality}-{index}-{name}",
                degree=degree_labels[index],
                name=name,
                shape=voicer.voice(chord),
            )
        )
    return diagrams
