"""Pitch-class arithmetic and note-name spelling."""

from __future__ import annotations

from dataclasses import dataclass

# ── Pitch constants ─────────────────────────────────────────────────────────
SEMITONES_PER_OCTAVE = 12

#: Natural letters in scale order.
LETTERS: tuple[str, ...] = ("C", "D", "E", "F", "G", "A", "B")

LETTER_TO_PC: dict[str, int] = {
    "C": 0,
    "D": 2,
    "E": 4,
    "F": 5,
    "G": 7,
    "A": 9,
    "B": 11,
}

# Chromatic pitch class names (index 0 = C)
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


@dataclass(frozen=True)
class NoteName:
    """
    A spelled note.

    Attributes:
        letter:      Natural letter, ``"C"`` .. ``"B"``.
        accidental:  Signed semitone offset (+1 = sharp, -2 = double flat).
        pitch_class: Resulting pitch class, 0-11.
    """

    letter: str
    accidental: int
    pitch_class: int

    @property
    def name(self) -> str:
        return f"{self.letter}{format_accidental(self.accidental)}"


def normalize_pitch(value: int) -> int:
    """Fold any semitone value (including negatives) into 0-11."""
    return value % SEMITONES_PER_OCTAVE


def pitch_class_to_midi(pitch_class: int, octave: int) -> int:
    """
    Convert a pitch class (0-11) and an octave number to an absolute MIDI note.

    MIDI octave numbering: C-1 = 0, C0 = 12, C1 = 24, ... C4 (Middle C) = 60.
    """
    return (octave + 1) * SEMITONES_PER_OCTAVE + pitch_class


def format_accidental(offset: int) -> str:
    if offset > 0:
        return "#" * offset
    if offset < 0:
        return "b" * -offset
    return ""


def parse_note_name(name: str) -> NoteName:
    """
    Parse a note name such as ``"C"``, ``"f#"`` or ``"Bbb"``.

    Raises:
        ValueError: If the name is empty or contains anything other than a
                    letter A-G followed by ``#``/``b`` characters.
    """
    trimmed = name.strip()
    if not trimmed:
        raise ValueError("Empty note name.")

    letter = trimmed[0].upper()
    if letter not in LETTER_TO_PC:
        raise ValueError(f"Unknown note letter '{trimmed[0]}' in '{name}'.")

    accidental = 0
    for char in trimmed[1:]:
        if char == "#":
            accidental += 1
        elif char == "b":
            accidental -= 1
        else:
            raise ValueError(f"Unexpected character '{char}' in note name '{name}'.")

    return NoteName(
        letter=letter,
        accidental=accidental,
        pitch_class=normalize_pitch(LETTER_TO_PC[letter] + accidental),
    )


def pitch_class_name(pitch_class: int) -> str:
    """Spell a bare pitch class, using sharps for the black keys."""
    return NOTE_NAMES[normalize_pitch(pitch_class)]


def scale_notes(root_name: str, intervals: list[int]) -> list[NoteName]:
    """
    Spell a seven-note scale so that each degree uses the next letter.

    The accidental of each degree is the signed distance from its natural
    letter, kept within -5..+6, so F# major yields ``E#`` and Gb major ``Cb``.

    Args:
        root_name: Tonic, e.g. ``"Eb"``.
        intervals: Seven semitone offsets from the tonic.

    Returns:
        One NoteName per interval, in scale order.
    """
    root = parse_note_name(root_name)
    root_index = LETTERS.index(root.letter)

    notes: list[NoteName] = []
    for degree, interval in enumerate(intervals):
        letter = LETTERS[(root_index + degree) % len(LETTERS)]
        target = normalize_pitch(root.pitch_class + interval)
        diff = normalize_pitch(target - LETTER_TO_PC[letter])
        accidental = diff if diff <= 6 else diff - SEMITONES_PER_OCTAVE
        notes.append(NoteName(letter=letter, accidental=accidental, pitch_class=target))
    return notes
