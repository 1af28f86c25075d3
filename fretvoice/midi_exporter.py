"""ChordMidiExporter: Writes a strummed guitar chord progression to a MIDI file."""

from midiutil import MIDIFile

from fretvoice.models import ChordDiagramShape
from fretvoice.search import STANDARD_TUNING_MIDI

# midiutil writes Format 1 files with its own tempo track in front of the
# data tracks, so track 0 here is the first data track.
TRACK_GUITAR = 0

CHANNEL_GUITAR = 0
PROGRAM_STEEL_GUITAR = 25  # General MIDI "Acoustic Guitar (steel)", zero-based


def shape_to_midi(shape: ChordDiagramShape) -> list[int]:
    """
    Absolute MIDI notes sounded by a shape, low string first.

    Muted strings are skipped; open strings sound their open-string pitch.
    """
    return [
        open_note + fret
        for open_note, fret in zip(STANDARD_TUNING_MIDI, shape.frets)
        if fret is not None
    ]


class ChordMidiExporter:
    """
    Writes a single-instrument MIDI file from a list of chord diagram shapes.

    Track layout (Format 1)
    -----------------------
    Tempo track — added by midiutil, tempo only

    Guitar track
        Each shape occupies ``beats_per_chord`` beats. Its sounded strings are
        written low to high, each delayed by ``strum`` beats, which gives a
        downstroke feel; every note rings until the next chord.
    """

    DEFAULT_TEMPO = 80           # BPM — a comfortable practice tempo
    DEFAULT_VELOCITY = 80        # MIDI velocity (0-127)
    DEFAULT_BEATS_PER_CHORD = 4  # one 4/4 bar per chord
    DEFAULT_STRUM = 0.03         # beats between neighbouring strings

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        velocity: int = DEFAULT_VELOCITY,
        beats_per_chord: float = DEFAULT_BEATS_PER_CHORD,
        strum: float = DEFAULT_STRUM,
    ) -> None:
        """
        Args:
            tempo:           Playback tempo in beats per minute.
            velocity:        MIDI note-on velocity.
            beats_per_chord: Length of each chord in beats.
            strum:           Delay in beats between successive strings.
        """
        self.tempo = tempo
        self.velocity = velocity
        self.beats_per_chord = beats_per_chord
        self.strum = strum

    def build(self, shapes: list[ChordDiagramShape]) -> MIDIFile:
        """Assemble the in-memory MIDI file without writing it."""
        midi = MIDIFile(numTracks=1, removeDuplicates=False, deinterleave=False)

        midi.addTempo(TRACK_GUITAR, 0, self.tempo)
        midi.addTrackName(TRACK_GUITAR, 0, "Guitar")
        midi.addProgramChange(TRACK_GUITAR, CHANNEL_GUITAR, 0, PROGRAM_STEEL_GUITAR)

        for index, shape in enumerate(shapes):
            chord_start = index * self.beats_per_chord
            for string_index, pitch in enumerate(shape_to_midi(shape)):
                offset = string_index * self.strum
                midi.addNote(
                    track=TRACK_GUITAR,
                    channel=CHANNEL_GUITAR,
                    pitch=pitch,
                    time=chord_start + offset,
                    duration=self.beats_per_chord - offset,
                    volume=self.velocity,
                )
        return midi

    def export(self, shapes: list[ChordDiagramShape], output_path: str) -> None:
        """
        Render shapes to a Standard MIDI File.

        Args:
            shapes:      Ordered chord shapes to play.
            output_path: Destination file path (e.g. "progression.mid").

        Raises:
            OSError: If the output file cannot be opened for writing.
        """
        midi = self.build(shapes)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
