"""VoicingStrategy: Strategy pattern for mapping chords to guitar diagram shapes."""

from abc import ABC, abstractmethod

from fretvoice.chord import Chord
from fretvoice.models import ChordDiagramShape
from fretvoice.reference_shapes import reference_shape
from fretvoice.search import VoicingSearch


class VoicingStrategy(ABC):
    """
    Abstract Strategy for choosing a fingering for a chord.

    Concrete subclasses implement ``voice()``; both share one
    :class:`VoicingSearch`, which holds configuration only.
    """

    def __init__(self, searcher: VoicingSearch | None = None) -> None:
        self.searcher = searcher if searcher is not None else VoicingSearch()

    @abstractmethod
    def voice(self, chord: Chord) -> ChordDiagramShape:
        """
        Map a Chord to a ChordDiagramShape.

        Args:
            chord: Root, tones and display name of the chord.

        Returns:
            A diagram-ready shape. Never raises for a valid chord.
        """


class SearchVoicer(VoicingStrategy):
    """Always use the best searched voicing along the neck."""

    def voice(self, chord: Chord) -> ChordDiagramShape:
        return self.searcher.best_voicing(chord.tones, chord.root)


class StandardVoicer(VoicingStrategy):
    """
    Prefer the conventional beginner shape when one exists.

    Chords whose name matches the reference table exactly (``"C"``, ``"Am"``,
    ``"F"`` ...) get the hand-authored frets and fingers; everything else
    falls back to the search.
    """

    def voice(self, chord: Chord) -> ChordDiagramShape:
        shape = reference_shape(chord.name)
        if shape is not None:
            return shape
        return self.searcher.best_voicing(chord.tones, chord.root)
