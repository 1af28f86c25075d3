"""fretvoice — guitar chord voicing search and fingering synthesis."""

from fretvoice.chord import Chord, parse_chord_name
from fretvoice.fingering import assign_fingers, detect_barre, synthesize
from fretvoice.models import Barre, ChordDiagram, ChordDiagramShape, ScoredVoicing, Voicing
from fretvoice.search import STANDARD_TUNING, VoicingSearch
from fretvoice.voicing_strategy import SearchVoicer, StandardVoicer, VoicingStrategy

__version__ = "0.1.0"

__all__ = [
    "Barre",
    "Chord",
    "ChordDiagram",
    "ChordDiagramShape",
    "STANDARD_TUNING",
    "ScoredVoicing",
    "SearchVoicer",
    "StandardVoicer",
    "Voicing",
    "VoicingSearch",
    "VoicingStrategy",
    "assign_fingers",
    "detect_barre",
    "parse_chord_name",
    "synthesize",
]
