"""Renderer implementations for chord diagram output formats."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import asdict
from typing import Any

from fretvoice.models import ChordDiagram, ChordDiagramShape
from fretvoice.pitch import pitch_class_name
from fretvoice.search import STANDARD_TUNING

MIN_FRET_ROWS = 4


class ChartRenderer(ABC):
    """Abstract chord chart renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, *, title: str, shape: ChordDiagramShape) -> str:
        """Render one shape into a content string."""

    def render_diagrams(self, diagrams: list[ChordDiagram]) -> str:
        """Render several named diagrams, e.g. the triads of a key."""
        return "\n\n".join(
            self.render(title=f"{diagram.degree}  {diagram.name}", shape=diagram.shape)
            for diagram in diagrams
        )


class TextChartRenderer(ChartRenderer):
    """
    Render a shape as a plain-text fretboard, low E on the left.

    Example (C major)::

        C
           E A D G B E
           x     o   o
           ===========
         1 | | | | 1 |
         2 | | 2 | | |
         3 | 3 | | | |
         4 | | | | | |

    Fretted notes show their finger number (``*`` when none is assigned),
    a barre fills its row with ``=`` between the outer strings, and the top
    line is the nut (``=``) only for shapes that start at fret 1.
    """

    @property
    def default_extension(self) -> str:
        return ".txt"

    def render(self, *, title: str, shape: ChordDiagramShape) -> str:
        width = len(shape.frets) * 2 - 1
        lines = [title] if title else []
        lines.append("   " + " ".join(pitch_class_name(pc) for pc in STANDARD_TUNING))
        lines.append("   " + " ".join(self._open_marker(fret) for fret in shape.frets).rstrip())
        lines.append("   " + ("=" if shape.start_fret == 1 else "-") * width)

        fretted = [fret for fret in shape.frets if fret is not None and fret > 0]
        last_fret = max(fretted, default=shape.start_fret)
        row_count = max(MIN_FRET_ROWS, last_fret - shape.start_fret + 1)

        for fret in range(shape.start_fret, shape.start_fret + row_count):
            cells = [self._cell(shape, index, fret) for index in range(len(shape.frets))]
            lines.append(f"{fret:>2} " + " ".join(cells))

        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _open_marker(self, fret: int | None) -> str:
        if fret is None:
            return "x"
        if fret == 0:
            return "o"
        return " "

    def _cell(self, shape: ChordDiagramShape, index: int, fret: int) -> str:
        if shape.frets[index] == fret:
            finger = shape.fingers[index]
            return str(finger) if finger is not None else "*"
        barre = shape.barre
        if barre is not None and barre.fret == fret and barre.from_string <= index <= barre.to_string:
            return "="
        return "|"


class JsonChartRenderer(ChartRenderer):
    """Render shapes as JSON; muted strings and missing fingers are ``null``."""

    @property
    def default_extension(self) -> str:
        return ".json"

    def render(self, *, title: str, shape: ChordDiagramShape) -> str:
        payload: dict[str, Any] = {"name": title, **shape.to_dict()}
        return json.dumps(payload, ensure_ascii=False)

    def render_diagrams(self, diagrams: list[ChordDiagram]) -> str:
        payload = []
        for diagram in diagrams:
            entry = asdict(diagram)
            entry["shape"] = diagram.shape.to_dict()
            payload.append(entry)
        return json.dumps(payload, ensure_ascii=False, indent=2)


def build_renderer(output_format: str) -> ChartRenderer:
    """
    Return the renderer for ``output_format`` (``"text"`` or ``"json"``).

    Raises:
        ValueError: For any other format.
    """
    normalized = output_format.strip().lower()
    if normalized == "text":
        return TextChartRenderer()
    if normalized == "json":
        return JsonChartRenderer()
    raise ValueError(f"Unsupported output format '{output_format}'. Use one of: json, text.")
