"""Output layer - Export charts.

- JSON chart files (the format a game front end loads)
- MIDI drum tracks for auditioning a chart
"""

from .chart import ChartExporter
from .midi import MIDIExporter, LANE_PITCHES

__all__ = [
    "ChartExporter",
    "MIDIExporter",
    "LANE_PITCHES",
]
