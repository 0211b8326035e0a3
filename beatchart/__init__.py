"""beatchart - Audio to rhythm-game chart generation.

Architecture Layers:
    1. input/      - Audio loading
    2. analysis/   - Envelope, onset detection, tempo estimation
    3. processing/ - Quantization, lane assignment, cleanup
    4. output/     - Export (JSON chart, MIDI)

The pipeline is driven by ``ChartGenerator``; ``generate_level`` is the
one-call entry point.
"""

__version__ = "0.1.0"

# Core types
from .core import (
    Lane,
    NoteEvent,
    OnsetCandidate,
    Difficulty,
    DifficultyProfile,
    AnalysisConfig,
    InvalidAudioError,
    get_profile,
)

# Input layer
from .input import AudioLoader

# Analysis layer
from .analysis import EnvelopeExtractor, OnsetPicker, TempoEstimator, TempoEstimate

# Processing layer
from .processing import Quantizer, LaneAssigner, NoteCleanup

# Output layer
from .output import ChartExporter, MIDIExporter

# Pipeline
from .generator import ChartGenerator, ChartAnalysis, generate_level

__all__ = [
    # Core
    "Lane",
    "NoteEvent",
    "OnsetCandidate",
    "Difficulty",
    "DifficultyProfile",
    "AnalysisConfig",
    "InvalidAudioError",
    "get_profile",
    # Input
    "AudioLoader",
    # Analysis
    "EnvelopeExtractor",
    "OnsetPicker",
    "TempoEstimator",
    "TempoEstimate",
    # Processing
    "Quantizer",
    "LaneAssigner",
    "NoteCleanup",
    # Output
    "ChartExporter",
    "MIDIExporter",
    # Pipeline
    "ChartGenerator",
    "ChartAnalysis",
    "generate_level",
]
