"""Analysis layer - Low-level signal analysis.

This layer turns raw samples into rhythmic information:
- RMS envelope and onset detection function
- Adaptive onset peak picking
- Tempo (beat period) estimation
"""

from .envelope import EnvelopeExtractor
from .onsets import OnsetPicker
from .tempo import TempoEstimator, TempoEstimate

__all__ = [
    "EnvelopeExtractor",
    "OnsetPicker",
    "TempoEstimator",
    "TempoEstimate",
]
