"""Analysis configuration shared by the pipeline stages."""

from dataclasses import dataclass
from typing import Optional

from .constants import (
    DEFAULT_WINDOW_SIZE,
    DEFAULT_SMOOTH_WIDTH,
    MIN_BPM,
    MAX_BPM,
    IOI_HISTOGRAM_BINS,
    MIN_BEAT_PERIOD,
    MAX_BEAT_PERIOD,
    DEFAULT_BEAT_PERIOD,
    RESCUE_THRESHOLD_FACTOR,
    RESCUE_MIN_GAP,
    STRONG_PERCENTILE,
)


@dataclass
class AnalysisConfig:
    """Configuration for chart analysis.

    Attributes:
        window_size: RMS window length in samples (default: 1024)
        hop_length: Samples between frames (default: window_size // 2)
        smooth_width: Width of the centered moving average over the onset curve (default: 3)
        min_bpm: Slowest tempo accepted after octave folding (default: 60)
        max_bpm: Fastest tempo accepted after octave folding (default: 200)
        histogram_bins: Number of bins in the inter-onset interval histogram (default: 50)
        min_beat_period: Shortest usable beat period in seconds (default: 0.1)
        max_beat_period: Longest usable beat period in seconds (default: 2.0)
        fallback_beat_period: Beat period used when tempo estimation fails (default: 0.5)
        rescue_factor: Std multiplier for the leading-onset rescue threshold (default: 0.1)
        rescue_gap: Minimum lead, in seconds, before a rescued onset is added (default: 0.1)
        strong_percentile: Strength percentile splitting strong from weak notes (default: 0.6)
    """

    window_size: int = DEFAULT_WINDOW_SIZE
    hop_length: Optional[int] = None
    smooth_width: int = DEFAULT_SMOOTH_WIDTH
    min_bpm: float = MIN_BPM
    max_bpm: float = MAX_BPM
    histogram_bins: int = IOI_HISTOGRAM_BINS
    min_beat_period: float = MIN_BEAT_PERIOD
    max_beat_period: float = MAX_BEAT_PERIOD
    fallback_beat_period: float = DEFAULT_BEAT_PERIOD
    rescue_factor: float = RESCUE_THRESHOLD_FACTOR
    rescue_gap: float = RESCUE_MIN_GAP
    strong_percentile: float = STRONG_PERCENTILE

    def __post_init__(self):
        if self.hop_length is None:
            self.hop_length = self.window_size // 2
        if self.window_size <= 0 or self.hop_length <= 0:
            raise ValueError("window_size and hop_length must be positive")
        if self.smooth_width < 1 or self.smooth_width % 2 == 0:
            raise ValueError(f"smooth_width must be a positive odd number, got {self.smooth_width}")
        if self.min_bpm <= 0 or self.max_bpm < self.min_bpm:
            raise ValueError(
                f"tempo band must satisfy 0 < min_bpm <= max_bpm, got {self.min_bpm}..{self.max_bpm}"
            )
        if not 0.0 <= self.strong_percentile < 1.0:
            raise ValueError(f"strong_percentile must be in [0, 1), got {self.strong_percentile}")
