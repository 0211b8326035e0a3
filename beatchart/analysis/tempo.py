"""Tempo estimation from inter-onset interval statistics."""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..core import OnsetCandidate
from ..core.constants import (
    MIN_BPM,
    MAX_BPM,
    IOI_HISTOGRAM_BINS,
    MIN_BEAT_PERIOD,
    MAX_BEAT_PERIOD,
    DEFAULT_BEAT_PERIOD,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TempoEstimate:
    """Container for tempo estimation results."""

    beat_period: float  # seconds per beat
    dominant_ioi: Optional[float] = None  # histogram mode before octave folding
    is_fallback: bool = False

    @property
    def bpm(self) -> float:
        return 60.0 / self.beat_period


class TempoEstimator:
    """Estimate a beat period from the spacing of detected onsets."""

    def __init__(
        self,
        min_bpm: float = MIN_BPM,
        max_bpm: float = MAX_BPM,
        n_bins: int = IOI_HISTOGRAM_BINS,
        min_period: float = MIN_BEAT_PERIOD,
        max_period: float = MAX_BEAT_PERIOD,
        fallback_period: float = DEFAULT_BEAT_PERIOD,
    ):
        """
        Initialize TempoEstimator.

        Args:
            min_bpm: Slowest tempo of the target band
            max_bpm: Fastest tempo of the target band
            n_bins: Number of IOI histogram bins
            min_period: Floor for halving and smallest usable period (seconds)
            max_period: Ceiling for doubling and largest usable period (seconds)
            fallback_period: Period returned when no tempo can be inferred
        """
        self.min_bpm = min_bpm
        self.max_bpm = max_bpm
        self.n_bins = n_bins
        self.min_period = min_period
        self.max_period = max_period
        self.fallback_period = fallback_period

    @staticmethod
    def inter_onset_intervals(candidates: Sequence[OnsetCandidate]) -> np.ndarray:
        """Gaps between consecutive onsets (``n - 1`` values)."""
        times = np.array([c.time for c in candidates], dtype=np.float64)
        if times.size < 2:
            return np.zeros(0)
        return np.diff(times)

    def dominant_interval(self, iois: np.ndarray) -> Optional[float]:
        """
        Centre of the most populated IOI histogram bin.

        Bins span ``[min, max]`` in equal widths; a value landing exactly on
        the upper edge falls past the last bin and is not counted.

        Returns:
            The dominant interval, or None when there are no IOIs or all IOIs
            are identical (zero bin width)
        """
        if iois.size == 0:
            return None

        lo = float(np.min(iois))
        hi = float(np.max(iois))
        bin_width = (hi - lo) / self.n_bins
        if bin_width <= 0:
            return None

        bins = np.floor((iois - lo) / bin_width).astype(int)
        bins = bins[(bins >= 0) & (bins < self.n_bins)]
        histogram = np.bincount(bins, minlength=self.n_bins)

        if histogram.max() == 0:
            return None

        # argmax keeps the earliest bin on ties
        best = int(np.argmax(histogram))
        return lo + (best + 0.5) * bin_width

    def fold_octave(self, interval: float) -> float:
        """
        Halve or double an interval towards the target tempo band.

        Only one direction applies, chosen by which band edge the interval
        violated initially.
        """
        slowest = 60.0 / self.min_bpm
        fastest = 60.0 / self.max_bpm

        if interval > slowest:
            while interval > slowest and interval > self.min_period:
                interval /= 2
        elif interval < fastest:
            while interval < fastest and interval < self.max_period:
                interval *= 2
        return interval

    def estimate(self, candidates: Sequence[OnsetCandidate]) -> TempoEstimate:
        """
        Estimate the beat period.

        Args:
            candidates: Onset candidates sorted by time

        Returns:
            TempoEstimate; falls back to ``fallback_period`` rather than failing
        """
        iois = self.inter_onset_intervals(candidates)
        dominant = self.dominant_interval(iois)

        period = self.fold_octave(dominant) if dominant is not None else 0.0

        if (
            period == 0
            or not math.isfinite(period)
            or period < self.min_period
            or period > self.max_period
        ):
            logger.debug(
                "Tempo estimation fell back to %.3fs (%d onsets)",
                self.fallback_period, len(candidates),
            )
            return TempoEstimate(
                beat_period=self.fallback_period,
                dominant_ioi=dominant,
                is_fallback=True,
            )

        logger.debug("Estimated beat period %.3fs (%.1f BPM)", period, 60.0 / period)
        return TempoEstimate(beat_period=period, dominant_ioi=dominant)
