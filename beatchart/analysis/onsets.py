"""Adaptive-threshold peak picking over the onset curve."""

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..core import OnsetCandidate
from ..core.constants import DEFAULT_WINDOW_SIZE, RESCUE_THRESHOLD_FACTOR, RESCUE_MIN_GAP

logger = logging.getLogger(__name__)


class OnsetPicker:
    """Pick onset candidates from a smoothed onset curve.

    The threshold adapts to the track: ``mean + std * sensitivity`` where the
    statistics are taken over the strictly positive curve values only, so long
    silent stretches do not drag the mean towards zero. A larger
    ``sensitivity`` raises the threshold and yields fewer onsets.
    """

    def __init__(
        self,
        hop_length: int = DEFAULT_WINDOW_SIZE // 2,
        rescue_factor: float = RESCUE_THRESHOLD_FACTOR,
        rescue_gap: float = RESCUE_MIN_GAP,
    ):
        """
        Initialize OnsetPicker.

        Args:
            hop_length: Samples between onset-curve frames
            rescue_factor: Std multiplier for the looser leading-onset threshold
            rescue_gap: How far (seconds) the first peak must trail the first
                loud frame before that frame is added as an onset
        """
        self.hop_length = hop_length
        self.rescue_factor = rescue_factor
        self.rescue_gap = rescue_gap

    @staticmethod
    def positive_stats(curve: np.ndarray) -> Tuple[float, float]:
        """Mean and population standard deviation of the values above zero."""
        positive = curve[curve > 0]
        if positive.size == 0:
            return 0.0, 0.0
        return float(np.mean(positive)), float(np.std(positive))

    def threshold(self, curve: np.ndarray, sensitivity: float) -> float:
        """Dynamic peak threshold for the given sensitivity multiplier."""
        mean, std = self.positive_stats(np.asarray(curve, dtype=np.float64))
        return mean + std * sensitivity

    def pick(
        self,
        onset_curve: np.ndarray,
        envelope: np.ndarray,
        sr: int,
        sensitivity: float,
    ) -> List[OnsetCandidate]:
        """
        Detect onsets as strict local maxima above the dynamic threshold.

        Args:
            onset_curve: Smoothed onset detection function
            envelope: RMS envelope the curve was derived from (same length)
            sr: Sample rate of the analysed audio
            sensitivity: Threshold multiplier from the difficulty profile

        Returns:
            Onset candidates sorted by time
        """
        curve = np.asarray(onset_curve, dtype=np.float64)
        if len(curve) < 3:
            return []

        mean, std = self.positive_stats(curve)
        threshold = mean + std * sensitivity

        inner = curve[1:-1]
        is_peak = (inner > threshold) & (inner > curve[:-2]) & (inner > curve[2:])
        peak_indices = np.flatnonzero(is_peak) + 1

        candidates = [self._candidate(i, curve, envelope, sr) for i in peak_indices]

        rescued = self._leading_onset(curve, envelope, sr, mean + std * self.rescue_factor, candidates)
        if rescued is not None:
            candidates.insert(0, rescued)

        candidates.sort(key=lambda c: c.time)

        logger.debug(
            "Picked %d onsets (threshold=%.5f, sensitivity=%.2f)",
            len(candidates), threshold, sensitivity,
        )
        return candidates

    def _leading_onset(
        self,
        curve: np.ndarray,
        envelope: np.ndarray,
        sr: int,
        loose_threshold: float,
        candidates: List[OnsetCandidate],
    ) -> Optional[OnsetCandidate]:
        """Return the first loud frame if the peak picker skipped past it.

        A strong attack at the very start of a track often rises without
        forming a sharp peak. The first frame above the looser threshold is
        kept when nothing was detected, or when the first detection comes more
        than ``rescue_gap`` seconds later.
        """
        above = np.flatnonzero(curve > loose_threshold)
        if above.size == 0:
            return None

        first = self._candidate(int(above[0]), curve, envelope, sr)
        if not candidates or candidates[0].time > first.time + self.rescue_gap:
            logger.debug("Added leading onset at %.3fs", first.time)
            return first
        return None

    def _candidate(self, index: int, curve: np.ndarray, envelope: np.ndarray, sr: int) -> OnsetCandidate:
        return OnsetCandidate(
            time=(int(index) * self.hop_length) / sr,
            strength=float(envelope[index]),
            salience=float(curve[index]),
        )
