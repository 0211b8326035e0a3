"""Onset quantization - Snap onsets to a rhythmic grid."""

import dataclasses
import logging
import math
from typing import List, Sequence

from ..core import OnsetCandidate
from ..core.constants import DEFAULT_BEAT_PERIOD

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


class Quantizer:
    """Quantize onset times to the nearest point of a multi-resolution beat grid."""

    def __init__(
        self,
        beat_period: float = DEFAULT_BEAT_PERIOD,
        grid: Sequence[float] = (1.0, 0.5, 0.25),
    ):
        """
        Initialize Quantizer.

        Args:
            beat_period: Duration of one beat in seconds
            grid: Beat subdivisions to try (1 = beat, 0.5 = half beat, ...)
        """
        self.beat_period = beat_period
        self.grid = tuple(grid)

    @property
    def tempo(self) -> float:
        """Tempo in BPM."""
        return 60.0 / self.beat_period

    def grid_steps(self) -> List[float]:
        """Grid step in seconds for every subdivision with a non-zero step."""
        steps = [self.beat_period * subdivision for subdivision in self.grid]
        return [step for step in steps if step != 0]

    def quantize(self, onsets: Sequence[OnsetCandidate]) -> List[OnsetCandidate]:
        """
        Snap every onset to its closest grid point.

        The grid starts at the first onset. Each onset is tried against every
        subdivision and keeps whichever grid point is nearest overall; finer
        subdivisions win only by proximity.

        Args:
            onsets: Onsets sorted by time

        Returns:
            Onsets with quantized, non-negative times
        """
        if not onsets:
            return []

        origin = onsets[0].time
        steps = self.grid_steps()

        quantized = [
            dataclasses.replace(onset, time=max(0.0, self._snap(onset.time, origin, steps)))
            for onset in onsets
        ]

        logger.debug(
            "Quantized %d onsets to %.3fs beat, grid %s",
            len(quantized), self.beat_period, self.grid,
        )
        return quantized

    @staticmethod
    def _snap(time: float, origin: float, steps: Sequence[float]) -> float:
        """Nearest grid time across all subdivisions."""
        best = time
        best_error = math.inf

        for step in steps:
            grid_point = round_half_up((time - origin) / step) * step + origin
            error = abs(time - grid_point)
            if error < best_error:
                best_error = error
                best = grid_point

        return best
