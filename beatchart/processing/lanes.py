"""Lane assignment - Split notes into strong and weak lanes by loudness."""

import logging
import math
from functools import reduce
from typing import List, NamedTuple, Sequence, Tuple

from ..core import Lane, LaneNote, OnsetCandidate
from ..core.constants import STRONG_PERCENTILE

logger = logging.getLogger(__name__)


class LaneState(NamedTuple):
    """Alternation trackers threaded through the assignment fold."""

    last_strong: Lane = Lane.UP
    last_weak: Lane = Lane.LEFT


def strength_threshold(strengths: Sequence[float], percentile: float = STRONG_PERCENTILE) -> float:
    """
    Strength at the given percentile of the sorted values.

    Uses the element at ``floor(n * percentile)`` of the ascending sort, with
    no interpolation. Returns 0.0 for an empty sequence.
    """
    if not strengths:
        return 0.0
    ordered = sorted(strengths)
    index = math.floor(len(ordered) * percentile)
    return ordered[min(index, len(ordered) - 1)]


def _flip(lane: Lane) -> Lane:
    return {
        Lane.UP: Lane.DOWN,
        Lane.DOWN: Lane.UP,
        Lane.LEFT: Lane.RIGHT,
        Lane.RIGHT: Lane.LEFT,
    }[lane]


class LaneAssigner:
    """Assign lanes to quantized onsets.

    Onsets at or above the strength threshold go to the strong pair
    (up/down), the rest to the weak pair (left/right). Each pair alternates
    on its own, regardless of how many notes of the other pair came between.
    """

    def __init__(self, percentile: float = STRONG_PERCENTILE):
        self.percentile = percentile

    def assign(self, onsets: Sequence[OnsetCandidate]) -> List[LaneNote]:
        """
        Tag each onset with a lane.

        Args:
            onsets: Quantized onsets in time order

        Returns:
            Lane notes in the same order
        """
        threshold = strength_threshold([o.strength for o in onsets], self.percentile)

        def step(acc: Tuple[LaneState, List[LaneNote]], onset: OnsetCandidate):
            state, notes = acc
            if onset.strength >= threshold:
                lane = _flip(state.last_strong)
                state = state._replace(last_strong=lane)
            else:
                lane = _flip(state.last_weak)
                state = state._replace(last_weak=lane)
            notes.append(
                LaneNote(time=onset.time, lane=lane, strength=onset.strength, salience=onset.salience)
            )
            return state, notes

        _, notes = reduce(step, onsets, (LaneState(), []))

        logger.debug(
            "Assigned %d notes (%d strong, threshold=%.5f)",
            len(notes), sum(n.lane.is_strong for n in notes), threshold,
        )
        return notes
