"""Note cleanup - Deduplicate and space out charted notes.

Quantization can snap several onsets onto the same grid line, and dense
passages can produce notes closer together than a player can hit. This
module resolves both:
- Deduplication (one note per millisecond, the most salient wins)
- Minimum separation (greedy forward filter)
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..core import LaneNote
from .quantize import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class CleanupStats:
    """Statistics from cleanup operations."""

    original_count: int = 0
    final_count: int = 0
    removed_duplicates: int = 0
    removed_too_close: int = 0

    @property
    def total_removed(self) -> int:
        """Total notes removed."""
        return self.original_count - self.final_count


class NoteCleanup:
    """Deduplicate lane notes and enforce a minimum spacing between them."""

    def __init__(self, min_separation: float = 0.15):
        """Initialize NoteCleanup.

        Args:
            min_separation: Minimum time between kept notes in seconds
        """
        self.min_separation = min_separation

    def cleanup(
        self,
        notes: List[LaneNote],
        return_stats: bool = False,
    ) -> Union[List[LaneNote], Tuple[List[LaneNote], CleanupStats]]:
        """Apply deduplication then the minimum separation filter.

        Args:
            notes: Lane notes in time order
            return_stats: Whether to return cleanup statistics

        Returns:
            Cleaned notes, optionally with statistics
        """
        stats = CleanupStats(original_count=len(notes))

        deduped = self.deduplicate(notes)
        stats.removed_duplicates = len(notes) - len(deduped)

        spaced = self.enforce_min_separation(deduped)
        stats.removed_too_close = len(deduped) - len(spaced)
        stats.final_count = len(spaced)

        logger.debug(
            "Cleanup kept %d/%d notes (%d duplicates, %d too close)",
            stats.final_count, stats.original_count,
            stats.removed_duplicates, stats.removed_too_close,
        )

        if return_stats:
            return spaced, stats
        return spaced

    def deduplicate(self, notes: List[LaneNote]) -> List[LaneNote]:
        """Keep one note per rounded millisecond.

        Within a group the note with the higher salience wins; on a tie the
        one seen first is kept.

        Args:
            notes: Lane notes

        Returns:
            Deduplicated notes sorted by time
        """
        unique: Dict[int, LaneNote] = {}
        for note in notes:
            key = round_half_up(note.time * 1000)
            existing = unique.get(key)
            if existing is None or note.salience > existing.salience:
                unique[key] = note

        return sorted(unique.values(), key=lambda n: n.time)

    def enforce_min_separation(
        self,
        notes: List[LaneNote],
        min_separation: Optional[float] = None,
    ) -> List[LaneNote]:
        """Drop notes too close to the previously kept note.

        Greedy: the first note is always kept, and each later note is kept
        only if it is at least ``min_separation`` after the last kept one.

        Args:
            notes: Notes sorted by time
            min_separation: Override for the configured spacing

        Returns:
            Filtered notes
        """
        if not notes:
            return []

        gap = self.min_separation if min_separation is None else min_separation

        kept = [notes[0]]
        for note in notes[1:]:
            if note.time - kept[-1].time >= gap:
                kept.append(note)
        return kept
