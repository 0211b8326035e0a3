"""Processing layer - Onset and note post-processing.

This layer turns detected onsets into playable chart notes:
- Quantization (snap to a beat grid)
- Lane assignment (strong/weak by loudness, alternating)
- Cleanup (deduplication, minimum spacing)
"""

from .quantize import Quantizer
from .lanes import LaneAssigner, LaneState, strength_threshold
from .cleanup import NoteCleanup, CleanupStats

__all__ = [
    "Quantizer",
    "LaneAssigner",
    "LaneState",
    "strength_threshold",
    "NoteCleanup",
    "CleanupStats",
]
