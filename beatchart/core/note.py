"""Note data classes - the units flowing through the chart pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Lane(str, Enum):
    """The four input directions a note can be assigned to."""

    UP = "ArrowUp"
    DOWN = "ArrowDown"
    LEFT = "ArrowLeft"
    RIGHT = "ArrowRight"

    @property
    def is_strong(self) -> bool:
        return self in STRONG_LANES

    @property
    def symbol(self) -> str:
        """Arrow glyph for display."""
        return {"ArrowUp": "↑", "ArrowDown": "↓", "ArrowLeft": "←", "ArrowRight": "→"}[self.value]


# Loud notes alternate up/down, quiet ones left/right
STRONG_LANES: Tuple[Lane, Lane] = (Lane.UP, Lane.DOWN)
WEAK_LANES: Tuple[Lane, Lane] = (Lane.LEFT, Lane.RIGHT)


@dataclass(frozen=True)
class OnsetCandidate:
    """A detected onset.

    After quantization the same type is reused with ``time`` snapped to the grid.
    """

    time: float  # seconds
    strength: float  # envelope (RMS) value at the onset frame
    salience: float  # onset-curve value at the onset frame


@dataclass(frozen=True)
class LaneNote:
    """A quantized onset with its lane, keeping the source salience for dedup."""

    time: float
    lane: Lane
    strength: float
    salience: float

    def to_event(self) -> "NoteEvent":
        return NoteEvent(time=self.time, lane=self.lane)


@dataclass(frozen=True)
class NoteEvent:
    """A chart note: a timestamp and one of four lanes."""

    time: float
    lane: Lane

    @property
    def is_strong(self) -> bool:
        return self.lane.is_strong

    def to_dict(self) -> Dict[str, object]:
        """Serialize to the ``{"time", "key"}`` shape used by chart files."""
        return {"time": self.time, "key": self.lane.value}

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "NoteEvent":
        return cls(time=float(data["time"]), lane=Lane(data["key"]))
