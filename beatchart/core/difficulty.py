"""Difficulty profiles.

A profile bundles the three knobs that differ between chart difficulties:

- ``min_separation``: minimum time between two kept notes (seconds)
- ``sensitivity``: multiplier on the onset-curve standard deviation added to
  the mean to form the peak threshold. A *higher* value raises the threshold
  and therefore yields *fewer* onsets.
- ``grid``: beat subdivisions onsets may be snapped to
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union


class Difficulty(str, Enum):
    """Accepted difficulty selectors."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultyProfile:
    """Immutable configuration for one difficulty."""

    name: str
    min_separation: float
    sensitivity: float
    grid: Tuple[float, ...]


PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        name="easy",
        min_separation=0.3,
        sensitivity=0.5,
        grid=(1.0, 0.5),  # quarter and eighth notes
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        name="medium",
        min_separation=0.15,
        sensitivity=0.8,
        grid=(1.0, 0.5, 0.25),
    ),
    Difficulty.HARD: DifficultyProfile(
        name="hard",
        min_separation=0.08,
        sensitivity=1.2,
        grid=(1.0, 0.5, 0.25, 0.125),  # down to 32nd notes
    ),
}


def get_profile(difficulty: Union[str, Difficulty, DifficultyProfile]) -> DifficultyProfile:
    """Resolve a difficulty selector to its profile.

    Args:
        difficulty: ``"easy"``, ``"medium"``, ``"hard"``, a Difficulty, or a
            ready-made DifficultyProfile (returned unchanged)

    Returns:
        The matching DifficultyProfile

    Raises:
        ValueError: If the name is not one of the accepted difficulties
    """
    if isinstance(difficulty, DifficultyProfile):
        return difficulty

    if isinstance(difficulty, Difficulty):
        return PROFILES[difficulty]

    try:
        key = Difficulty(str(difficulty).strip().lower())
    except ValueError:
        valid = ", ".join(d.value for d in Difficulty)
        raise ValueError(f"Unknown difficulty: {difficulty!r}. Valid: {valid}") from None

    return PROFILES[key]
