"""Core types and constants for beatchart."""

from .note import Lane, LaneNote, NoteEvent, OnsetCandidate, STRONG_LANES, WEAK_LANES
from .difficulty import Difficulty, DifficultyProfile, PROFILES, get_profile
from .errors import InvalidAudioError
from .config import AnalysisConfig
from .constants import (
    DEFAULT_WINDOW_SIZE,
    DEFAULT_BEAT_PERIOD,
    MIN_BPM,
    MAX_BPM,
)

__all__ = [
    "Lane",
    "LaneNote",
    "NoteEvent",
    "OnsetCandidate",
    "STRONG_LANES",
    "WEAK_LANES",
    "Difficulty",
    "DifficultyProfile",
    "PROFILES",
    "get_profile",
    "InvalidAudioError",
    "AnalysisConfig",
    "DEFAULT_WINDOW_SIZE",
    "DEFAULT_BEAT_PERIOD",
    "MIN_BPM",
    "MAX_BPM",
]
