"""Chart generation - audio in, rhythm-game notes out.

Runs the analysis pipeline in order:

    samples -> RMS envelope -> onset curve -> onset candidates
            -> beat period -> quantized onsets -> lane notes -> chart

Every stage is a pure function of the previous stage's output, so one
ChartGenerator can be shared between threads and calls.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from .analysis import EnvelopeExtractor, OnsetPicker, TempoEstimator, TempoEstimate
from .core import (
    AnalysisConfig,
    Difficulty,
    DifficultyProfile,
    InvalidAudioError,
    LaneNote,
    NoteEvent,
    OnsetCandidate,
    get_profile,
)
from .processing import Quantizer, LaneAssigner, NoteCleanup, CleanupStats

logger = logging.getLogger(__name__)


@dataclass
class ChartAnalysis:
    """Every intermediate result of one chart generation run."""

    difficulty: DifficultyProfile
    sample_rate: int
    duration: float
    envelope: np.ndarray
    onset_curve: np.ndarray
    onsets: List[OnsetCandidate]
    tempo: TempoEstimate
    quantized: List[OnsetCandidate]
    lane_notes: List[LaneNote]
    notes: List[NoteEvent]
    cleanup_stats: CleanupStats = field(default_factory=CleanupStats)

    @property
    def note_count(self) -> int:
        return len(self.notes)

    @property
    def strong_count(self) -> int:
        return sum(1 for n in self.notes if n.is_strong)


class ChartGenerator:
    """Generate a rhythm chart from a mono sample buffer."""

    def __init__(
        self,
        difficulty: Union[str, Difficulty, DifficultyProfile] = Difficulty.MEDIUM,
        config: Optional[AnalysisConfig] = None,
    ):
        """
        Initialize ChartGenerator.

        Args:
            difficulty: Difficulty name, enum member, or custom profile
            config: Optional AnalysisConfig for framing/tempo settings

        Raises:
            ValueError: If the difficulty is not recognised
        """
        self.profile = get_profile(difficulty)
        self.config = config or AnalysisConfig()

        cfg = self.config
        self.envelope_extractor = EnvelopeExtractor(
            window_size=cfg.window_size,
            hop_length=cfg.hop_length,
            smooth_width=cfg.smooth_width,
        )
        self.onset_picker = OnsetPicker(
            hop_length=cfg.hop_length,
            rescue_factor=cfg.rescue_factor,
            rescue_gap=cfg.rescue_gap,
        )
        self.tempo_estimator = TempoEstimator(
            min_bpm=cfg.min_bpm,
            max_bpm=cfg.max_bpm,
            n_bins=cfg.histogram_bins,
            min_period=cfg.min_beat_period,
            max_period=cfg.max_beat_period,
            fallback_period=cfg.fallback_beat_period,
        )
        self.lane_assigner = LaneAssigner(percentile=cfg.strong_percentile)
        self.cleaner = NoteCleanup(min_separation=self.profile.min_separation)

    @staticmethod
    def validate(audio, sr: int) -> np.ndarray:
        """
        Check the input buffer and reduce it to its first channel.

        Raises:
            InvalidAudioError: If the buffer is missing or empty, or sr <= 0
        """
        if audio is None:
            raise InvalidAudioError("No audio buffer given")
        if sr is None or sr <= 0:
            raise InvalidAudioError(f"Sample rate must be positive, got {sr}")

        audio = np.asarray(audio, dtype=np.float64)
        if audio.ndim > 1:
            audio = audio[0]
        if audio.size == 0:
            raise InvalidAudioError("Audio buffer is empty")
        return audio

    def analyze(self, audio: np.ndarray, sr: int) -> ChartAnalysis:
        """
        Run the full pipeline and keep every intermediate result.

        Args:
            audio: Mono sample buffer (first channel is used for 2-D input)
            sr: Sample rate in Hz

        Returns:
            ChartAnalysis with the final notes in ``notes``

        Raises:
            InvalidAudioError: If the buffer is empty or sr <= 0
        """
        audio = self.validate(audio, sr)
        profile = self.profile

        envelope = self.envelope_extractor.rms(audio)
        onset_curve = self.envelope_extractor.onset_curve(envelope)
        onsets = self.onset_picker.pick(onset_curve, envelope, sr, profile.sensitivity)
        tempo = self.tempo_estimator.estimate(onsets)

        quantizer = Quantizer(beat_period=tempo.beat_period, grid=profile.grid)
        quantized = quantizer.quantize(onsets)

        lane_notes = self.lane_assigner.assign(quantized)
        kept, stats = self.cleaner.cleanup(lane_notes, return_stats=True)
        notes = [n.to_event() for n in kept]

        logger.debug(
            "%s chart: %d frames, %d onsets, %.1f BPM, %d notes",
            profile.name, len(envelope), len(onsets), tempo.bpm, len(notes),
        )

        return ChartAnalysis(
            difficulty=profile,
            sample_rate=sr,
            duration=len(audio) / sr,
            envelope=envelope,
            onset_curve=onset_curve,
            onsets=onsets,
            tempo=tempo,
            quantized=quantized,
            lane_notes=lane_notes,
            notes=notes,
            cleanup_stats=stats,
        )

    def generate(self, audio: np.ndarray, sr: int) -> List[NoteEvent]:
        """
        Generate chart notes.

        Args:
            audio: Mono sample buffer
            sr: Sample rate in Hz

        Returns:
            Notes sorted by time, spaced at least the profile's minimum apart
        """
        return self.analyze(audio, sr).notes


def generate_level(
    audio: np.ndarray,
    sr: int,
    difficulty: Union[str, Difficulty, DifficultyProfile] = "medium",
) -> List[NoteEvent]:
    """
    Generate a rhythm-game chart from decoded audio.

    Args:
        audio: Mono sample buffer
        sr: Sample rate in Hz
        difficulty: ``"easy"``, ``"medium"`` or ``"hard"``

    Returns:
        Time-ordered list of NoteEvent
    """
    return ChartGenerator(difficulty).generate(audio, sr)
