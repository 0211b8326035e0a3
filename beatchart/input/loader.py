"""Audio loading utilities."""

import logging
from pathlib import Path
from typing import Optional, Tuple

import librosa
import numpy as np

logger = logging.getLogger(__name__)


class AudioLoader:
    """Decode audio files into the mono sample buffer the chart generator expects."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        target_sr: Optional[int] = None,
        normalize: bool = False,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Resample to this rate; None keeps the file's native rate
            normalize: Peak-normalize the samples if True
        """
        self.target_sr = target_sr
        self.normalize = normalize

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load an audio file, keeping only its first channel.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        audio, sr = librosa.load(str(path), sr=self.target_sr, mono=False)

        # First channel only, no downmix
        if audio.ndim > 1:
            logger.debug("Using channel 0 of %d", audio.shape[0])
            audio = audio[0]

        if self.normalize:
            audio = self._normalize(audio)

        return audio, int(sr)

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max() if audio.size else 0.0
        if peak > 0:
            audio = audio / peak
        return audio

    def get_duration(self, audio: np.ndarray, sr: Optional[int] = None) -> float:
        """Get duration in seconds."""
        sr = sr or self.target_sr
        return len(audio) / sr
