"""Energy envelope and onset detection function."""

import logging
from typing import Optional

import librosa
import numpy as np

from ..core.constants import DEFAULT_WINDOW_SIZE, DEFAULT_SMOOTH_WIDTH

logger = logging.getLogger(__name__)


class EnvelopeExtractor:
    """Extract a framewise RMS envelope and the onset curve derived from it."""

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW_SIZE,
        hop_length: Optional[int] = None,
        smooth_width: int = DEFAULT_SMOOTH_WIDTH,
    ):
        """
        Initialize EnvelopeExtractor.

        Args:
            window_size: Samples per analysis window
            hop_length: Samples between window starts (default: window_size // 2)
            smooth_width: Odd width of the moving average applied to the onset curve
        """
        self.window_size = window_size
        self.hop_length = hop_length or window_size // 2
        self.smooth_width = smooth_width

    def rms(self, audio: np.ndarray) -> np.ndarray:
        """
        Compute the RMS energy of each full window.

        Windows start every ``hop_length`` samples and stop once a full
        window no longer fits, so no padding is applied.

        Args:
            audio: Mono audio array (for 2-D input the first channel is used)

        Returns:
            RMS envelope, one value per frame (empty if the audio is shorter
            than one window)
        """
        audio = np.asarray(audio, dtype=np.float64)
        if audio.ndim > 1:
            audio = audio[0]

        if audio.shape[-1] < self.window_size:
            logger.debug("Audio shorter than one window (%d samples)", audio.shape[-1])
            return np.zeros(0)

        envelope = librosa.feature.rms(
            y=audio,
            frame_length=self.window_size,
            hop_length=self.hop_length,
            center=False,
            dtype=np.float64,
        )[0]

        logger.debug("RMS envelope: %d frames", len(envelope))
        return envelope

    def onset_curve(self, envelope: np.ndarray) -> np.ndarray:
        """
        Build the smoothed onset detection function.

        The raw curve is the first difference of the envelope with energy
        decreases clamped to zero (index 0 is zero). It is then smoothed with
        a centered moving average; boundary frames average over the in-range
        neighbours only.

        Args:
            envelope: RMS envelope

        Returns:
            Onset curve with the same length as the envelope
        """
        envelope = np.asarray(envelope, dtype=np.float64)
        n = len(envelope)
        if n == 0:
            return np.zeros(0)

        raw = np.zeros(n)
        raw[1:] = np.maximum(np.diff(envelope), 0.0)

        half = self.smooth_width // 2
        sums = np.zeros(n)
        counts = np.zeros(n)
        for offset in range(-half, half + 1):
            lo = max(0, -offset)
            hi = min(n, n - offset)
            if hi <= lo:
                continue
            sums[lo:hi] += raw[lo + offset:hi + offset]
            counts[lo:hi] += 1

        return sums / counts

    def frame_times(self, n_frames: int, sr: int) -> np.ndarray:
        """Start time in seconds of each of the first ``n_frames`` frames."""
        return librosa.frames_to_time(np.arange(n_frames), sr=sr, hop_length=self.hop_length)
