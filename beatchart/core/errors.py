"""Exceptions raised by the analysis pipeline."""


class InvalidAudioError(ValueError):
    """Raised when a sample buffer cannot be analysed (empty, or bad sample rate)."""
