"""Shared synthetic signals for the test suite.

Signals are built from hop-sized blocks of alternating +/-amplitude samples,
so every 1024-sample window (two blocks) has an RMS that can be computed by
hand: ``sqrt((a**2 + b**2) / 2)``.
"""

import numpy as np
import pytest
import soundfile as sf

SR = 22050
HOP = 512
ATTACK = (0.1, 0.3, 1.0)


def block_signal(amplitudes, block=HOP):
    """Concatenate blocks of alternating-sign samples at the given amplitudes."""
    if not amplitudes:
        return np.zeros(0)
    signs = np.where(np.arange(block) % 2 == 0, 1.0, -1.0)
    return np.concatenate([a * signs for a in amplitudes])


def burst_blocks(gain=1.0, sustain=9):
    """A three-block attack ramp followed by a sustained level."""
    return [gain * a for a in ATTACK] + [gain] * sustain


def burst_train(gains, period_blocks=22, lead_blocks=10, tail_blocks=10):
    """One burst per gain, starting every ``period_blocks`` blocks."""
    amplitudes = [0.0] * lead_blocks
    for gain in gains:
        burst = burst_blocks(gain, sustain=max(1, min(9, period_blocks - 6)))
        amplitudes += burst + [0.0] * (period_blocks - len(burst))
    amplitudes += [0.0] * tail_blocks
    return block_signal(amplitudes)


@pytest.fixture
def silence():
    """Two seconds of digital silence."""
    return np.zeros(SR * 2)


@pytest.fixture
def single_burst():
    """One isolated burst; its only onset-curve peak is frame 11."""
    return burst_train([1.0])


@pytest.fixture
def groove():
    """A dozen bursts with alternating loud/quiet accents, ~0.5s apart."""
    return burst_train([1.0, 0.4] * 6)


@pytest.fixture
def dense_groove():
    """Bursts every ~0.19s, closer than the easy spacing."""
    return burst_train([1.0, 0.6, 0.8] * 8, period_blocks=8)


@pytest.fixture
def wav_file(tmp_path, single_burst):
    """The single burst written to a WAV file."""
    path = tmp_path / "burst.wav"
    sf.write(str(path), single_burst * 0.9, SR)
    return path
