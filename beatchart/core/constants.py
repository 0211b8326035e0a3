"""Global constants for beatchart."""

# Analysis framing
DEFAULT_WINDOW_SIZE = 1024  # ~23ms at 44.1kHz
DEFAULT_SMOOTH_WIDTH = 3

# Tempo band
MIN_BPM = 60.0
MAX_BPM = 200.0
IOI_HISTOGRAM_BINS = 50
MIN_BEAT_PERIOD = 0.1
MAX_BEAT_PERIOD = 2.0
DEFAULT_BEAT_PERIOD = 0.5  # 120 BPM

# Leading-onset rescue
RESCUE_THRESHOLD_FACTOR = 0.1
RESCUE_MIN_GAP = 0.1

# Lane assignment
STRONG_PERCENTILE = 0.6
