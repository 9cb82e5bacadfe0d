"""Constants and default values for stimulus generation and thresholding."""

# Stimulus defaults (seconds / Hz), lab settings for SFG stimuli
DEFAULT_SAMPLE_RATE = 44100
DEFAULT_CHORD_DURATION = 0.05
DEFAULT_CHORD_ONSET = 0.01
DEFAULT_TOTAL_DURATION = 2.0
DEFAULT_TONE_COMPONENTS = (9, 21)
DEFAULT_FREQ_MIN = 179
DEFAULT_FREQ_MAX = 7246
DEFAULT_GRID_LENGTH = 129
DEFAULT_FIGURE_DURATION = 10
DEFAULT_FIGURE_COHERENCE = 4
DEFAULT_FIGURE_STEP = 0
DEFAULT_FIGURE_MIN_ONSET = 0.2
DEFAULT_SNR_MAX_DEVIATION = 1

# Batch generation limits
MAX_STIMULI_PER_SET = 1000

# QUEST defaults
DEFAULT_T_GUESS_SD = 5.0
DEFAULT_BETA = 3.5
DEFAULT_DELTA = 0.02
DEFAULT_GAMMA = 0.5
DEFAULT_GRAIN = 0.001
DEFAULT_RANGE = 7.0

# Prior guesses used by the two thresholding stages (log SNR)
COHERENCE_T_GUESS = -0.21  # SNR ~0.81, coherence 9 of 20 tones
COHERENCE_P_THRESHOLD = 0.85
BACKGROUND_T_GUESS = -0.12  # SNR ~0.89
BACKGROUND_P_THRESHOLD = 0.8

# Threshold run defaults
DEFAULT_IGNORE_TRIALS = 6
DEFAULT_MIN_TRIALS = 90
DEFAULT_EXTRA_TRIALS = 20
DEFAULT_CATCH_RATIO = 0.5

# Rerun advice threshold for catch trials
MAX_FALSE_ALARM_RATE = 0.25
