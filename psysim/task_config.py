# Filename: psysim/task_config.py
# Configuration variables for the 2-AFC contrast detection design

import numpy as np

# Subjects
N_SUBJECTS = 5
SUBJECT_FORMAT = "S{}"      # S1, S2, ...

# Stimulus contrast (log-spaced)
CONTRAST_RANGE = (1e-3, 10 ** -0.5)
N_CONTRASTS = 7

# Spatial frequency in cycles/deg (log-spaced)
SF_RANGE = (0.5, 40.0)
N_SFS = 5
SF_DECIMALS = 2             # rounding used for the sf_bucket factor

TARGET_SIDES = ("left", "right")
N_TRIALS = 20               # trials per design cell

# Simulation parameters
SEED = 1234
FILE_PATTERN = "data_{subject}.csv"


def log_spaced(low, high, n):
    """n values evenly spaced on a log10 scale between low and high (inclusive)."""
    return 10 ** np.linspace(np.log10(low), np.log10(high), n)
