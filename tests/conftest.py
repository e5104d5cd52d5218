import numpy as np
import pytest

from psysim.config import Config
from psysim.design import FactorLevels


@pytest.fixture
def small_config():
    """Two subjects, one contrast, one sf, three trials per side: 12 rows."""
    return Config(n_subjects=2, contrast_levels=[0.01], sf_levels=[1.0], n_trials=3,
                  coef_means=(7.0, 2.0), coef_sds=(0.2, 0.2), seed=7)


@pytest.fixture
def default_levels():
    return FactorLevels.from_config(Config())


@pytest.fixture
def rng():
    return np.random.default_rng(2024)
