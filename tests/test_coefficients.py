import numpy as np
import pytest

from psysim.coefficients import sample_coefficients
from psysim.config import Config
from psysim.design import FactorLevels
from psysim.errors import ConfigurationError

MEANS = (7.0, 2.0, 2.0, 1.5, 0.0, -2.0)
SDS = (0.2,) * 6


def test_one_row_per_subject(default_levels, rng):
    coefs = sample_coefficients(default_levels.subjects, default_levels.sf_factor(), MEANS, SDS, rng)
    assert coefs.shape == (5, 6)
    assert list(coefs.index) == ['S1', 'S2', 'S3', 'S4', 'S5']
    assert list(coefs.columns) == ['Intercept', 'log_contrast'] + default_levels.sf_factor().column_names()


def test_draw_order_is_coefficient_major(default_levels):
    coefs = sample_coefficients(default_levels.subjects, default_levels.sf_factor(), MEANS, SDS,
                                np.random.default_rng(11))

    # all intercepts first, then all slopes, then each offset group
    z = np.random.default_rng(11).standard_normal(6 * 5).reshape(6, 5)
    expected = np.array(MEANS)[:, None] + np.array(SDS)[:, None] * z
    np.testing.assert_allclose(coefs.to_numpy().T, expected)


def test_same_seed_same_coefficients(default_levels):
    sf = default_levels.sf_factor()
    a = sample_coefficients(default_levels.subjects, sf, MEANS, SDS, np.random.default_rng(3))
    b = sample_coefficients(default_levels.subjects, sf, MEANS, SDS, np.random.default_rng(3))
    assert a.equals(b)


def test_means_near_population():
    levels = FactorLevels.from_config(Config(n_subjects=4000))
    coefs = sample_coefficients(levels.subjects, levels.sf_factor(), MEANS, SDS, np.random.default_rng(0))
    np.testing.assert_allclose(coefs.mean().to_numpy(), MEANS, atol=0.02)
    np.testing.assert_allclose(coefs.std().to_numpy(), SDS, atol=0.02)


def test_wrong_number_of_means(default_levels, rng):
    with pytest.raises(ConfigurationError):
        sample_coefficients(default_levels.subjects, default_levels.sf_factor(), MEANS[:5], SDS[:5], rng)
