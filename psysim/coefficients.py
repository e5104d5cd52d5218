# Filename: psysim/coefficients.py
# Purpose: Draw per-subject regression coefficients from the population.

import logging

import pandas as pd
from scipy import stats

from psysim.errors import ConfigurationError

logger = logging.getLogger(__name__)


def coefficient_names(sf_factor):
    return ['Intercept', 'log_contrast'] + sf_factor.column_names()


def sample_coefficients(subjects, sf_factor, means, sds, rng):
    """
    Draw one coefficient vector per subject.

    Each coefficient is drawn for all subjects before moving to the next
    (all intercepts, then all slopes, then each sf offset in turn), so the
    generator is consumed in a fixed order.

    Args:
        subjects (list): subject identifiers, one row each
        sf_factor (Factor): spatial-frequency factor (sets the offset columns)
        means (sequence): population mean per coefficient
        sds (sequence): population standard deviation per coefficient
        rng (np.random.Generator): shared generator

    Returns:
        pd.DataFrame: subjects x coefficients, columns aligned with
                      design_matrix() output
    """
    names = coefficient_names(sf_factor)
    if len(means) != len(names) or len(sds) != len(names):
        raise ConfigurationError(
            f"Need {len(names)} coefficient means/sds for columns {names}, "
            f"got {len(means)}/{len(sds)}")

    draws = {}
    for name, mu, sigma in zip(names, means, sds):
        draws[name] = stats.norm(loc=mu, scale=sigma).rvs(size=len(subjects), random_state=rng)

    coefs = pd.DataFrame(draws, index=pd.Index(subjects, name='subject'))
    for subject, row in coefs.iterrows():
        logger.debug(f"Coefficients for {subject}: {row.round(3).to_dict()}")
    return coefs
