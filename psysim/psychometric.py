# Filename: psysim/psychometric.py
# Purpose: Linear predictor per trial and the 2-AFC Weibull psychometric link.

import logging

import numpy as np
import pandas as pd
from scipy import stats

from psysim.design import design_matrix

logger = logging.getLogger(__name__)

CHANCE = 0.5                    # guess rate for two alternatives
_EPS = np.finfo(float).eps


def weibull_2afc(eta):
    """
    Inverse link for a 2-AFC task with a Weibull psychometric function.

    p = 0.5 + 0.5 * F(exp(eta)), F the unit Weibull CDF, which equals
    1 - 0.5 * exp(-exp(eta)). Finite inputs map strictly inside (0.5, 1).

    Args:
        eta (float or array-like): linear predictor

    Returns:
        np.ndarray or float: probability correct
    """
    eta = np.asarray(eta, dtype=float)
    with np.errstate(over='ignore'):
        detect = stats.weibull_min.cdf(np.exp(eta), c=1.0)
    p = CHANCE + (1.0 - CHANCE) * detect
    p = np.where(np.isfinite(eta), np.clip(p, CHANCE + _EPS, 1.0 - _EPS), p)
    return p if p.ndim else float(p)


def linear_predictor(table, coefs, sf_factor):
    """
    Compute eta = X_s @ beta_s subject by subject.

    Each subject's design submatrix is built from the global sf factor, so
    its columns match the coefficient columns whatever rows the subset holds.

    Args:
        table (pd.DataFrame): design table
        coefs (pd.DataFrame): subjects x coefficients
        sf_factor (Factor): global spatial-frequency factor

    Returns:
        pd.Series: eta, indexed like table
    """
    eta = pd.Series(np.nan, index=table.index, name='eta')
    for subject, rows in table.groupby('subject', sort=False):
        X = design_matrix(rows, sf_factor)
        beta = coefs.loc[subject, X.columns].to_numpy(dtype=float)
        eta.loc[rows.index] = X.to_numpy() @ beta
        logger.debug(f"{subject}: eta range [{eta.loc[rows.index].min():.2f}, "
                     f"{eta.loc[rows.index].max():.2f}]")
    return eta


def add_probabilities(table, coefs, sf_factor):
    """Append 'eta' and 'p' columns to the design table."""
    table['eta'] = linear_predictor(table, coefs, sf_factor)
    table['p'] = weibull_2afc(table['eta'].to_numpy())
    return table
