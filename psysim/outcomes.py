# Filename: psysim/outcomes.py
# Purpose: Draw correct/incorrect outcomes and derive the reported side.

import numpy as np


def sample_outcomes(p, rng):
    """One Bernoulli draw per row, in row order, from the shared generator."""
    return rng.binomial(1, np.asarray(p, dtype=float))


def derive_response(target_side, y, sides=("left", "right")):
    """
    Side the observer reported.

    A correct trial (y=1) reports the target side, an error reports the
    other one.

    Args:
        target_side (array-like): side the target appeared on
        y (array-like): 1 if correct, 0 if not
        sides (tuple): the two side labels

    Returns:
        np.ndarray: response labels
    """
    target_side = np.asarray(target_side)
    y = np.asarray(y)
    first, second = sides
    other = np.where(target_side == first, second, first)
    return np.where(y == 1, target_side, other)


def add_outcomes(table, rng, sides=("left", "right")):
    """Append 'y' and 'response' columns to the table."""
    table['y'] = sample_outcomes(table['p'], rng)
    table['response'] = derive_response(table['target_side'], table['y'], sides)
    return table
