# Filename: psysim/design.py
# Purpose: Factorial design table and the design matrix for the
#          log-contrast + spatial-frequency model.

import itertools
import logging

import numpy as np
import pandas as pd

from psysim.errors import ConfigurationError, DomainError

logger = logging.getLogger(__name__)

# Column order of the design table, subject first
DESIGN_COLUMNS = ['subject', 'contrast', 'sf', 'target_side', 'trial']


class Factor:
    """
    A categorical variable with a fixed, sorted set of levels.

    The reference level (omitted from dummy coding) is always the smallest
    level, so it depends only on the level set, never on which rows are
    present in a given subset.
    """
    def __init__(self, name, levels):
        """
        Args:
            name (str): column the factor encodes
            levels (iterable): level values; duplicates are removed and the
                               rest sorted ascending
        """
        levels = tuple(sorted(set(levels)))
        if not levels:
            raise ConfigurationError(f"Factor '{name}' has no levels")
        self.name = name
        self.levels = levels

    @property
    def reference(self):
        return self.levels[0]

    @property
    def non_reference(self):
        """Non-reference levels, in the order their dummy columns appear."""
        return self.levels[1:]

    def column_names(self):
        return [f"{self.name}[{level}]" for level in self.non_reference]

    def dummies(self, values):
        """
        Treatment-code values against the reference level.

        Returns:
            np.ndarray: (len(values), n_levels - 1) array of 0/1
        """
        values = np.asarray(values)
        unknown = set(np.unique(values)) - set(self.levels)
        if unknown:
            raise ConfigurationError(
                f"Values {sorted(unknown)} are not levels of factor '{self.name}'")
        if not self.non_reference:
            return np.zeros((len(values), 0))
        return (values[:, None] == np.asarray(self.non_reference)[None, :]).astype(float)

    def __len__(self):
        return len(self.levels)

    def __repr__(self):
        return f"Factor({self.name!r}, levels={list(self.levels)})"


class FactorLevels:
    """The five level sets that span the design."""
    def __init__(self, subjects, contrasts, sfs, target_sides, trials, sf_decimals=2):
        self.subjects = list(subjects)
        self.contrasts = list(contrasts)
        self.sfs = list(sfs)
        self.target_sides = list(target_sides)
        self.trials = list(trials)
        self.sf_decimals = sf_decimals

        level_sets = {
            'subject': self.subjects, 'contrast': self.contrasts, 'sf': self.sfs,
            'target_side': self.target_sides, 'trial': self.trials,
        }
        for name, values in level_sets.items():
            if not values:
                raise ConfigurationError(f"Level set for '{name}' is empty")

    @classmethod
    def from_config(cls, config):
        return cls(
            subjects=config.subjects(),
            contrasts=config.contrasts(),
            sfs=config.sfs(),
            target_sides=config.target_sides,
            trials=config.trials(),
            sf_decimals=config.sf_decimals,
        )

    def sf_factor(self):
        """Spatial-frequency bucket factor built from the full level set."""
        return Factor('sf_bucket', np.round(self.sfs, self.sf_decimals).tolist())

    @property
    def n_cells(self):
        return (len(self.subjects) * len(self.contrasts) * len(self.sfs)
                * len(self.target_sides) * len(self.trials))


def build_design_table(levels):
    """
    Build the full cross-product of the design factors.

    Rows follow expand.grid nesting: subject varies fastest, trial slowest.

    Args:
        levels (FactorLevels): the factor level sets

    Returns:
        pd.DataFrame: one row per (subject, contrast, sf, target_side, trial),
                      plus the rounded 'sf_bucket' column
    """
    # itertools.product varies the last argument fastest
    grid = itertools.product(levels.trials, levels.target_sides, levels.sfs,
                             levels.contrasts, levels.subjects)
    table = pd.DataFrame(list(grid), columns=DESIGN_COLUMNS[::-1])[DESIGN_COLUMNS]
    table.insert(3, 'sf_bucket', np.round(table['sf'].to_numpy(), levels.sf_decimals))
    logger.info(f"Built design table with {len(table)} rows")
    return table


def design_matrix(rows, sf_factor):
    """
    Encode rows for the model intercept + log(contrast) + factor(sf_bucket).

    Args:
        rows (pd.DataFrame): design table or any subset of it
        sf_factor (Factor): spatial-frequency factor over the global level set

    Returns:
        pd.DataFrame: same index as rows; columns Intercept, log_contrast,
                      then one dummy per non-reference sf level (ascending)

    Raises:
        DomainError: if any contrast is not strictly positive
    """
    contrast = rows['contrast'].to_numpy(dtype=float)
    if np.any(~(contrast > 0)):
        bad = np.unique(contrast[~(contrast > 0)])
        raise DomainError(f"log(contrast) undefined for contrast values {bad.tolist()}")

    columns = ['Intercept', 'log_contrast'] + sf_factor.column_names()
    values = np.column_stack([
        np.ones(len(rows)),
        np.log(contrast),
        sf_factor.dummies(rows[sf_factor.name].to_numpy()),
    ])
    return pd.DataFrame(values, index=rows.index, columns=columns)
