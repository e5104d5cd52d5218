"""
Configuration settings for the contrast detection simulation.
"""
import json

import numpy as np

from psysim import coef_config, task_config
from psysim.errors import ConfigurationError


class Config:
    def __init__(self, **overrides):
        """
        Initialize simulation configuration parameters.

        Defaults come from task_config and coef_config; any attribute may be
        overridden by keyword.
        """
        # Subjects
        self.n_subjects = task_config.N_SUBJECTS
        self.subject_format = task_config.SUBJECT_FORMAT
        self.subject_ids = None         # explicit list wins over n_subjects

        # Stimulus levels
        self.contrast_range = task_config.CONTRAST_RANGE
        self.n_contrasts = task_config.N_CONTRASTS
        self.contrast_levels = None     # explicit list wins over the range
        self.sf_range = task_config.SF_RANGE
        self.n_sfs = task_config.N_SFS
        self.sf_levels = None
        self.sf_decimals = task_config.SF_DECIMALS

        # Trial structure
        self.target_sides = task_config.TARGET_SIDES
        self.n_trials = task_config.N_TRIALS

        # Coefficient distributions
        self.coef_means = coef_config.COEF_MEANS
        self.coef_sds = coef_config.COEF_SDS

        # Simulation parameters
        self.seed = task_config.SEED
        self.file_pattern = task_config.FILE_PATTERN

        self.update(overrides)

    @classmethod
    def from_json(cls, path):
        """Build a Config from a JSON file of overrides."""
        with open(path, 'r') as f:
            overrides = json.load(f)
        if not isinstance(overrides, dict):
            raise ConfigurationError(f"Expected a JSON object in {path}")
        return cls(**overrides)

    def update(self, overrides):
        """
        Override configuration attributes.

        Args:
            overrides (dict): attribute name -> value

        Raises:
            ConfigurationError: if a key is not a known setting
        """
        for key, value in overrides.items():
            if key.startswith('_') or not hasattr(self, key) or callable(getattr(self, key)):
                raise ConfigurationError(f"Unknown configuration key: {key!r}")
            setattr(self, key, value)

    # --- Derived level sets ---

    def subjects(self):
        if self.subject_ids is not None:
            return [str(s) for s in self.subject_ids]
        return [self.subject_format.format(i) for i in range(1, self.n_subjects + 1)]

    def contrasts(self):
        if self.contrast_levels is not None:
            return np.asarray(self.contrast_levels, dtype=float)
        return task_config.log_spaced(*self.contrast_range, self.n_contrasts)

    def sfs(self):
        if self.sf_levels is not None:
            return np.asarray(self.sf_levels, dtype=float)
        return task_config.log_spaced(*self.sf_range, self.n_sfs)

    def trials(self):
        return list(range(1, self.n_trials + 1))

    def validate(self):
        """
        Validate configuration parameters.

        Returns:
            bool: True if configuration is valid

        Raises:
            ConfigurationError: describing the first problem found
        """
        subjects = self.subjects()
        if not subjects:
            raise ConfigurationError("At least one subject is required")
        if len(set(subjects)) != len(subjects):
            raise ConfigurationError(f"Subject identifiers must be unique: {subjects}")

        if self.contrast_levels is None:
            self._check_range('contrast_range', self.contrast_range, self.n_contrasts)
        if self.sf_levels is None:
            self._check_range('sf_range', self.sf_range, self.n_sfs)

        contrasts = self.contrasts()
        if contrasts.size == 0:
            raise ConfigurationError("Contrast level set is empty")
        if not np.all(np.isfinite(contrasts)):
            raise ConfigurationError("Contrast levels must be finite")
        if len(np.unique(contrasts)) != len(contrasts):
            raise ConfigurationError(f"Contrast levels must be distinct: {contrasts.tolist()}")

        sfs = self.sfs()
        if sfs.size == 0:
            raise ConfigurationError("Spatial frequency level set is empty")
        if np.any(sfs <= 0) or not np.all(np.isfinite(sfs)):
            raise ConfigurationError("Spatial frequencies must be positive and finite")
        buckets = np.round(sfs, self.sf_decimals)
        if len(np.unique(buckets)) != len(buckets):
            raise ConfigurationError(
                f"Spatial frequencies collide after rounding to {self.sf_decimals} decimals: {list(buckets)}")

        if len(self.target_sides) != 2 or len(set(self.target_sides)) != 2:
            raise ConfigurationError("Exactly two distinct target sides are required")
        if self.n_trials < 1:
            raise ConfigurationError("Trials per cell must be at least 1")

        n_coefs = 2 + len(sfs) - 1
        if len(self.coef_means) != n_coefs or len(self.coef_sds) != n_coefs:
            raise ConfigurationError(
                f"Expected {n_coefs} coefficient means and sds for {len(sfs)} spatial frequencies, "
                f"got {len(self.coef_means)} and {len(self.coef_sds)}")
        if any(sd <= 0 for sd in self.coef_sds):
            raise ConfigurationError("Coefficient standard deviations must be positive")

        if '{subject}' not in self.file_pattern:
            raise ConfigurationError("file_pattern must contain '{subject}'")
        return True

    @staticmethod
    def _check_range(name, bounds, n):
        if len(bounds) != 2:
            raise ConfigurationError(f"{name} must be a (low, high) pair")
        low, high = bounds
        if low <= 0 or high <= 0:
            raise ConfigurationError(f"{name} bounds must be positive")
        if n < 1:
            raise ConfigurationError(f"{name} needs at least one level")
        if low > high or (n > 1 and low == high):
            raise ConfigurationError(f"{name} must satisfy low < high for {n} levels")
