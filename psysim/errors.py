# Filename: psysim/errors.py
# Purpose: Exception types raised by the simulation pipeline.


class PsysimError(Exception):
    """Base class for psysim errors."""


class DomainError(PsysimError, ValueError):
    """A value fell outside the domain of a transform (e.g. log of a non-positive contrast)."""


class ConfigurationError(PsysimError, ValueError):
    """Factor levels or coefficient settings are malformed or inconsistent."""
