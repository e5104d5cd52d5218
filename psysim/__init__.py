"""Synthetic 2-AFC contrast detection data for multilevel psychometric models."""

from psysim.config import Config
from psysim.errors import ConfigurationError, DomainError, PsysimError
from psysim.simulator import run_simulation

__all__ = ['Config', 'ConfigurationError', 'DomainError', 'PsysimError', 'run_simulation']
