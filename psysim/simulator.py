# Filename: psysim/simulator.py
# Purpose: Runs the full contrast detection simulation, from design table to
#          per-subject CSV files.

import logging
import time

import numpy as np

from psysim.coefficients import sample_coefficients
from psysim.config import Config
from psysim.design import FactorLevels, build_design_table
from psysim.outcomes import add_outcomes
from psysim.psychometric import add_probabilities
from psysim.writer import assign_ids, shuffle_rows, write_coefficients, write_subject_files

logger = logging.getLogger(__name__)


class SimulationResult:
    """What a run produced: the final trial table, coefficients and files."""
    def __init__(self, table, coefs, paths, coef_path=None):
        self.table = table
        self.coefs = coefs
        self.paths = paths
        self.coef_path = coef_path

    def __repr__(self):
        return (f"SimulationResult(rows={len(self.table)}, subjects={len(self.coefs)}, "
                f"files={len(self.paths)})")


def simulate_table(config, rng):
    """
    Build the design and simulate every trial, without touching disk.

    The generator is consumed in a fixed order: coefficients, outcomes,
    row permutation, identifiers.

    Args:
        config (Config): validated configuration
        rng (np.random.Generator): the single generator for the run

    Returns:
        tuple: (shuffled trial table with ids, coefficient DataFrame)
    """
    levels = FactorLevels.from_config(config)
    sf_factor = levels.sf_factor()
    if len(sf_factor) == 1:
        logger.warning("Only one spatial frequency level; the model has no sf offsets")

    table = build_design_table(levels)
    coefs = sample_coefficients(levels.subjects, sf_factor, config.coef_means, config.coef_sds, rng)
    table = add_probabilities(table, coefs, sf_factor)
    table = add_outcomes(table, rng, tuple(config.target_sides))
    table = shuffle_rows(table, rng)
    table = assign_ids(table, rng)
    return table, coefs


def summarize(table):
    """
    Proportion correct and mean model probability per subject and sf bucket.

    Returns:
        pd.DataFrame: columns subject, sf_bucket, n, prop_correct, mean_p
    """
    summary = (table.groupby(['subject', 'sf_bucket'], sort=True)
               .agg(n=('y', 'size'), prop_correct=('y', 'mean'), mean_p=('p', 'mean'))
               .reset_index())
    return summary


# --- Main Simulation Function ---
def run_simulation(config=None, output_dir='data', save_coefficients=False):
    """
    Run the simulation and write one CSV per subject.

    Args:
        config (Config): configuration; defaults are used if None
        output_dir (str or Path): existing directory for the output files
        save_coefficients (bool): also write the generating coefficients

    Returns:
        SimulationResult
    """
    if config is None:
        config = Config()
    config.validate()

    logger.info(f"Running contrast detection simulation (seed={config.seed})")
    start_time = time.time()

    rng = np.random.default_rng(config.seed)
    table, coefs = simulate_table(config, rng)

    logger.info(f"Overall proportion correct: {table['y'].mean():.3f} "
                f"(mean p = {table['p'].mean():.3f})")
    for _, row in summarize(table).iterrows():
        logger.debug(f"{row['subject']} sf={row['sf_bucket']}: "
                     f"{row['prop_correct']:.3f} correct over {row['n']} trials")

    paths = write_subject_files(table, output_dir, config.file_pattern)
    coef_path = write_coefficients(coefs, output_dir) if save_coefficients else None

    logger.info(f"Simulation finished in {time.time() - start_time:.2f} seconds.")
    return SimulationResult(table, coefs, paths, coef_path)
