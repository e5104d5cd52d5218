#!/usr/bin/env python
# Filename: run_simulation.py
# Purpose: Command-line entry point for generating synthetic contrast detection data

import argparse
import logging
import sys
from pathlib import Path

from psysim.config import Config
from psysim.errors import PsysimError
from psysim.simulator import run_simulation


def build_config(params_file=None, seed=None):
    config = Config.from_json(params_file) if params_file else Config()
    if seed is not None:
        config.seed = seed
    return config


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate per-subject synthetic 2-AFC contrast detection data"
    )
    parser.add_argument(
        "--output-dir", "-o", default="data",
        help="Directory for the per-subject CSV files (default: data)"
    )
    parser.add_argument(
        "--params", "-p",
        help="Path to JSON file overriding the default configuration"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed (overrides the configured seed)"
    )
    parser.add_argument(
        "--save-coefficients", action="store_true",
        help="Also write the generating coefficients to true_coefficients.csv"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log per-subject details"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = build_config(args.params, args.seed)
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        result = run_simulation(config, output_dir, save_coefficients=args.save_coefficients)
    except (PsysimError, OSError) as e:
        logging.error(f"Simulation failed: {e}")
        return 1

    logging.info(f"Wrote {len(result.table)} trials for {len(result.paths)} subjects to {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
