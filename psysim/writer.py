# Filename: psysim/writer.py
# Purpose: Shuffle, tag and save the simulated trials, one file per subject.

import logging
import uuid
from pathlib import Path

from psysim import task_config

logger = logging.getLogger(__name__)

# Columns kept in the per-subject files (trial index, eta and y are dropped)
OUTPUT_COLUMNS = ['subject', 'contrast', 'sf', 'sf_bucket', 'target_side', 'p', 'response', 'id']
COEFFICIENTS_FILE = 'true_coefficients.csv'


def shuffle_rows(table, rng):
    """Return the table in a uniformly random row order (index reset)."""
    order = rng.permutation(len(table))
    return table.iloc[order].reset_index(drop=True)


def new_id(rng):
    """Random version-4 UUID drawn from rng, as 8-4-4-4-12 hex."""
    return str(uuid.UUID(bytes=rng.bytes(16), version=4))


def assign_ids(table, rng):
    """Append an 'id' column with one fresh identifier per row, in row order."""
    table['id'] = [new_id(rng) for _ in range(len(table))]
    return table


def subject_filename(subject, pattern=task_config.FILE_PATTERN):
    return pattern.format(subject=subject)


def write_subject_files(table, output_dir, pattern=task_config.FILE_PATTERN):
    """
    Write each subject's rows to its own CSV file.

    Subjects are written in order of first appearance. A failure stops the
    loop; files written before it stay on disk.

    Args:
        table (pd.DataFrame): shuffled table with 'id' assigned
        output_dir (str or Path): existing directory to write into
        pattern (str): file name pattern containing '{subject}'

    Returns:
        list[Path]: written files

    Raises:
        OSError: if the directory is missing or a file cannot be written
    """
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        logger.error(f"Output directory does not exist: {output_dir}")
        raise FileNotFoundError(f"Output directory does not exist: {output_dir}")

    written = []
    for subject, rows in table.groupby('subject', sort=False):
        path = output_dir / subject_filename(subject, pattern)
        try:
            with open(path, 'w', newline='') as f:
                rows[OUTPUT_COLUMNS].to_csv(f, index=False)
        except OSError as e:
            logger.error(f"Could not write {path}: {e}")
            raise
        logger.debug(f"Wrote {len(rows)} rows to {path}")
        written.append(path)

    logger.info(f"Saved {len(written)} subject files to {output_dir}")
    return written


def write_coefficients(coefs, output_dir, filename=COEFFICIENTS_FILE):
    """Save the generating coefficients for later recovery checks."""
    path = Path(output_dir) / filename
    try:
        coefs.to_csv(path, index=True, index_label='subject', float_format='%.6f')
    except OSError as e:
        logger.error(f"Could not write {path}: {e}")
        raise
    logger.info(f"True coefficients saved to {path}")
    return path
