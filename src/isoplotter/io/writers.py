"""
CSV writers for subset results.

The wide table keeps isoforms as the first column and one column per
sample, i.e. the same layout load_expression_matrix() reads, so a result
can be fed back in as input.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from isoplotter.utils.fileio import atomic_write_text

__all__ = ['write_result_table', 'write_long_table']

logger = logging.getLogger(__name__)


def write_result_table(table: pd.DataFrame, path: Path | str) -> Path:
    """
    Write a wide isoform x sample table to CSV.

    Creates parent directories and overwrites existing files.

    Raises:
        TypeError: If table is not a DataFrame
    """
    if not isinstance(table, pd.DataFrame):
        raise TypeError(f"table must be pd.DataFrame, got {type(table)}")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    out = table.rename_axis(index='isoform')
    atomic_write_text(path, out.to_csv())
    logger.info(f"Wrote {table.shape[0]} isoforms x {table.shape[1]} samples to {path}")
    return path


def write_long_table(long_table: pd.DataFrame, path: Path | str) -> Path:
    """Write a long-format (isoform, sample_id, frac) table to CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    atomic_write_text(path, long_table.to_csv(index=False))
    logger.info(f"Wrote {len(long_table)} long-format rows to {path}")
    return path
