"""
CSV/TSV loaders for expression matrices, annotations and sample metadata.

Expected matrix layout (comma- or tab-delimited, detected automatically):
```
isoform,X18KFU0001,X18KFU0002
ENST00000395080,152.31,98.44
ENST00000237623,48.12,35.70
```
- First column: isoform IDs (header name is not significant)
- Remaining columns: one per sample, numeric values (TPM)

Examples:
    >>> from isoplotter.io.loaders import load_expression_matrix, load_annotations
    >>> matrix = load_expression_matrix("expression.tsv")
    >>> annotations = load_annotations("gene_annotations.csv")
"""

from __future__ import annotations

import csv
import logging
import warnings
from pathlib import Path

import numpy as np
import pandas as pd

from isoplotter.core.annotations import AnnotationTable
from isoplotter.core.matrix import ExpressionMatrix

__all__ = [
    'load_expression_matrix',
    'load_annotations',
    'load_sample_metadata',
    'sniff_delimiter',
]

logger = logging.getLogger(__name__)


def sniff_delimiter(path: Path, sample_size: int = 8192) -> str:
    """
    Auto-detect delimiter from file content.

    Uses csv.Sniffer with a first-line count as fallback. A header with no
    delimiter at all is a single-column table and reads as CSV.

    Raises:
        ValueError: If the file has no content
    """
    with open(path, 'r', encoding='utf-8', errors='ignore') as f:
        sample = f.read(sample_size)

    if not sample.strip():
        raise ValueError(f"File is empty: {path}")

    try:
        dialect = csv.Sniffer().sniff(sample, delimiters='\t,;')
        return dialect.delimiter
    except csv.Error:
        pass

    first_line = sample.split('\n')[0]
    counts = {
        '\t': first_line.count('\t'),
        ',': first_line.count(','),
        ';': first_line.count(';'),
    }

    if max(counts.values()) == 0:
        return ','

    return max(counts, key=counts.get)


def _read_table(path: Path | str, kind: str, **kwargs) -> pd.DataFrame:
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")

    delimiter = sniff_delimiter(path)
    logger.debug(f"Sniffed delimiter for {path.name}: {repr(delimiter)}")

    try:
        df = pd.read_csv(path, sep=delimiter, **kwargs)
    except pd.errors.EmptyDataError as e:
        raise ValueError(f"{kind} file is empty: {path}") from e
    except Exception as e:
        raise ValueError(f"Failed to read {kind.lower()} file {path}: {e}") from e

    if df.empty:
        raise ValueError(f"{kind} file contains no data: {path}")

    return df


def load_expression_matrix(path: Path | str) -> ExpressionMatrix:
    """
    Load an isoform x sample expression table into an ExpressionMatrix.

    Duplicate isoform or sample IDs keep their first occurrence (with a
    UserWarning). Missing values are kept as NaN (with a UserWarning).

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the file is empty, non-numeric, or contains infinities
    """
    df = _read_table(path, "Expression", index_col=0)
    df.index = df.index.astype(str)
    df.columns = df.columns.astype(str)

    if df.shape[1] == 0:
        raise ValueError(f"Expression file contains no sample columns: {path}")

    if df.index.duplicated().any():
        n_duplicates = df.index.duplicated().sum()
        warnings.warn(
            f"Found {n_duplicates} duplicate isoform IDs. "
            "Using first occurrence of each.",
            UserWarning
        )
        df = df[~df.index.duplicated(keep='first')]

    if df.columns.duplicated().any():
        n_duplicates = df.columns.duplicated().sum()
        warnings.warn(
            f"Found {n_duplicates} duplicate sample IDs. "
            "Using first occurrence of each.",
            UserWarning
        )
        df = df.loc[:, ~df.columns.duplicated(keep='first')]

    try:
        data = df.to_numpy(dtype=float)
    except ValueError as e:
        bad = [c for c in df.columns if not pd.api.types.is_numeric_dtype(df[c])]
        raise ValueError(f"Expression file contains non-numeric sample columns: {bad[:5]}") from e

    if np.isnan(data).any():
        n_nan = int(np.isnan(data).sum())
        warnings.warn(
            f"Found {n_nan:,} NaN values ({100 * n_nan / data.size:.2f}% of data).",
            UserWarning
        )

    if np.isinf(data).any():
        raise ValueError(
            f"Expression file contains {int(np.isinf(data).sum())} infinite values. "
            "Please clean data before loading."
        )

    matrix = ExpressionMatrix(
        data=data,
        isoform_ids=pd.Index(df.index, name='isoform'),
        sample_ids=pd.Index(df.columns, name='sample_id'),
    )
    logger.info(f"Loaded {matrix.n_isoforms:,} isoforms x {matrix.n_samples:,} samples from {path}")

    return matrix


def load_annotations(path: Path | str) -> AnnotationTable:
    """
    Load an annotation table (isoform, entrez_id, gene_symbol).

    Raises:
        FileNotFoundError: If path does not exist
        UsageError: If required columns are missing
    """
    df = _read_table(path, "Annotation", dtype={'isoform': str, 'entrez_id': str, 'gene_symbol': str})
    annotations = AnnotationTable(df)
    logger.info(f"Loaded annotations: {annotations!r}")
    return annotations


def load_sample_metadata(path: Path | str) -> pd.DataFrame:
    """
    Load a sample metadata table.

    The sample-id column is checked later, when the table is used as a
    sample selector.
    """
    df = _read_table(path, "Metadata", dtype={'sample_id': str})
    logger.info(f"Loaded metadata for {len(df)} samples with columns: {list(df.columns)}")
    return df
