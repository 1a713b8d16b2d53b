"""
Bundled example datasets.

Two small reference tables ship with the package:

- gene_annotations: isoform, entrez_id, gene_symbol for a handful of genes
  (SPP1, GAPDH, ACTB, MYC)
- expression_sub: TPM values for those isoforms across 10 samples; the
  first column holds isoform IDs, remaining columns are sample IDs

One MYC isoform (ENST00000621592) is annotated but has no row in
expression_sub, which makes the pair useful for exercising the
annotated-but-unquantified diagnostic.

Both loaders return fresh DataFrames, so callers may modify them freely.

Examples:
    >>> from isoplotter.datasets import load_expression_sub, load_gene_annotations
    >>> data = load_expression_sub()
    >>> data.shape
    (12, 11)
    >>> load_gene_annotations()['gene_symbol'].unique().tolist()
    ['SPP1', 'GAPDH', 'ACTB', 'MYC']
"""

from __future__ import annotations

from importlib import resources

import pandas as pd

__all__ = ['load_gene_annotations', 'load_expression_sub', 'list_datasets']

_DATASETS = {
    'gene_annotations': 'gene_annotations.csv',
    'expression_sub': 'expression_sub.csv',
}


def list_datasets() -> list[str]:
    """Names of the bundled datasets."""
    return list(_DATASETS)


def _read_bundled(name: str) -> pd.DataFrame:
    if name not in _DATASETS:
        raise KeyError(f"Unknown dataset '{name}'. Available: {list_datasets()}")
    source = resources.files(__name__).joinpath(_DATASETS[name])
    with source.open('r', encoding='utf-8') as f:
        return pd.read_csv(f, dtype={'isoform': str})


def load_gene_annotations() -> pd.DataFrame:
    """Isoform annotations: columns isoform, entrez_id, gene_symbol."""
    return _read_bundled('gene_annotations')


def load_expression_sub() -> pd.DataFrame:
    """Example TPM matrix: isoform column followed by 10 sample columns."""
    return _read_bundled('expression_sub')
