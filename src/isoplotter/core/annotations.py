"""
Isoform annotation lookup.

An annotation table maps each transcript to the gene it belongs to, in both
Entrez and HUGO form. It is read-only: the subsetting pipeline consults it to
expand gene symbols into isoforms and to check requested isoforms, never to
modify it.

Expected columns:
    - isoform: transcript identifier (e.g., ENST00000395080)
    - entrez_id: Entrez Gene ID (e.g., 6696)
    - gene_symbol: HUGO symbol (e.g., SPP1)
"""

from __future__ import annotations

import logging
from typing import Iterable

import pandas as pd

from isoplotter.core.errors import UsageError

__all__ = ['AnnotationTable', 'ANNOTATION_COLUMNS']

logger = logging.getLogger(__name__)

ANNOTATION_COLUMNS = ('isoform', 'entrez_id', 'gene_symbol')


class AnnotationTable:
    """
    Validated, read-only view over an isoform annotation DataFrame.

    Attributes:
        frame: Copy of the annotation rows with identifier columns as strings

    Examples:
        >>> annotations = AnnotationTable(pd.DataFrame({
        ...     'isoform': ['ENST1', 'ENST2', 'ENST3'],
        ...     'entrez_id': [6696, 6696, 2597],
        ...     'gene_symbol': ['SPP1', 'SPP1', 'GAPDH'],
        ... }))
        >>> annotations.isoforms_for_genes(['SPP1'])
        ['ENST1', 'ENST2']
    """

    def __init__(self, frame: pd.DataFrame):
        if not isinstance(frame, pd.DataFrame):
            raise TypeError(f"annotations must be pd.DataFrame, got {type(frame)}")

        missing = [c for c in ANNOTATION_COLUMNS if c not in frame.columns]
        if missing:
            raise UsageError(
                f"The provided annotations have no column(s) named {missing}. "
                f"Required columns: {list(ANNOTATION_COLUMNS)}"
            )

        frame = frame.loc[:, list(ANNOTATION_COLUMNS)].copy()
        frame['isoform'] = frame['isoform'].astype(str)
        frame['gene_symbol'] = frame['gene_symbol'].astype(str)

        n_dup = int(frame['isoform'].duplicated().sum())
        if n_dup:
            logger.warning(f"Annotation table has {n_dup} duplicate isoform rows")

        self._frame = frame.reset_index(drop=True)

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    def __len__(self) -> int:
        return len(self._frame)

    def known_isoforms(self) -> pd.Index:
        """Every distinct isoform identifier in the table."""
        return pd.Index(self._frame['isoform'].unique(), name='isoform')

    def known_symbols(self) -> pd.Index:
        """Every distinct gene symbol in the table."""
        return pd.Index(self._frame['gene_symbol'].unique(), name='gene_symbol')

    def isoforms_for_genes(self, symbols: Iterable[str]) -> list[str]:
        """
        All isoforms annotated to any of the given gene symbols.

        Matching is exact (HUGO symbols are case-sensitive). Result order
        follows the annotation table, without repeats.
        """
        symbols = [str(s) for s in symbols]
        hits = self._frame.loc[self._frame['gene_symbol'].isin(symbols), 'isoform']
        return list(dict.fromkeys(hits))

    def genes_for_isoforms(self, isoforms: Iterable[str]) -> pd.DataFrame:
        """Annotation rows for the given isoforms, indexed by isoform."""
        isoforms = [str(i) for i in isoforms]
        rows = self._frame[self._frame['isoform'].isin(isoforms)]
        return rows.drop_duplicates('isoform').set_index('isoform')

    def __repr__(self) -> str:
        return (
            f"AnnotationTable({len(self._frame)} isoforms, "
            f"{self._frame['gene_symbol'].nunique()} genes)"
        )
