"""
Core data structure for isoform-level expression matrices.

ExpressionMatrix couples the numerical values (TPM or fractions) with the
identifiers that give them meaning: one row per isoform, one column per
sample.

Biological Context:
    Isoform quantification tools (salmon, kallisto, RSEM) report one row per
    transcript and one column per sample:
    - Rows = isoforms (e.g., ENST00000395080)
    - Columns = samples (e.g., X18KFU0001)
    - Values = abundances (usually TPM, non-negative)

    Tabular exports carry the isoform ID as the first column rather than as
    a row label, so from_frame() reads that layout directly.

Engineering Design:
    - Immutable: Subsetting returns new instances
    - Validated: Constructor checks shape and identifier uniqueness
    - Label-based selection: rows/columns picked by identifier, keeping the
      order in which they are requested

Examples:
    >>> import pandas as pd
    >>> from isoplotter.core.matrix import ExpressionMatrix
    >>>
    >>> df = pd.DataFrame({
    ...     'isoform': ['A', 'B', 'C'],
    ...     'S1': [10, 5, 0],
    ...     'S2': [30, 5, 10],
    ... })
    >>> matrix = ExpressionMatrix.from_frame(df)
    >>> matrix.shape
    (3, 2)
    >>> subset = matrix.select_isoforms(['A', 'B']).select_samples(['S2'])
    >>> subset.to_frame()
             S2
    isoform
    A      30.0
    B       5.0
"""

from __future__ import annotations

from typing import Iterable, Optional
import numpy as np
import pandas as pd

__all__ = ['ExpressionMatrix']


class ExpressionMatrix:
    """
    Immutable container for an isoform x sample expression matrix.

    Attributes:
        data: Numerical expression matrix (isoforms x samples)
        isoform_ids: Row identifiers (transcript IDs)
        sample_ids: Column identifiers (sample IDs)

    Shape Invariants:
        - data.shape[0] == len(isoform_ids)
        - data.shape[1] == len(sample_ids)
        - isoform_ids and sample_ids are unique
    """

    def __init__(
        self,
        data: np.ndarray,
        isoform_ids: pd.Index,
        sample_ids: pd.Index,
    ):
        """
        Initialize ExpressionMatrix with validation.

        Args:
            data: Expression matrix (isoforms x samples)
            isoform_ids: Row identifiers
            sample_ids: Column identifiers

        Raises:
            TypeError: If data types are incorrect
            ValueError: If shapes are inconsistent or identifiers repeat
        """
        if not isinstance(data, np.ndarray):
            raise TypeError(f"data must be np.ndarray, got {type(data)}")
        if not isinstance(isoform_ids, pd.Index):
            raise TypeError(f"isoform_ids must be pd.Index, got {type(isoform_ids)}")
        if not isinstance(sample_ids, pd.Index):
            raise TypeError(f"sample_ids must be pd.Index, got {type(sample_ids)}")

        if data.ndim != 2:
            raise ValueError(f"data must be 2D, got shape {data.shape}")

        n_isoforms, n_samples = data.shape

        if len(isoform_ids) != n_isoforms:
            raise ValueError(
                f"isoform_ids length ({len(isoform_ids)}) must match data rows ({n_isoforms})"
            )
        if len(sample_ids) != n_samples:
            raise ValueError(
                f"sample_ids length ({len(sample_ids)}) must match data columns ({n_samples})"
            )

        if isoform_ids.has_duplicates:
            dupes = isoform_ids[isoform_ids.duplicated()].unique().tolist()
            raise ValueError(f"isoform_ids must be unique, duplicated: {dupes[:5]}")
        if sample_ids.has_duplicates:
            dupes = sample_ids[sample_ids.duplicated()].unique().tolist()
            raise ValueError(f"sample_ids must be unique, duplicated: {dupes[:5]}")

        self._data = data
        self._isoform_ids = isoform_ids
        self._sample_ids = sample_ids

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        id_column: Optional[str] = None,
    ) -> ExpressionMatrix:
        """
        Build a matrix from a table whose identifier column holds isoform IDs.

        Args:
            df: Table with one identifier column and one numeric column per sample
            id_column: Name of the identifier column. Defaults to the first column.

        Returns:
            New ExpressionMatrix (the input frame is not modified)

        Raises:
            ValueError: If the table has no sample columns or non-numeric values
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"df must be pd.DataFrame, got {type(df)}")
        if df.shape[1] < 2:
            raise ValueError(
                "Expression table needs an identifier column and at least one sample column, "
                f"got columns {list(df.columns)}"
            )

        if id_column is None:
            id_column = df.columns[0]
        elif id_column not in df.columns:
            raise ValueError(f"Identifier column '{id_column}' not in expression table")

        values = df.drop(columns=[id_column])

        try:
            data = values.to_numpy(dtype=float)
        except (ValueError, TypeError) as e:
            bad = [c for c in values.columns if not pd.api.types.is_numeric_dtype(values[c])]
            raise ValueError(f"Expression table has non-numeric sample columns: {bad[:5]}") from e

        return cls(
            data=data,
            isoform_ids=pd.Index(df[id_column].astype(str), name='isoform'),
            sample_ids=pd.Index(values.columns.astype(str), name='sample_id'),
        )

    @property
    def data(self) -> np.ndarray:
        """Expression matrix (isoforms x samples)."""
        return self._data

    @property
    def isoform_ids(self) -> pd.Index:
        """Row identifiers (transcript IDs)."""
        return self._isoform_ids

    @property
    def sample_ids(self) -> pd.Index:
        """Column identifiers (sample IDs)."""
        return self._sample_ids

    @property
    def shape(self) -> tuple[int, int]:
        """Matrix dimensions (n_isoforms, n_samples)."""
        return self._data.shape

    @property
    def n_isoforms(self) -> int:
        return self._data.shape[0]

    @property
    def n_samples(self) -> int:
        return self._data.shape[1]

    def select_isoforms(self, isoform_ids: Iterable[str]) -> ExpressionMatrix:
        """
        Keep rows whose identifier is in ``isoform_ids``.

        Row order follows the matrix, not the request; identifiers that are
        not rows of the matrix are ignored.

        Args:
            isoform_ids: Identifiers to keep

        Returns:
            New ExpressionMatrix with the matching rows
        """
        mask = self._isoform_ids.isin(list(isoform_ids))
        return ExpressionMatrix(
            data=self._data[mask, :],
            isoform_ids=self._isoform_ids[mask],
            sample_ids=self._sample_ids,
        )

    def select_samples(self, sample_ids: Iterable[str]) -> ExpressionMatrix:
        """
        Keep the given sample columns, in the order given.

        Args:
            sample_ids: Sample identifiers, all of which must be columns

        Returns:
            New ExpressionMatrix with the requested columns

        Raises:
            KeyError: If a requested sample is not a column of the matrix
        """
        sample_ids = list(sample_ids)
        positions = self._sample_ids.get_indexer(sample_ids)
        if (positions < 0).any():
            missing = [s for s, p in zip(sample_ids, positions) if p < 0]
            raise KeyError(f"Samples not in matrix: {missing[:5]}")

        return ExpressionMatrix(
            data=self._data[:, positions],
            isoform_ids=self._isoform_ids,
            sample_ids=self._sample_ids[positions],
        )

    def with_data(self, data: np.ndarray) -> ExpressionMatrix:
        """Return a new matrix with the same identifiers and replacement values."""
        return ExpressionMatrix(
            data=data,
            isoform_ids=self._isoform_ids,
            sample_ids=self._sample_ids,
        )

    def to_frame(self) -> pd.DataFrame:
        """Wide table: index = isoforms (named 'isoform'), columns = samples."""
        return pd.DataFrame(
            self._data.copy(),
            index=pd.Index(self._isoform_ids, name='isoform'),
            columns=pd.Index(self._sample_ids, name=None),
        )

    def __repr__(self) -> str:
        if self.n_isoforms == 0 or self.n_samples == 0:
            return f"ExpressionMatrix({self.n_isoforms} isoforms × {self.n_samples} samples)"
        return (
            f"ExpressionMatrix({self.n_isoforms} isoforms × {self.n_samples} samples)\n"
            f"  Isoforms: {self.isoform_ids[0]}...{self.isoform_ids[-1]}\n"
            f"  Samples: {self.sample_ids[0]}...{self.sample_ids[-1]}"
        )

    def __str__(self) -> str:
        return self.__repr__()
