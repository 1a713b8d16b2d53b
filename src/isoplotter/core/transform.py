"""
Base transformation framework for immutable matrix operations.

Transformations are pure: they take an ExpressionMatrix and return a new
one, leaving the input untouched. The only transformation the subsetting
pipeline needs is FractionTransform, but the split between validate() and
apply() keeps preconditions visible at the call site.

Examples:
    >>> from isoplotter.core.transform import FractionTransform
    >>> transform = FractionTransform()
    >>> transform
    FractionTransform(axis=row)
    >>> errors = transform.validate(matrix)
    >>> if not errors:
    ...     fractions = transform.apply(matrix)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

import numpy as np

from isoplotter.core.matrix import ExpressionMatrix

__all__ = ['Transform', 'FractionTransform']

logger = logging.getLogger(__name__)


class Transform(ABC):
    """
    Abstract base class for matrix transformations.

    Attributes:
        name: Human-readable transformation name
        params: Parameters used for this transformation
        timestamp: When this transform instance was created
    """

    def __init__(self, name: str, params: dict[str, Any]) -> None:
        self.name = name
        self.params = params
        self.timestamp = datetime.now()

    @abstractmethod
    def apply(self, matrix: ExpressionMatrix) -> ExpressionMatrix:
        """
        Execute transformation and return a new matrix.

        Must never modify the input matrix.
        """

    def validate(self, matrix: ExpressionMatrix) -> list[str]:
        """
        Check preconditions before applying the transformation.

        Returns:
            List of error messages (empty list = valid)
        """
        errors: list[str] = []

        if matrix.data.size == 0:
            errors.append("Cannot process empty matrix")

        return errors

    def __repr__(self) -> str:
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"


class FractionTransform(Transform):
    """
    Convert each isoform's values to fractions of its total across samples.

    Every value is divided by the sum of its row, computed over the columns
    present in the matrix being transformed. Subset first, then transform:
    the fractions then describe only the retained samples.

    Missing values are ignored in the row sum and stay missing. Rows whose
    sum is zero (or entirely missing) become NaN.

    Examples:
        >>> matrix = ExpressionMatrix(
        ...     np.array([[10.0, 30.0], [5.0, 5.0]]),
        ...     pd.Index(['A', 'B']), pd.Index(['S1', 'S2']))
        >>> FractionTransform().apply(matrix).data
        array([[0.25, 0.75],
               [0.5 , 0.5 ]])
    """

    def __init__(self) -> None:
        super().__init__(name="FractionTransform", params={"axis": "row"})

    def validate(self, matrix: ExpressionMatrix) -> list[str]:
        errors = super().validate(matrix)
        if matrix.data.size and np.nanmin(matrix.data, initial=0.0) < 0:
            errors.append("Expression values must be non-negative to convert to fractions")
        return errors

    def apply(self, matrix: ExpressionMatrix) -> ExpressionMatrix:
        data = matrix.data.astype(float)
        totals = np.nansum(data, axis=1, keepdims=True)

        zero_rows = (totals[:, 0] == 0)
        if zero_rows.any():
            logger.warning(
                f"{int(zero_rows.sum())} isoform(s) have no expression in the selected samples "
                f"and cannot be converted to fractions: "
                f"{matrix.isoform_ids[zero_rows].tolist()[:10]}"
            )

        with np.errstate(divide='ignore', invalid='ignore'):
            fractions = np.where(zero_rows[:, None], np.nan, data / totals)

        return matrix.with_data(fractions)
