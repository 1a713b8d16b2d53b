"""
Tests for FractionTransform (row-wise conversion to fractions).
"""

import numpy as np
import pandas as pd
import pytest

from isoplotter.core.matrix import ExpressionMatrix
from isoplotter.core.transform import FractionTransform


def _matrix(values, isoforms=None, samples=None):
    values = np.asarray(values, dtype=float)
    isoforms = isoforms or [f"I{i}" for i in range(values.shape[0])]
    samples = samples or [f"S{j}" for j in range(values.shape[1])]
    return ExpressionMatrix(values, pd.Index(isoforms), pd.Index(samples))


class TestFractionTransform:

    def test_rows_sum_to_one(self, synthetic_tables):
        expression, _ = synthetic_tables
        matrix = ExpressionMatrix.from_frame(expression)

        fractions = FractionTransform().apply(matrix)

        np.testing.assert_allclose(fractions.data.sum(axis=1), 1.0)

    def test_known_values(self):
        fractions = FractionTransform().apply(_matrix([[10, 30], [5, 5]]))
        np.testing.assert_allclose(fractions.data, [[0.25, 0.75], [0.5, 0.5]])

    def test_input_unchanged(self):
        matrix = _matrix([[10, 30]])
        FractionTransform().apply(matrix)
        np.testing.assert_array_equal(matrix.data, [[10, 30]])

    def test_zero_row_becomes_nan(self, caplog):
        with caplog.at_level("WARNING"):
            fractions = FractionTransform().apply(_matrix([[0, 0], [1, 3]], isoforms=['Z', 'X']))

        assert np.isnan(fractions.data[0]).all()
        np.testing.assert_allclose(fractions.data[1], [0.25, 0.75])
        assert "Z" in caplog.text

    def test_missing_values_ignored_in_total(self):
        fractions = FractionTransform().apply(_matrix([[np.nan, 2, 6]]))

        assert np.isnan(fractions.data[0, 0])
        np.testing.assert_allclose(fractions.data[0, 1:], [0.25, 0.75])

    def test_validate_rejects_negative(self):
        errors = FractionTransform().validate(_matrix([[-1, 2]]))
        assert any("non-negative" in e for e in errors)

    def test_validate_rejects_empty(self):
        errors = FractionTransform().validate(_matrix(np.zeros((0, 2))))
        assert "Cannot process empty matrix" in errors

    def test_repr(self):
        assert repr(FractionTransform()) == "FractionTransform(axis=row)"
