"""
Tests for ExpressionMatrix construction and label-based subsetting.
"""

import numpy as np
import pandas as pd
import pytest

from isoplotter.core.matrix import ExpressionMatrix


class TestConstruction:
    """Validation performed by the constructor and from_frame()."""

    def test_from_frame_uses_first_column_as_ids(self, scenario_frame):
        matrix = ExpressionMatrix.from_frame(scenario_frame)

        assert matrix.shape == (3, 2)
        assert matrix.isoform_ids.tolist() == ['A', 'B', 'C']
        assert matrix.sample_ids.tolist() == ['S1', 'S2']
        np.testing.assert_array_equal(matrix.data[0], [10.0, 30.0])

    def test_from_frame_named_id_column(self):
        df = pd.DataFrame({'S1': [1.0, 2.0], 'tx': ['A', 'B'], 'S2': [3.0, 4.0]})
        matrix = ExpressionMatrix.from_frame(df, id_column='tx')

        assert matrix.isoform_ids.tolist() == ['A', 'B']
        assert matrix.sample_ids.tolist() == ['S1', 'S2']

    def test_from_frame_does_not_modify_input(self, scenario_frame):
        before = scenario_frame.copy()
        ExpressionMatrix.from_frame(scenario_frame)
        pd.testing.assert_frame_equal(scenario_frame, before)

    def test_from_frame_requires_sample_columns(self):
        with pytest.raises(ValueError, match="at least one sample column"):
            ExpressionMatrix.from_frame(pd.DataFrame({'isoform': ['A']}))

    def test_from_frame_rejects_non_numeric(self):
        df = pd.DataFrame({'isoform': ['A', 'B'], 'S1': [1.0, 2.0], 'S2': ['x', 'y']})
        with pytest.raises(ValueError, match="non-numeric"):
            ExpressionMatrix.from_frame(df)

    def test_duplicate_isoforms_rejected(self):
        with pytest.raises(ValueError, match="isoform_ids must be unique"):
            ExpressionMatrix(np.zeros((2, 1)), pd.Index(['A', 'A']), pd.Index(['S1']))

    def test_duplicate_samples_rejected(self):
        with pytest.raises(ValueError, match="sample_ids must be unique"):
            ExpressionMatrix(np.zeros((1, 2)), pd.Index(['A']), pd.Index(['S1', 'S1']))

    def test_shape_mismatch_rejected(self):
        with pytest.raises(ValueError, match="must match data rows"):
            ExpressionMatrix(np.zeros((2, 2)), pd.Index(['A']), pd.Index(['S1', 'S2']))

    def test_type_checks(self):
        with pytest.raises(TypeError, match="data must be np.ndarray"):
            ExpressionMatrix([[1.0]], pd.Index(['A']), pd.Index(['S1']))


class TestSubsetting:
    """select_isoforms / select_samples return new matrices."""

    def test_select_isoforms_keeps_matrix_order(self, scenario_matrix):
        subset = scenario_matrix.select_isoforms(['C', 'A', 'missing'])

        assert subset.isoform_ids.tolist() == ['A', 'C']
        assert scenario_matrix.n_isoforms == 3

    def test_select_samples_keeps_requested_order(self, scenario_matrix):
        subset = scenario_matrix.select_samples(['S2', 'S1'])

        assert subset.sample_ids.tolist() == ['S2', 'S1']
        np.testing.assert_array_equal(subset.data[0], [30.0, 10.0])

    def test_select_unknown_sample_raises(self, scenario_matrix):
        with pytest.raises(KeyError, match="S9"):
            scenario_matrix.select_samples(['S1', 'S9'])

    def test_select_no_samples(self, scenario_matrix):
        subset = scenario_matrix.select_samples([])
        assert subset.shape == (3, 0)

    def test_to_frame(self, scenario_matrix):
        frame = scenario_matrix.to_frame()

        assert frame.index.name == 'isoform'
        assert list(frame.columns) == ['S1', 'S2']
        assert frame.loc['C', 'S2'] == 10.0
