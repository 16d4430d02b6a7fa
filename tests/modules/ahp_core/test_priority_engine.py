"""Tests for the Priority Engine."""

import math

import pytest
import numpy as np

from ahp_service.modules.ahp_core.priority_engine import (
    PriorityEngine,
    compute_priority,
    random_index,
)


def consistent_matrix(vector):
    """Perfectly consistent matrix A[i,j] = v[i] / v[j]."""
    v = np.asarray(vector, dtype=float)
    return v[:, None] / v[None, :]


CYCLE_MATRIX = [
    [1.0, 9.0, 1 / 9],
    [1 / 9, 1.0, 9.0],
    [9.0, 1 / 9, 1.0],
]


class TestPriorityEngine:
    """Test suite for Priority Engine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = PriorityEngine()

    def test_empty_matrix(self):
        """n = 0 has no weights and no consistency values."""
        result = self.engine.compute_priority([], 0)

        assert len(result.weights) == 0
        assert math.isnan(result.lambda_max)
        assert math.isnan(result.consistency_ratio)

    def test_single_item(self):
        """n = 1 is fully weighted and trivially consistent."""
        result = self.engine.compute_priority([[1.0]], 1)

        assert np.allclose(result.weights, [1.0])
        assert result.consistency_ratio == 0
        assert result.lambda_max == 1

    @pytest.mark.parametrize("value", [1, 2, 5, 9, 1 / 9])
    def test_two_items_always_consistent(self, value):
        """RI[2] = 0 forces CR = 0."""
        result = self.engine.compute_priority([[1.0, value], [1 / value, 1.0]], 2)

        assert result.consistency_ratio == 0
        assert np.isclose(result.weights.sum(), 1.0)

    def test_equal_importance(self):
        """All-ones matrix gives equal weights."""
        result = self.engine.compute_priority(np.ones((4, 4)), 4)

        assert np.allclose(result.weights, [0.25, 0.25, 0.25, 0.25])
        assert np.isclose(result.lambda_max, 4.0)
        assert np.isclose(result.consistency_ratio, 0.0)

    def test_consistent_matrix_recovers_vector(self):
        """Weights are proportional to the generating vector."""
        result = self.engine.compute_priority(consistent_matrix([4, 2, 1]), 3)

        assert np.allclose(result.weights, [4 / 7, 2 / 7, 1 / 7])
        assert np.allclose(result.weights, [0.571, 0.286, 0.143], atol=1e-3)
        assert np.isclose(result.lambda_max, 3.0)
        assert abs(result.consistency_ratio) < 1e-9

    def test_weights_sum_to_one(self):
        """Weights are non-negative and sum to 1."""
        matrix = [
            [1.0, 3.0, 5.0, 7.0],
            [1 / 3, 1.0, 3.0, 5.0],
            [1 / 5, 1 / 3, 1.0, 3.0],
            [1 / 7, 1 / 5, 1 / 3, 1.0],
        ]
        result = self.engine.compute_priority(matrix, 4)

        assert np.isclose(result.weights.sum(), 1.0)
        assert np.all(result.weights >= 0)
        assert result.consistency_ratio < 0.10

    def test_intransitive_cycle_is_inconsistent(self):
        """A 9/9/9 cycle is far above the threshold."""
        result = self.engine.compute_priority(CYCLE_MATRIX, 3)

        assert np.allclose(result.weights, [1 / 3, 1 / 3, 1 / 3])
        assert result.consistency_ratio > 0.10
        assert np.isclose(result.consistency_ratio, 6.1303, atol=1e-3)

    def test_idempotent(self):
        """Same matrix, same result."""
        first = self.engine.compute_priority(CYCLE_MATRIX, 3)
        second = self.engine.compute_priority(CYCLE_MATRIX, 3)

        assert np.array_equal(first.weights, second.weights)
        assert first.lambda_max == second.lambda_max
        assert first.consistency_ratio == second.consistency_ratio

    def test_zero_column_uses_uniform_fallback(self):
        """A column summing to 0 normalizes to 1/n."""
        result = self.engine.compute_priority([[0.0, 1.0], [0.0, 1.0]], 2)

        assert np.allclose(result.weights, [0.5, 0.5])

    def test_zero_weight_rows_still_count_in_lambda(self):
        """Rows with a zero weight are skipped but λmax still divides by n."""
        matrix = [
            [1.0, 1.0, 1.0],
            [1.0, 1.0, 1.0],
            [0.0, 0.0, 0.0],
        ]
        result = self.engine.compute_priority(matrix, 3)

        assert np.allclose(result.weights, [0.5, 0.5, 0.0])
        assert np.isclose(result.lambda_max, 4 / 3)

    def test_ragged_matrix_is_invalid(self):
        """A short row yields NaN weights instead of raising."""
        result = self.engine.compute_priority([[1.0, 2.0], [0.5]], 2)

        assert len(result.weights) == 2
        assert np.all(np.isnan(result.weights))
        assert math.isnan(result.consistency_ratio)
        assert math.isnan(result.lambda_max)
        assert not result.is_valid

    def test_size_mismatch_is_invalid(self):
        """Declared size must match the matrix shape."""
        result = self.engine.compute_priority(np.ones((3, 3)), 2)

        assert np.all(np.isnan(result.weights))
        assert not result.is_valid

    def test_missing_rows_are_invalid(self):
        """Fewer rows than items is a structural error."""
        result = compute_priority([[1.0, 2.0, 3.0]], 3)

        assert len(result.weights) == 3
        assert not result.is_valid

    def test_missing_rows_reported_in_log(self, caplog):
        """The warning gives the expected and actual row counts."""
        with caplog.at_level("WARNING"):
            result = self.engine.compute_priority(None, 2)

        assert not result.is_valid
        assert "Expected 2 rows, got 0." in caplog.text

    def test_input_not_modified(self):
        """Computation works on a copy of the matrix."""
        matrix = np.array([[0.0, 1.0], [0.0, 1.0]])

        self.engine.compute_priority(matrix, 2)

        assert np.array_equal(matrix, [[0.0, 1.0], [0.0, 1.0]])

    def test_random_index_table(self):
        """Sizes beyond the table reuse its last value."""
        assert random_index(1) == 0.0
        assert random_index(2) == 0.0
        assert random_index(3) == 0.58
        assert random_index(10) == 1.49
        assert random_index(12) == 1.49
