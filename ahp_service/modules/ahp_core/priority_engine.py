"""
Priority Engine - weights and consistency of a comparison matrix.

Implements the column-normalization approximation of Saaty's principal
eigenvector:
1. Normalize each column (divide by column sum)
2. Average across rows to get weights
3. Estimate λmax from the weighted sum vector
4. Consistency Index and Consistency Ratio
"""

import logging
import math
from typing import NamedTuple

import numpy as np

from .constants import MAX_RANDOM_INDEX_SIZE, RANDOM_INDEX
from .exceptions import InvalidMatrixError
from .matrix_builder import matrix_size

logger = logging.getLogger(__name__)


class PriorityResult(NamedTuple):
    """Weights, λmax and Consistency Ratio of one comparison matrix."""
    weights: np.ndarray
    lambda_max: float
    consistency_ratio: float

    @property
    def is_valid(self) -> bool:
        """False when the weights could not be computed (NaN)."""
        return not bool(np.isnan(self.weights).any())


def random_index(n: int) -> float:
    """
    Random Index for a matrix of size n.

    Sizes above the table use its last value.
    """
    if n < 1:
        return 0.0
    return RANDOM_INDEX[min(n, MAX_RANDOM_INDEX_SIZE)]


def _readonly(values: np.ndarray) -> np.ndarray:
    values.setflags(write=False)
    return values


def invalid_result(n: int) -> PriorityResult:
    """Result reported for a matrix whose weights cannot be computed."""
    return PriorityResult(
        weights=_readonly(np.full(max(n, 0), np.nan)),
        lambda_max=math.nan,
        consistency_ratio=math.nan,
    )


class PriorityEngine:
    """
    Derives priority vectors from pairwise comparison matrices.

    The engine holds no state: calling it twice on the same matrix gives
    the same result.
    """

    def validate_matrix(self, matrix, n: int) -> np.ndarray:
        """
        Check that the matrix is exactly n x n and convert it to floats.

        Raises:
            InvalidMatrixError: If a row is missing or has the wrong length
        """
        if isinstance(matrix, np.ndarray):
            if matrix.ndim != 2 or matrix.shape != (n, n):
                raise InvalidMatrixError(
                    f"Expected a {n}x{n} matrix, got shape {matrix.shape}.",
                    details={"expected_size": n, "shape": list(matrix.shape)},
                )
            return matrix.astype(float)

        if matrix is None or len(matrix) != n:
            raise InvalidMatrixError(
                f"Expected {n} rows, got {matrix_size(matrix)}.",
                details={"expected_size": n, "rows": matrix_size(matrix)},
            )
        for index, row in enumerate(matrix):
            if not isinstance(row, (list, tuple, np.ndarray)) or len(row) != n:
                raise InvalidMatrixError(
                    f"Row {index} must have {n} entries.",
                    details={"expected_size": n, "row": index},
                )

        return np.array(matrix, dtype=float)

    def calculate_weights(self, matrix: np.ndarray) -> np.ndarray:
        """
        Calculate weights using the column averaging method.

        A column summing to zero normalizes to 1/n per entry.

        Args:
            matrix: n x n pairwise comparison matrix (n >= 1)

        Returns:
            Array of weights (length n, summing to 1)
        """
        n = matrix.shape[0]

        # Calculate column sums
        column_sums = matrix.sum(axis=0)
        zero_columns = column_sums == 0

        # Normalize matrix
        normalized_matrix = matrix / np.where(zero_columns, 1.0, column_sums)
        normalized_matrix[:, zero_columns] = 1.0 / n

        # Calculate weights (row averages)
        weights = normalized_matrix.mean(axis=1)

        logger.debug(f"Calculated weights: {weights}")

        return weights

    def calculate_lambda_max(self, matrix: np.ndarray, weights: np.ndarray) -> float:
        """
        Estimate the principal eigenvalue λmax.

        λmax = (1/n) × Σ (A·w)_i / w_i over the rows with w_i != 0.
        Rows with a zero weight are skipped but still count in n.
        """
        n = len(weights)
        weighted_sum = matrix @ weights
        nonzero = weights != 0
        ratios = weighted_sum[nonzero] / weights[nonzero]
        return float(ratios.sum() / n)

    def calculate_consistency_ratio(self, lambda_max: float, n: int) -> float:
        """
        Consistency Ratio (CR) = CI / RI

        where:
        - CI (Consistency Index) = (λmax - n) / (n - 1)
        - RI (Random Index) = value from lookup table

        CR is 0 whenever RI is 0 (n <= 2).
        """
        ci = (lambda_max - n) / (n - 1)
        ri = random_index(n)
        cr = ci / ri if ri > 0 else 0.0

        logger.debug(
            f"Consistency: λmax={lambda_max:.4f}, CI={ci:.4f}, RI={ri:.2f}, CR={cr:.4f}"
        )

        return float(cr)

    def compute_priority(self, matrix, n: int) -> PriorityResult:
        """
        Complete priority computation for one comparison matrix.

        Args:
            matrix: Pairwise comparison matrix (array or nested sequences)
            n: Number of compared items

        Returns:
            PriorityResult; weights are all NaN if the matrix is malformed
        """
        if n == 0:
            return PriorityResult(_readonly(np.zeros(0)), math.nan, math.nan)
        if n == 1:
            return PriorityResult(_readonly(np.ones(1)), 1.0, 0.0)

        try:
            array = self.validate_matrix(matrix, n)
        except InvalidMatrixError as e:
            logger.warning(f"Invalid comparison matrix: {e.message}")
            return invalid_result(n)

        weights = self.calculate_weights(array)
        lambda_max = self.calculate_lambda_max(array, weights)
        cr = self.calculate_consistency_ratio(lambda_max, n)

        return PriorityResult(_readonly(weights), lambda_max, cr)


_engine = PriorityEngine()


def compute_priority(matrix, n: int) -> PriorityResult:
    """Module-level shortcut for PriorityEngine().compute_priority."""
    return _engine.compute_priority(matrix, n)
