"""
Matrix Builder - pairwise comparison matrices for AHP.

Creates, resizes and updates square reciprocal comparison matrices.
Matrices are read-only numpy arrays: every operation returns a new matrix
and never touches its input.

Matrix structure (n = 3):
            A       B       C
    A       1       a12     a13
    B       1/a12   1       a23
    C       1/a13   1/a23   1

Only the upper triangle (i < j) is set by judgments, the lower triangle is
always the reciprocal.
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .constants import DEFAULT_JUDGMENT, SAATY_SCALE, SCALE_TOLERANCE
from .exceptions import InvalidComparisonError

logger = logging.getLogger(__name__)

Comparison = Tuple[str, str, float]


def _freeze(matrix: np.ndarray) -> np.ndarray:
    matrix.setflags(write=False)
    return matrix


def initialize_matrix(size: int) -> np.ndarray:
    """
    Create a size x size matrix where every judgment is "Equally Important".

    Args:
        size: Number of compared items

    Returns:
        Read-only matrix filled with 1
    """
    return _freeze(np.full((size, size), DEFAULT_JUDGMENT, dtype=float))


def matrix_size(matrix) -> int:
    """Number of rows of a (possibly empty or missing) matrix."""
    if matrix is None:
        return 0
    return len(matrix)


def resize(previous, size: int) -> np.ndarray:
    """
    Resize a comparison matrix, keeping the judgments already entered.

    The new matrix is filled with 1 and then overwritten with the previous
    values on the shared top-left block. The copied block is itself
    reciprocal, so the result stays reciprocal.

    Args:
        previous: Previous square matrix (may be None or empty)
        size: Target number of items (>= 0)

    Returns:
        New read-only size x size matrix
    """
    size = max(int(size), 0)
    new_matrix = np.full((size, size), DEFAULT_JUDGMENT, dtype=float)

    previous_size = matrix_size(previous)
    if previous_size and size:
        previous_array = np.asarray(previous, dtype=float)
        if previous_array.ndim == 2:
            overlap = min(previous_array.shape[0], previous_array.shape[1], size)
            new_matrix[:overlap, :overlap] = previous_array[:overlap, :overlap]

    logger.debug(f"Resized comparison matrix from {previous_size} to {size}")

    return _freeze(new_matrix)


def remove_item(matrix, index: int) -> np.ndarray:
    """
    Delete the row and column of one item.

    Args:
        matrix: Square comparison matrix
        index: Position of the removed item

    Returns:
        New read-only (n-1) x (n-1) matrix
    """
    array = np.asarray(matrix, dtype=float)
    n = array.shape[0] if array.ndim == 2 else 0
    if not 0 <= index < n:
        raise InvalidComparisonError(
            f"Item index {index} is out of range for a {n}x{n} matrix.",
            details={"index": index, "size": n},
        )

    reduced = np.delete(np.delete(array, index, axis=0), index, axis=1)
    return _freeze(reduced.copy())


def is_scale_value(value: float) -> bool:
    """
    Check that a judgment is a Saaty scale point or the reciprocal of one.

    Accepted values: 1..9 and 1/2..1/9.
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        return False
    if not np.isfinite(value) or value <= 0:
        return False

    point = value if value >= 1 else 1.0 / value
    nearest = round(point)
    return nearest in SAATY_SCALE and abs(point - nearest) <= SCALE_TOLERANCE


def set_comparison(matrix, i: int, j: int, value: float) -> np.ndarray:
    """
    Set the judgment "item i compared to item j".

    Only upper-triangle positions (i < j) can be set, the mirrored position
    receives the reciprocal.

    Args:
        matrix: Square comparison matrix
        i: Row item index
        j: Column item index (must be greater than i)
        value: Saaty scale judgment (or its reciprocal)

    Returns:
        New read-only matrix with a[i, j] = value and a[j, i] = 1 / value
    """
    array = np.array(matrix, dtype=float)
    n = array.shape[0] if array.ndim == 2 else 0

    if not (0 <= i < n and 0 <= j < n):
        raise InvalidComparisonError(
            f"Comparison ({i}, {j}) is out of range for a {n}x{n} matrix.",
            details={"i": i, "j": j, "size": n},
        )
    if i >= j:
        raise InvalidComparisonError(
            f"Comparison ({i}, {j}) is derived; only positions with i < j can be set.",
            details={"i": i, "j": j},
        )
    if not is_scale_value(value):
        raise InvalidComparisonError(
            f"Judgment {value} is not on the Saaty 1-9 scale.",
            details={"value": value},
        )

    array[i, j] = float(value)
    array[j, i] = 1.0 / float(value)

    return _freeze(array)


def matrix_from_comparisons(
    items: Sequence[str],
    comparisons: Iterable[Comparison],
    previous: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Build a comparison matrix from judgments expressed with item names.

    A judgment (first, second, value) reads "first is `value` times as
    important as second". When first comes after second in the item set,
    the reciprocal is stored at the upper-triangle position.

    Args:
        items: Ordered item names
        comparisons: Iterable of (first, second, value)
        previous: Optional matrix to start from (resized to len(items))

    Returns:
        Read-only comparison matrix
    """
    positions = {name: index for index, name in enumerate(items)}
    matrix = resize(previous, len(items))

    for first, second, value in comparisons:
        if first not in positions or second not in positions:
            unknown = first if first not in positions else second
            raise InvalidComparisonError(
                f'Unknown item "{unknown}" in comparison.',
                details={"first": first, "second": second},
            )
        if first == second:
            raise InvalidComparisonError(
                f'Item "{first}" cannot be compared with itself.',
                details={"first": first, "second": second},
            )
        if not is_scale_value(value):
            raise InvalidComparisonError(
                f"Judgment {value} is not on the Saaty 1-9 scale.",
                details={"first": first, "second": second, "value": value},
            )

        i, j = positions[first], positions[second]
        if i < j:
            matrix = set_comparison(matrix, i, j, value)
        else:
            matrix = set_comparison(matrix, j, i, 1.0 / float(value))

    logger.debug(f"Comparison matrix for {list(items)}:\n{matrix}")

    return matrix
