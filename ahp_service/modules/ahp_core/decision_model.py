"""
Decision model - criteria, alternatives and their comparison matrices.

Keeps the criteria matrix and one alternatives matrix per criterion in
step with the item sets. Matrices are replaced, never modified in place.
"""

import logging
import math
from typing import Dict, List, Optional

import numpy as np

from .constants import CRITERIA_LABEL
from .exceptions import InvalidComparisonError, InvalidItemError
from .matrix_builder import (
    initialize_matrix,
    is_scale_value,
    remove_item,
    resize,
    set_comparison,
)
from .orchestrator import EvaluationResult, Orchestrator, get_orchestrator
from .priority_engine import compute_priority

logger = logging.getLogger(__name__)


class DecisionModel:
    """
    State of one AHP decision problem.

    Example:
        >>> model = DecisionModel()
        >>> model.add_criterion("Cost")
        >>> model.add_criterion("Quality")
        >>> model.add_alternative("A")
        >>> model.compare_criteria("Cost", "Quality", 3)
    """

    def __init__(self, orchestrator: Optional[Orchestrator] = None):
        self.criteria: List[str] = []
        self.alternatives: List[str] = []
        self.criteria_matrix: np.ndarray = initialize_matrix(0)
        self.alternative_matrices: Dict[str, np.ndarray] = {}
        self._orchestrator = orchestrator

    @property
    def orchestrator(self) -> Orchestrator:
        return self._orchestrator or get_orchestrator()

    # ------------------------------------------------------------
    # Item sets
    # ------------------------------------------------------------

    def add_criterion(self, name: str) -> None:
        """Add a criterion and create its alternatives matrix."""
        name = self._validate_new_item(name, self.criteria, "Criterion")

        self.criteria = self.criteria + [name]
        self.criteria_matrix = resize(self.criteria_matrix, len(self.criteria))
        self.alternative_matrices = {
            **self.alternative_matrices,
            name: initialize_matrix(len(self.alternatives)),
        }

        logger.info(f"Criterion added: {name}")

    def remove_criterion(self, name: str) -> None:
        """Remove a criterion, its row/column and its alternatives matrix."""
        index = self._index_of(name, self.criteria, "Criterion")

        self.criteria = [c for c in self.criteria if c != name]
        self.criteria_matrix = remove_item(self.criteria_matrix, index)
        self.alternative_matrices = {
            criterion: matrix
            for criterion, matrix in self.alternative_matrices.items()
            if criterion != name
        }

        logger.info(f"Criterion removed: {name}")

    def add_alternative(self, name: str) -> None:
        """Add an alternative to every per-criterion matrix."""
        name = self._validate_new_item(name, self.alternatives, "Alternative")

        self.alternatives = self.alternatives + [name]
        self.alternative_matrices = {
            criterion: resize(matrix, len(self.alternatives))
            for criterion, matrix in self.alternative_matrices.items()
        }

        logger.info(f"Alternative added: {name}")

    def remove_alternative(self, name: str) -> None:
        """Remove an alternative from every per-criterion matrix."""
        index = self._index_of(name, self.alternatives, "Alternative")

        self.alternatives = [a for a in self.alternatives if a != name]
        self.alternative_matrices = {
            criterion: remove_item(matrix, index)
            for criterion, matrix in self.alternative_matrices.items()
        }

        logger.info(f"Alternative removed: {name}")

    # ------------------------------------------------------------
    # Judgments
    # ------------------------------------------------------------

    def compare_criteria(self, first: str, second: str, value: float) -> None:
        """Record "first is `value` times as important as second"."""
        self.criteria_matrix = self._compare(
            self.criteria_matrix, self.criteria, first, second, value, "Criterion"
        )

    def compare_alternatives(
        self, criterion: str, first: str, second: str, value: float
    ) -> None:
        """Record an alternatives judgment under one criterion."""
        self._index_of(criterion, self.criteria, "Criterion")
        self.alternative_matrices = {
            **self.alternative_matrices,
            criterion: self._compare(
                self.alternative_matrices[criterion],
                self.alternatives,
                first,
                second,
                value,
                "Alternative",
            ),
        }

    # ------------------------------------------------------------
    # Results
    # ------------------------------------------------------------

    def consistency_summary(self) -> Dict[str, float]:
        """
        Current Consistency Ratio of every comparison set.

        Keys are 'Criteria' and each criterion name. NaN means the ratio
        cannot be computed yet (no items).
        """
        summary = {
            CRITERIA_LABEL: compute_priority(
                self.criteria_matrix, len(self.criteria)
            ).consistency_ratio
        }
        for criterion in self.criteria:
            matrix = self.alternative_matrices.get(criterion)
            summary[criterion] = (
                compute_priority(matrix, len(self.alternatives)).consistency_ratio
                if matrix is not None
                else math.nan
            )
        return summary

    def evaluate(self) -> EvaluationResult:
        """Run the full AHP evaluation on the current state."""
        return self.orchestrator.evaluate(
            criteria=self.criteria,
            alternatives=self.alternatives,
            criteria_matrix=self.criteria_matrix,
            alternative_matrices=self.alternative_matrices,
        )

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    @staticmethod
    def _validate_new_item(name: str, items: List[str], kind: str) -> str:
        name = (name or "").strip()
        if not name:
            raise InvalidItemError(f"{kind} name cannot be empty.")
        if name in items:
            raise InvalidItemError(
                f"{kind} already exists.", details={"name": name}
            )
        return name

    @staticmethod
    def _index_of(name: str, items: List[str], kind: str) -> int:
        try:
            return items.index(name)
        except ValueError:
            raise InvalidItemError(
                f'{kind} "{name}" does not exist.', details={"name": name}
            ) from None

    def _compare(self, matrix, items, first, second, value, kind) -> np.ndarray:
        i = self._index_of(first, items, kind)
        j = self._index_of(second, items, kind)
        if i == j:
            raise InvalidComparisonError(
                f'{kind} "{first}" cannot be compared with itself.'
            )
        if not is_scale_value(value):
            raise InvalidComparisonError(
                f"Judgment {value} is not on the Saaty 1-9 scale.",
                details={"value": value},
            )
        if i < j:
            return set_comparison(matrix, i, j, value)
        return set_comparison(matrix, j, i, 1.0 / float(value))
