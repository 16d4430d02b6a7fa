"""Tests for the Decision Model (item sets and their matrices)."""

import math

import pytest
import numpy as np

from ahp_service.modules.ahp_core.decision_model import DecisionModel
from ahp_service.modules.ahp_core.exceptions import (
    EmptyInputError,
    InconsistentJudgmentsError,
    InvalidComparisonError,
    InvalidItemError,
)
from ahp_service.modules.ahp_core.orchestrator import Orchestrator


class TestDecisionModel:
    """Test suite for DecisionModel."""

    def setup_method(self):
        """Set up test fixtures."""
        self.model = DecisionModel(orchestrator=Orchestrator(consistency_threshold=0.10))

    def build_cost_quality(self):
        """Helper building the Cost/Quality example."""
        for criterion in ["Cost", "Quality"]:
            self.model.add_criterion(criterion)
        for alternative in ["A", "B"]:
            self.model.add_alternative(alternative)

        self.model.compare_criteria("Cost", "Quality", 3)
        self.model.compare_alternatives("Cost", "A", "B", 2)
        self.model.compare_alternatives("Quality", "B", "A", 2)

    def test_add_criterion_creates_matrices(self):
        """Each criterion owns an alternatives matrix sized to the alternatives."""
        self.model.add_alternative("A")
        self.model.add_alternative("B")
        self.model.add_criterion("Cost")

        assert self.model.criteria == ["Cost"]
        assert self.model.criteria_matrix.shape == (1, 1)
        assert self.model.alternative_matrices["Cost"].shape == (2, 2)

    def test_names_are_stripped(self):
        """Surrounding whitespace is removed."""
        self.model.add_criterion("  Cost ")

        assert self.model.criteria == ["Cost"]

    def test_empty_name_rejected(self):
        """Blank names are not valid items."""
        with pytest.raises(InvalidItemError) as exc_info:
            self.model.add_criterion("   ")

        assert exc_info.value.message == "Criterion name cannot be empty."

    def test_duplicate_name_rejected(self):
        """Item sets are duplicate-free."""
        self.model.add_alternative("A")

        with pytest.raises(InvalidItemError) as exc_info:
            self.model.add_alternative("A")

        assert exc_info.value.message == "Alternative already exists."

    def test_adding_items_keeps_judgments(self):
        """Existing judgments survive when the item set grows."""
        self.build_cost_quality()

        self.model.add_criterion("Speed")
        self.model.add_alternative("C")

        assert self.model.criteria_matrix[0, 1] == 3
        assert self.model.criteria_matrix.shape == (3, 3)
        assert self.model.alternative_matrices["Cost"][0, 1] == 2
        assert self.model.alternative_matrices["Speed"].shape == (3, 3)
        assert np.all(self.model.alternative_matrices["Speed"] == 1.0)

    def test_remove_criterion_discards_its_matrix(self):
        """Removing a middle criterion deletes its row and column."""
        for criterion in ["Cost", "Quality", "Speed"]:
            self.model.add_criterion(criterion)
        self.model.compare_criteria("Cost", "Speed", 5)

        self.model.remove_criterion("Quality")

        assert self.model.criteria == ["Cost", "Speed"]
        assert "Quality" not in self.model.alternative_matrices
        assert self.model.criteria_matrix[0, 1] == 5
        assert self.model.criteria_matrix[1, 0] == 1 / 5

    def test_remove_alternative_updates_every_matrix(self):
        """Alternative removal applies to all criteria."""
        self.build_cost_quality()
        self.model.add_alternative("C")
        self.model.compare_alternatives("Cost", "A", "C", 4)

        self.model.remove_alternative("B")

        assert self.model.alternatives == ["A", "C"]
        assert self.model.alternative_matrices["Cost"][0, 1] == 4
        assert self.model.alternative_matrices["Quality"].shape == (2, 2)

    def test_remove_unknown_item(self):
        """Only existing items can be removed."""
        with pytest.raises(InvalidItemError):
            self.model.remove_alternative("Z")

    def test_compare_reversed_order(self):
        """Judgments can be given in either order."""
        self.build_cost_quality()

        matrix = self.model.alternative_matrices["Quality"]
        assert matrix[0, 1] == 0.5
        assert matrix[1, 0] == 2.0

    def test_compare_unknown_criterion(self):
        """Alternative judgments need an existing criterion."""
        self.build_cost_quality()

        with pytest.raises(InvalidItemError):
            self.model.compare_alternatives("Speed", "A", "B", 3)

    def test_compare_invalid_value(self):
        """Off-scale judgments are rejected in both orders."""
        self.build_cost_quality()

        with pytest.raises(InvalidComparisonError):
            self.model.compare_criteria("Quality", "Cost", 0)
        with pytest.raises(InvalidComparisonError):
            self.model.compare_criteria("Cost", "Cost", 3)

    def test_matrices_replaced_not_mutated(self):
        """Previously read matrices keep their values."""
        self.build_cost_quality()
        before = self.model.criteria_matrix

        self.model.compare_criteria("Cost", "Quality", 7)

        assert before[0, 1] == 3
        assert self.model.criteria_matrix[0, 1] == 7

    def test_consistency_summary(self):
        """Every comparison set reports its current CR."""
        empty_summary = self.model.consistency_summary()
        assert math.isnan(empty_summary["Criteria"])

        self.build_cost_quality()
        summary = self.model.consistency_summary()

        assert summary == {"Criteria": 0.0, "Cost": 0.0, "Quality": 0.0}

    def test_evaluate(self):
        """End-to-end ranking from the model state."""
        self.build_cost_quality()

        result = self.model.evaluate()

        assert [r.name for r in result.ranking] == ["A", "B"]
        assert np.isclose(result.ranking[0].score, 0.583, atol=1e-3)
        assert np.isclose(result.ranking[1].score, 0.417, atol=1e-3)

    def test_evaluate_empty(self):
        """Evaluation needs criteria and alternatives."""
        with pytest.raises(EmptyInputError):
            self.model.evaluate()

    def test_evaluate_inconsistent(self):
        """A 9/9/9 cycle under a criterion is rejected."""
        self.model.add_criterion("Cost")
        for alternative in ["A", "B", "C"]:
            self.model.add_alternative(alternative)
        self.model.compare_alternatives("Cost", "A", "B", 9)
        self.model.compare_alternatives("Cost", "B", "C", 9)
        self.model.compare_alternatives("Cost", "C", "A", 9)

        with pytest.raises(InconsistentJudgmentsError) as exc_info:
            self.model.evaluate()

        assert 'Alternatives under "Cost"' in exc_info.value.message
