"""Tests for the Synthesizer."""

import pytest
import numpy as np

from ahp_service.modules.ahp_core.exceptions import (
    EmptyInputError,
    InvalidMatrixError,
    MissingComparisonsError,
)
from ahp_service.modules.ahp_core.synthesizer import synthesize


class TestSynthesizer:
    """Test suite for the weighted-sum synthesis."""

    def setup_method(self):
        """Set up test fixtures."""
        self.criteria = ["Cost", "Quality"]
        self.alternatives = ["A", "B"]
        self.criteria_weights = [0.75, 0.25]
        self.alternative_weights = {
            "Cost": [2 / 3, 1 / 3],
            "Quality": [1 / 3, 2 / 3],
        }

    def test_weighted_sum(self):
        """score(a) = Σ alternative weight × criterion weight."""
        ranking = synthesize(
            self.criteria_weights, self.alternative_weights,
            self.alternatives, self.criteria,
        )

        assert [r.name for r in ranking] == ["A", "B"]
        assert np.isclose(ranking[0].score, 0.5833, atol=1e-4)
        assert np.isclose(ranking[1].score, 0.4167, atol=1e-4)
        assert np.isclose(sum(r.score for r in ranking), 1.0)

    def test_sorted_descending(self):
        """Highest score comes first."""
        ranking = synthesize(
            [0.25, 0.75], self.alternative_weights,
            self.alternatives, self.criteria,
        )

        assert [r.name for r in ranking] == ["B", "A"]
        assert ranking[0].score > ranking[1].score

    def test_ties_keep_input_order(self):
        """Equal scores keep the original alternative order."""
        alternatives = ["X", "Y", "Z"]
        weights = {"Cost": [1 / 3] * 3, "Quality": [1 / 3] * 3}

        ranking = synthesize(self.criteria_weights, weights, alternatives, self.criteria)

        assert [r.name for r in ranking] == ["X", "Y", "Z"]

    def test_empty_criteria(self):
        """No criteria means nothing to synthesize."""
        with pytest.raises(EmptyInputError):
            synthesize([], {}, self.alternatives, [])

    def test_empty_alternatives(self):
        """No alternatives means nothing to rank."""
        with pytest.raises(EmptyInputError):
            synthesize(self.criteria_weights, self.alternative_weights, [], self.criteria)

    def test_missing_criterion_weights(self):
        """Every criterion needs an alternatives weight vector."""
        with pytest.raises(MissingComparisonsError) as exc_info:
            synthesize(
                self.criteria_weights, {"Cost": [0.5, 0.5]},
                self.alternatives, self.criteria,
            )

        assert exc_info.value.details["criterion"] == "Quality"
        assert '"Quality"' in exc_info.value.message

    def test_wrong_vector_length(self):
        """Weight vectors must cover every alternative."""
        weights = {"Cost": [1.0], "Quality": [0.5, 0.5]}

        with pytest.raises(InvalidMatrixError):
            synthesize(self.criteria_weights, weights, self.alternatives, self.criteria)
