"""Tests for matchme/engine/trait_ranges.py."""

import pytest

from matchme.engine.errors import InvalidInputError
from matchme.engine.trait_ranges import calculate_trait_ranges
from matchme.quiz_models import Question, QuizDefinition


def _q(qid, trait_map, weight=1.0):
    return {"id": qid, "weight": weight, "trait_map": trait_map}


class TestCalculateTraitRanges:
    def test_sums_windows_across_questions(self):
        """Two identical questions → max is summed, not maxed."""
        quiz = {"questions": [
            _q("q1", {"a": {"trait": 2}, "b": {"trait": 0}}),
            _q("q2", {"a": {"trait": 2}, "b": {"trait": 0}}),
        ]}
        ranges = calculate_trait_ranges(quiz)
        assert ranges["trait"].min == 0.0
        assert ranges["trait"].max == 4.0

    def test_min_includes_zero_for_positive_only(self):
        quiz = {"questions": [_q("q1", {"a": {"x": 3}, "b": {"x": 5}})]}
        ranges = calculate_trait_ranges(quiz)
        # 0 is folded into the per-question minimum even if every option scores
        assert ranges["x"].min == 0.0
        assert ranges["x"].max == 5.0

    def test_negative_contributions_kept(self):
        quiz = {"questions": [_q("q1", {"a": {"x": -2}, "b": {"x": 1}})]}
        ranges = calculate_trait_ranges(quiz)
        assert ranges["x"].min == -2.0
        assert ranges["x"].max == 1.0

    def test_all_negative_max_is_largest_weighted(self):
        quiz = {"questions": [_q("q1", {"a": {"x": -2}, "b": {"x": -1}})]}
        ranges = calculate_trait_ranges(quiz)
        assert ranges["x"].min == -2.0
        assert ranges["x"].max == -1.0

    def test_weight_applied(self):
        quiz = {"questions": [_q("q1", {"a": {"x": 2}, "b": {"x": -1}}, weight=1.5)]}
        ranges = calculate_trait_ranges(quiz)
        assert ranges["x"].min == pytest.approx(-1.5)
        assert ranges["x"].max == pytest.approx(3.0)

    def test_empty_trait_map_skipped(self):
        quiz = {"questions": [_q("q1", {}), {"id": "q2"}]}
        assert calculate_trait_ranges(quiz) == {}

    def test_trait_only_in_some_questions(self):
        quiz = {"questions": [
            _q("q1", {"a": {"x": 1, "y": 2}}),
            _q("q2", {"a": {"x": 1}}),
        ]}
        ranges = calculate_trait_ranges(quiz)
        assert ranges["x"].max == 2.0
        assert ranges["y"].max == 2.0
        assert "z" not in ranges

    def test_accepts_model(self):
        quiz = QuizDefinition(questions=[Question(id="q1", trait_map={"a": {"x": 1.0}})])
        assert calculate_trait_ranges(quiz)["x"].max == 1.0

    def test_non_numeric_contribution_raises(self):
        quiz = {"questions": [_q("q1", {"a": {"x": "lots"}})]}
        with pytest.raises(InvalidInputError, match="quiz definition"):
            calculate_trait_ranges(quiz)
