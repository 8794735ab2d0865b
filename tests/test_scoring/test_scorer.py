"""
Tests for governance_advisor/scoring/scorer.py.

What we test
------------
score_question():
  - single-select scores the matching option; no match / no options = 0.
  - multi-select sums selected options that exist; non-list answer = 0.
  - rating-scale normalizes to 0-10 with half-up rounding; out of range = 0.
  - number-input clamps into [min, max]; a zero-width range scores 0.
  - text-input scores by trimmed length bucket.
  - Unknown question types score 0.
  - Booleans never match numeric option values.

max_question_score():
  - single-select = highest option, multi-select = sum, others = 10.

compute_score():
  - Single rating question worked example (3 / 3, 100%).
  - Unanswered (missing or None) answers count 0 but still add to max.
  - Categories missing from the weight table use the default weight.
  - Identical inputs give identical results.

determine_governance_level():
  - Thresholds 80 / 60 / 40 on a fixed 100-point basis.

round_half_up() / score_percentage():
  - .5 rounds up; zero max gives 0%.
"""

from __future__ import annotations

import pytest

from governance_advisor.models.question import Question
from governance_advisor.models.recommendation import ScoreResult
from governance_advisor.scoring.scorer import (
    compute_score,
    determine_governance_level,
    max_question_score,
    round_half_up,
    score_percentage,
    score_question,
)
from governance_advisor.taxonomy.governance_taxonomy import GovernanceLevel


# ── Helpers ────────────────────────────────────────────────────────────────────

def _question(qtype: str = "single-select", **kwargs) -> Question:
    defaults = {"id": "q1", "text": "Question?", "type": qtype}
    defaults.update(kwargs)
    return Question(**defaults)


def _select(qtype: str = "single-select", **kwargs) -> Question:
    return _question(
        qtype,
        options=[
            {"value": "low", "score": 1},
            {"value": "mid", "score": 3},
            {"value": "high", "score": 4},
        ],
        **kwargs,
    )


# ── score_question ─────────────────────────────────────────────────────────────

class TestSingleSelect:
    def test_matching_option_scores(self):
        assert score_question(_select(), "mid") == 3

    def test_unknown_value_scores_zero(self):
        assert score_question(_select(), "other") == 0

    def test_no_options_scores_zero(self):
        q = _question("single-select")
        assert score_question(q, "anything") == 0
        assert max_question_score(q) == 0

    def test_bool_does_not_match_numeric_value(self):
        q = _question("single-select", options=[{"value": 1, "score": 5}])
        assert score_question(q, True) == 0
        assert score_question(q, 1) == 5


class TestMultiSelect:
    def test_sums_selected_options(self):
        assert score_question(_select("multi-select"), ["low", "high"]) == 5

    def test_ignores_unknown_values(self):
        assert score_question(_select("multi-select"), ["low", "bogus"]) == 1

    def test_non_list_answer_scores_zero(self):
        assert score_question(_select("multi-select"), "low") == 0

    def test_empty_selection_scores_zero(self):
        assert score_question(_select("multi-select"), []) == 0


class TestRatingScale:
    def test_top_of_scale_is_ten(self):
        assert score_question(_question("rating-scale", scale=5), "5") == 10

    def test_midpoint(self):
        assert score_question(_question("rating-scale", scale=5), 3) == 6

    def test_half_rounds_up(self):
        # 3 / 4 * 10 = 7.5
        assert score_question(_question("rating-scale", scale=4), 3) == 8

    def test_out_of_range_scores_zero(self):
        q = _question("rating-scale", scale=5)
        assert score_question(q, 0) == 0
        assert score_question(q, 6) == 0

    def test_non_numeric_scores_zero(self):
        assert score_question(_question("rating-scale"), "great") == 0

    def test_missing_scale_defaults_to_five(self):
        q = _question("rating-scale", scale=None)
        assert q.scale == 5
        assert score_question(q, 5) == 10


class TestNumberInput:
    def test_normalizes_into_range(self):
        q = _question("number-input", min=0, max=100)
        assert score_question(q, 42.5) == 4
        assert score_question(q, "75") == 8

    def test_clamps_outside_range(self):
        q = _question("number-input", min=0, max=100)
        assert score_question(q, 150) == 10
        assert score_question(q, -5) == 0

    def test_zero_width_range_scores_zero(self):
        q = _question("number-input", min=10, max=10)
        assert score_question(q, 10) == 0

    def test_unparseable_scores_zero(self):
        assert score_question(_question("number-input"), "n/a") == 0


class TestTextInput:
    @pytest.mark.parametrize(
        "answer,expected",
        [
            ("", 0),
            ("    ", 0),
            ("short", 2),
            ("a reasonably short answer", 5),
            ("x" * 60, 7),
            ("x" * 100, 10),
        ],
    )
    def test_length_buckets(self, answer, expected):
        assert score_question(_question("text-input"), answer) == expected

    def test_whitespace_is_trimmed(self):
        assert score_question(_question("text-input"), "   abc   ") == 2

    def test_non_string_scores_zero(self):
        assert score_question(_question("text-input"), 42) == 0


class TestUnknownType:
    def test_scores_zero_with_default_max(self):
        q = _question("slider")
        assert score_question(q, 7) == 0
        assert max_question_score(q) == 10


# ── max_question_score ─────────────────────────────────────────────────────────

class TestMaxQuestionScore:
    def test_single_select_is_highest_option(self):
        assert max_question_score(_select()) == 4

    def test_multi_select_is_sum(self):
        assert max_question_score(_select("multi-select")) == 8

    @pytest.mark.parametrize("qtype", ["rating-scale", "number-input", "text-input"])
    def test_scalar_types_max_ten(self, qtype):
        assert max_question_score(_question(qtype)) == 10


# ── compute_score ──────────────────────────────────────────────────────────────

class TestComputeScore:
    def test_single_rating_worked_example(self):
        q = _question("rating-scale", category="governanceMaturity", scale=5)
        result = compute_score([q], {"q1": "5"}, {"governanceMaturity": 0.3})

        assert result.total_score == 3
        assert result.max_score == 3
        assert score_percentage(result) == 100
        assert determine_governance_level(result.total_score) == GovernanceLevel.BASIC

        breakdown = result.breakdown["governanceMaturity"]
        assert breakdown.score == 10
        assert breakdown.max_score == 10
        assert breakdown.percentage == 100
        assert breakdown.weight == 0.3

    def test_question_weight_multiplies_score_and_max(self):
        q = _select(category="c", weight=2)
        result = compute_score([q], {"q1": "mid"}, {"c": 1.0})
        assert result.breakdown["c"].score == 6
        assert result.breakdown["c"].max_score == 8

    def test_unanswered_counts_zero_but_adds_max(self):
        questions = [
            _select(id="a", category="c"),
            _select(id="b", category="c"),
        ]
        result = compute_score(questions, {"a": "high", "b": None}, {"c": 1.0})
        assert result.total_score == 4
        assert result.max_score == 8
        assert result.breakdown["c"].percentage == 50

    def test_unlisted_category_uses_default_weight(self):
        q = _question("rating-scale", category="somethingElse")
        result = compute_score([q], {"q1": 5}, {"governanceMaturity": 0.3})
        assert result.breakdown["somethingElse"].weight == 0.1
        assert result.total_score == 1

    def test_missing_category_is_general(self):
        q = _question("rating-scale", category=None)
        result = compute_score([q], {"q1": 5})
        assert "general" in result.breakdown

    def test_empty_category_max_gives_zero_percentage(self):
        q = _question("single-select", category="c")
        result = compute_score([q], {"q1": "x"}, {"c": 1.0})
        assert result.breakdown["c"].percentage == 0

    def test_no_questions(self):
        result = compute_score([], {"q1": "x"})
        assert result.total_score == 0
        assert result.max_score == 0
        assert result.breakdown == {}
        assert score_percentage(result) == 0

    def test_deterministic(self, provider, full_answers):
        args = (provider.questions, full_answers, provider.scoring_weights)
        assert compute_score(*args) == compute_score(*args)

    def test_committed_questionnaire_totals(self, provider, full_answers):
        result = compute_score(provider.questions, full_answers, provider.scoring_weights)
        assert result.total_score == 8
        assert result.max_score == 19
        assert score_percentage(result) == 42


# ── determine_governance_level ────────────────────────────────────────────────

class TestGovernanceLevel:
    @pytest.mark.parametrize(
        "score,level",
        [
            (100, GovernanceLevel.HIGH),
            (80, GovernanceLevel.HIGH),
            (79, GovernanceLevel.MEDIUM),
            (60, GovernanceLevel.MEDIUM),
            (59, GovernanceLevel.DEVELOPING),
            (40, GovernanceLevel.DEVELOPING),
            (39, GovernanceLevel.BASIC),
            (0, GovernanceLevel.BASIC),
        ],
    )
    def test_thresholds(self, score, level):
        assert determine_governance_level(score) == level

    def test_basis_is_fixed_not_max(self):
        # 3 of a possible 3 is still "basic": the basis is always 100.
        assert determine_governance_level(3) == GovernanceLevel.BASIC


# ── Rounding ───────────────────────────────────────────────────────────────────

class TestRounding:
    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (2.5, 3), (1.49, 1), (7.5, 8), (-0.5, 0)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_percentage_of_zero_max_is_zero(self):
        assert score_percentage(ScoreResult(total_score=0, max_score=0)) == 0

    def test_percentage_rounds(self):
        assert score_percentage(ScoreResult(total_score=8, max_score=19)) == 42
