"""
Tests for governance_advisor/recommendations/merger.py.

What we test
------------
prioritize_recommendations():
  - Stable partition: PRIORITY entries first, both groups keep their order.

merge_recommendations():
  - Rule messages land in a ``rules`` section, in evaluator order.
  - Missing messages become the generic label; non-string ones become text.
  - No ``rules`` section when the evaluator contributed nothing.
  - Every section is prioritized and de-duplicated.
  - The input document is not mutated.
"""

from __future__ import annotations

from governance_advisor.models.recommendation import RecommendationDocument, RuleResults
from governance_advisor.recommendations.merger import (
    dedupe,
    merge_recommendations,
    prioritize_recommendations,
)


class TestPrioritize:
    def test_stable_partition(self):
        recs = ["A", "PRIORITY: B", "C", "PRIORITY: D"]
        assert prioritize_recommendations(recs) == ["PRIORITY: B", "PRIORITY: D", "A", "C"]

    def test_marker_anywhere_in_string(self):
        recs = ["plain", "Do this (PRIORITY)"]
        assert prioritize_recommendations(recs) == ["Do this (PRIORITY)", "plain"]

    def test_no_priority_unchanged(self):
        assert prioritize_recommendations(["x", "y"]) == ["x", "y"]

    def test_dedupe_keeps_first(self):
        assert dedupe(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]


class TestMerge:
    def test_rule_messages_appended_under_rules(self):
        doc = RecommendationDocument(summary="S", sections={"controls": ["X"]})
        results = RuleResults(recommendations=[{"message": "R1"}, {"message": "PRIORITY: R2"}])
        merged = merge_recommendations(doc, results)
        assert merged.sections["rules"] == ["PRIORITY: R2", "R1"]
        assert merged.sections["controls"] == ["X"]
        assert merged.summary == "S"

    def test_missing_message_uses_label(self):
        doc = RecommendationDocument(summary="S")
        merged = merge_recommendations(doc, RuleResults(recommendations=[{"rule_id": "r"}]))
        assert merged.sections["rules"] == ["Rule-based recommendation"]

    def test_no_rules_section_when_empty(self):
        doc = RecommendationDocument(summary="S", sections={"controls": ["X"]})
        merged = merge_recommendations(doc, RuleResults.empty())
        assert "rules" not in merged.sections

    def test_every_section_prioritized(self):
        doc = RecommendationDocument(
            summary="S",
            sections={"controls": ["A", "PRIORITY: B"], "sharing": ["C", "PRIORITY: D", "C"]},
        )
        merged = merge_recommendations(doc, RuleResults.empty())
        assert merged.sections["controls"] == ["PRIORITY: B", "A"]
        assert merged.sections["sharing"] == ["PRIORITY: D", "C"]

    def test_input_not_mutated(self):
        doc = RecommendationDocument(summary="S", sections={"controls": ["A", "PRIORITY: B"]})
        merge_recommendations(doc, RuleResults(recommendations=[{"message": "R"}]))
        assert doc.sections == {"controls": ["A", "PRIORITY: B"]}

    def test_extra_evaluator_fields_ignored(self):
        results = RuleResults.model_validate(
            {"recommendations": [{"message": "R"}], "actions": [], "matched_rules": 1}
        )
        merged = merge_recommendations(RecommendationDocument(summary="S"), results)
        assert merged.sections == {"rules": ["R"]}

    def test_non_string_messages_rendered_as_text(self):
        results = RuleResults(recommendations=[{"message": 42}, {"message": ["a", "b"]}])
        merged = merge_recommendations(RecommendationDocument(summary="S"), results)
        assert merged.sections["rules"] == ["42", "['a', 'b']"]
