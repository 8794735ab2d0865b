"""
Tests for governance_advisor/recommendations/composer.py.

What we test
------------
build_summary():
  - Template placeholders are substituted.
  - Without a template summary, the default sentence is used.
  - Insight sentences are appended in table order.

compose():
  - Base section lists are kept in template order.
  - Contextual recommendations are appended per section.
  - Compliance gets one entry per selected framework, in selection order.
  - Organization falls back from assessment → engine default.
  - A template without sections yields no sections.
"""

from __future__ import annotations

from governance_advisor.models.assessment import Assessment
from governance_advisor.models.recommendation import ScoreResult
from governance_advisor.models.template import Template, TemplateRecommendation
from governance_advisor.recommendations.composer import (
    build_insights,
    build_summary,
    compose,
    contextual_recommendations,
)

SCORE = ScoreResult(total_score=45, max_score=90)


def _template(summary: str | None = None, sections: dict | None = None) -> Template:
    return Template(
        id="basic_governance_template",
        name="Basic",
        recommendation=TemplateRecommendation(title="Basic", summary=summary),
        sections=sections,
    )


class TestBuildSummary:
    def test_placeholders_substituted(self):
        t = _template("{organization}: {level} at {score} ({percentage}%)")
        assert build_summary({}, SCORE, t, "Acme") == "Acme: developing at 45 (50%)"

    def test_default_sentence(self):
        summary = build_summary({}, SCORE, _template(None), "Acme")
        assert summary == "Acme demonstrates developing data governance maturity with a score of 50/100."

    def test_insights_appended_in_order(self):
        answers = {"question-3": ["hipaa"], "question-5": "small", "question-2": "basic"}
        summary = build_summary(answers, SCORE, _template("Base."), "Acme")
        assert summary == (
            "Base. Strong compliance requirements detected - enhanced security measures recommended."
            " Focus on essential governance practices with minimal overhead."
            " Building foundational governance capabilities will provide immediate value."
        )

    def test_no_insights(self):
        assert build_insights({"question-5": "medium"}) == []


class TestContextualRecommendations:
    def test_placement(self):
        recs = contextual_recommendations(
            "placement", {"question-1": "financial_data", "question-5": "enterprise"}
        )
        assert recs == [
            "Use dedicated encrypted storage for financial data with geographic restrictions",
            "Implement multi-region data placement strategy for disaster recovery",
        ]

    def test_open_access_is_priority(self):
        recs = contextual_recommendations("controls", {"question-4": "open_access"})
        assert recs[0].startswith("PRIORITY:")

    def test_frameworks_in_selection_order(self):
        recs = contextual_recommendations("compliance", {"question-3": ["sox", "ccpa", "gdpr"]})
        assert recs == [
            "Establish SOX-compliant financial data controls and reporting",
            "Implement GDPR-specific data mapping and consent management",
        ]

    def test_unknown_section(self):
        assert contextual_recommendations("automation", {"question-4": "open_access"}) == []


class TestCompose:
    def test_base_then_contextual(self):
        t = _template("S", {"controls": ["Base A", "Base B"], "automation": ["Auto"]})
        assessment = Assessment(id="a1", answers={"question-3": ["sox"]})
        doc = compose(assessment, SCORE, t)
        assert doc.sections["controls"] == [
            "Base A",
            "Base B",
            "Implement SOX-compliant audit controls with detailed logging",
        ]
        assert doc.sections["automation"] == ["Auto"]
        assert list(doc.sections) == ["controls", "automation"]

    def test_template_without_sections(self):
        doc = compose(Assessment(id="a1"), SCORE, _template("S", None))
        assert doc.sections == {}
        assert doc.summary == "S"

    def test_organization_from_assessment(self):
        t = _template("{organization}")
        doc = compose(Assessment(id="a1", organization="Acme"), SCORE, t, "Engine Org")
        assert doc.summary == "Acme"

    def test_organization_fallback(self):
        t = _template("{organization}")
        assert compose(Assessment(id="a1"), SCORE, t, "Engine Org").summary == "Engine Org"
        assert compose(Assessment(id="a1"), SCORE, t).summary == "Your organization"

    def test_does_not_mutate_template(self):
        sections = {"controls": ["Base"]}
        t = _template("S", sections)
        compose(Assessment(id="a1", answers={"question-4": "open_access"}), SCORE, t)
        assert t.sections == {"controls": ["Base"]}
