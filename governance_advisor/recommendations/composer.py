"""
Recommendation composer: expands a template into a ``RecommendationDocument``.

Summary
-------
The template's summary (placeholders ``{organization}``, ``{level}``,
``{score}``, ``{percentage}`` substituted) or, when the template has none::

    "<org> demonstrates <level> data governance maturity with a score of <pct>/100."

followed by the insight sentences whose predicates match, in table order:
compliance, organization size, maturity.

Sections
--------
Each template section keeps its base list, followed by the contextual
recommendations from ``SECTION_RULES`` for that section name. The
``compliance`` section additionally gets one entry per selected framework,
in the order the respondent selected them.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, NamedTuple, Optional

from governance_advisor.models.assessment import Assessment
from governance_advisor.models.recommendation import RecommendationDocument, ScoreResult
from governance_advisor.models.template import Template
from governance_advisor.recommendations import signals
from governance_advisor.scoring.scorer import determine_governance_level, score_percentage
from governance_advisor.taxonomy.governance_taxonomy import Section

DEFAULT_ORGANIZATION = "Your organization"


class ContextRule(NamedTuple):
    predicate: Callable[[Mapping[str, Any]], bool]
    text: str


INSIGHT_RULES: tuple[ContextRule, ...] = (
    ContextRule(
        lambda a: signals.has_framework(a, "gdpr", "hipaa"),
        "Strong compliance requirements detected - enhanced security measures recommended.",
    ),
    ContextRule(
        lambda a: signals.organization_size(a) == "enterprise",
        "As a large enterprise, consider implementing advanced governance automation.",
    ),
    ContextRule(
        lambda a: signals.organization_size(a) == "small",
        "Focus on essential governance practices with minimal overhead.",
    ),
    ContextRule(
        lambda a: signals.maturity(a) == "basic",
        "Building foundational governance capabilities will provide immediate value.",
    ),
    ContextRule(
        lambda a: signals.maturity(a) == "managed",
        "Your mature governance foundation enables advanced optimization opportunities.",
    ),
)

SECTION_RULES: dict[str, tuple[ContextRule, ...]] = {
    Section.PLACEMENT: (
        ContextRule(
            lambda a: signals.data_type(a) == "financial_data",
            "Use dedicated encrypted storage for financial data with geographic restrictions",
        ),
        ContextRule(
            lambda a: signals.organization_size(a) == "enterprise",
            "Implement multi-region data placement strategy for disaster recovery",
        ),
    ),
    Section.CONTROLS: (
        ContextRule(
            lambda a: signals.access_model(a) == "open_access",
            "PRIORITY: Implement immediate access controls - current open access poses significant risk",
        ),
        ContextRule(
            lambda a: signals.has_framework(a, "sox"),
            "Implement SOX-compliant audit controls with detailed logging",
        ),
    ),
    Section.SHARING: (
        ContextRule(
            lambda a: signals.maturity(a) == "basic",
            "Start with simple approval workflows before implementing complex sharing protocols",
        ),
    ),
}

FRAMEWORK_RECOMMENDATIONS: dict[str, str] = {
    "gdpr": "Implement GDPR-specific data mapping and consent management",
    "hipaa": "Deploy HIPAA-compliant encryption and access audit systems",
    "sox": "Establish SOX-compliant financial data controls and reporting",
}


def compose(
    assessment:   Assessment,
    score_result: ScoreResult,
    template:     Template,
    organization: Optional[str] = None,
) -> RecommendationDocument:
    """Build the base recommendation document for one assessment."""
    answers = assessment.answers
    org = assessment.organization or organization or DEFAULT_ORGANIZATION

    sections: dict[str, list[str]] = {}
    for section_name, base in (template.sections or {}).items():
        sections[section_name] = list(base) + contextual_recommendations(section_name, answers)

    return RecommendationDocument(
        summary=build_summary(answers, score_result, template, org),
        sections=sections,
    )


def build_summary(
    answers:      Mapping[str, Any],
    score_result: ScoreResult,
    template:     Template,
    organization: str = DEFAULT_ORGANIZATION,
) -> str:
    percentage = score_percentage(score_result)
    level = determine_governance_level(score_result.total_score)

    if template.summary:
        summary = (
            template.summary
            .replace("{organization}", organization)
            .replace("{level}", str(level))
            .replace("{score}", str(score_result.total_score))
            .replace("{percentage}", str(percentage))
        )
    else:
        summary = (
            f"{organization} demonstrates {level} data governance maturity "
            f"with a score of {percentage}/100."
        )

    insights = build_insights(answers)
    if insights:
        summary += " " + " ".join(insights)
    return summary


def build_insights(answers: Mapping[str, Any]) -> list[str]:
    return [rule.text for rule in INSIGHT_RULES if rule.predicate(answers)]


def contextual_recommendations(section_name: str, answers: Mapping[str, Any]) -> list[str]:
    """Contextual additions for one section, in table order."""
    recommendations = [
        rule.text for rule in SECTION_RULES.get(section_name, ()) if rule.predicate(answers)
    ]
    if section_name == Section.COMPLIANCE:
        for framework in signals.frameworks(answers):
            text = FRAMEWORK_RECOMMENDATIONS.get(framework) if isinstance(framework, str) else None
            if text:
                recommendations.append(text)
    return recommendations
