"""
Merge & prioritize: folds rule-evaluator output into the composed document
and moves ``PRIORITY`` entries to the top of every section.

The partition is stable: priority entries keep their relative order, and so
do the rest. Duplicate strings within a section are dropped (first occurrence
kept) before partitioning. The input document is never mutated.
"""

from __future__ import annotations

from governance_advisor.models.recommendation import RecommendationDocument, RuleResults
from governance_advisor.taxonomy.governance_taxonomy import PRIORITY_MARKER, Section


def merge_recommendations(
    document:     RecommendationDocument,
    rule_results: RuleResults,
) -> RecommendationDocument:
    """Append rule messages under ``rules`` and prioritize every section."""
    sections = {name: list(items) for name, items in document.sections.items()}

    messages = rule_results.messages()
    if messages:
        sections.setdefault(Section.RULES.value, []).extend(messages)

    return RecommendationDocument(
        summary=document.summary,
        sections={
            name: prioritize_recommendations(dedupe(items))
            for name, items in sections.items()
        },
    )


def prioritize_recommendations(recommendations: list[str]) -> list[str]:
    """Stable partition: entries containing ``PRIORITY`` first."""
    priority = [r for r in recommendations if _is_priority(r)]
    rest = [r for r in recommendations if not _is_priority(r)]
    return priority + rest


def dedupe(recommendations: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for rec in recommendations:
        if rec in seen:
            continue
        seen.add(rec)
        unique.append(rec)
    return unique


def _is_priority(recommendation: object) -> bool:
    return isinstance(recommendation, str) and PRIORITY_MARKER in recommendation
