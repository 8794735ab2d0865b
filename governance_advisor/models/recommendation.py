"""
Score and recommendation output models.

``ScoreResult`` is the scoring subsystem's output; ``RecommendationDocument``
is the composed text; ``RecommendationResult`` is what the engine returns
and caches. ``RuleResults`` is the normalized output of a rule evaluator.

All models are frozen. Nested sections and breakdowns are plain containers;
the cache copies results in and out, so editing them never reaches a
stored entry.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from governance_advisor.models.template import Template
from governance_advisor.taxonomy.governance_taxonomy import GovernanceLevel


class CategoryScore(BaseModel):
    """Per-category aggregate.

    Attributes:
        score: Weighted raw score of answered questions (unrounded).
        max_score: Weighted maximum over all questions (unrounded).
        percentage: ``round(score / max_score * 100)``; 0 when max is 0.
        weight: Category weight applied to the overall total.
    """

    model_config = ConfigDict(frozen=True)

    score: float
    max_score: float
    percentage: int
    weight: float


class ScoreResult(BaseModel):
    """Overall score: rounded totals plus the per-category breakdown."""

    model_config = ConfigDict(frozen=True)

    total_score: int
    max_score: int
    breakdown: dict[str, CategoryScore] = {}


class RecommendationDocument(BaseModel):
    """Summary plus ordered recommendation strings per section."""

    model_config = ConfigDict(frozen=True)

    summary: str
    sections: dict[str, list[str]] = {}


class RuleResults(BaseModel):
    """Supplementary output from a rule evaluator.

    Only ``recommendations`` and ``actions`` are consumed by the engine;
    evaluators may report more (counts, errors) and it is kept verbatim.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    recommendations: list[dict[str, Any]] = []
    actions: list[Any] = []

    @classmethod
    def empty(cls) -> "RuleResults":
        return cls()

    def messages(self) -> list[str]:
        """Recommendation messages in evaluator order."""
        # Non-string messages are rendered as text.
        return [
            str(rec.get("message") or "Rule-based recommendation")
            for rec in self.recommendations
        ]


class RecommendationResult(BaseModel):
    """Final engine output for one assessment.

    Attributes:
        id: ``rec-<epoch ms>-<random>`` identifier.
        assessment_id: The assessment this result was computed for.
        score: Rounded weighted total score.
        max_score: Rounded weighted maximum score.
        percentage: ``round(score / max_score * 100)``.
        level: Governance tier from the fixed 100-point thresholds.
        template: The template selected for this assessment.
        recommendations: Merged and prioritized recommendation document.
        score_breakdown: Per-category scores.
        generated_at: ISO-8601 UTC timestamp.
        version: Result format version.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    assessment_id: str
    score: int
    max_score: int
    percentage: int
    level: GovernanceLevel
    template: Template
    recommendations: RecommendationDocument
    score_breakdown: dict[str, CategoryScore]
    generated_at: str
    version: str = "1.0.0"
