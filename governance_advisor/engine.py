"""
Recommendation engine: assessment in, ``RecommendationResult`` out.

Flow for ``generate_recommendations(assessment)``
-------------------------------------------------
    1. fingerprint(id, answers, config version) → cache hit returns at once
    2. compute_score()            — weighted category scores
    3. determine_governance_level — fixed 100-point thresholds
    4. select_template()          — first-match eligibility table
    5. compose()                  — base document + insights + section rules
    6. apply_rules()  (awaited)   — external evaluator; failures absorbed
    7. merge_recommendations()    — ``rules`` section + PRIORITY partition
    8. cache.put() → emit ``recommendations.generated`` → return

Concurrency
-----------
Two concurrent calls for the same uncached fingerprint both compute and the
later ``put`` wins. Computation is pure, so either result is correct.

Errors
------
Rule-evaluator faults never surface. Any other fault while computing is
logged and re-raised as ``RecommendationGenerationError``; there is no retry.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from governance_advisor.config import AppConfig
from governance_advisor.events import EventSink, emit_event
from governance_advisor.models.assessment import Assessment
from governance_advisor.models.recommendation import RecommendationResult
from governance_advisor.questionnaire import ConfigurationProvider
from governance_advisor.recommendations.cache import RecommendationCache, fingerprint
from governance_advisor.recommendations.composer import DEFAULT_ORGANIZATION, compose
from governance_advisor.recommendations.integrator import RuleEvaluator, apply_rules
from governance_advisor.recommendations.merger import merge_recommendations
from governance_advisor.recommendations.selector import select_template
from governance_advisor.rules.engine import RulesEngine
from governance_advisor.rules.http_evaluator import HttpRuleEvaluator
from governance_advisor.scoring.completeness import compute_completeness, compute_partial_score
from governance_advisor.scoring.scorer import (
    compute_score,
    determine_governance_level,
    score_percentage,
)
from governance_advisor.utils.ids import generate_id
from governance_advisor.utils.time_utils import utc_isoformat

logger = logging.getLogger(__name__)

RESULT_VERSION = "1.0.0"


class RecommendationGenerationError(RuntimeError):
    """Raised when a recommendation cannot be computed for an assessment."""

    def __init__(self, assessment_id: str, message: str) -> None:
        super().__init__(f"Failed to generate recommendations for {assessment_id}: {message}")
        self.assessment_id = assessment_id


class RecommendationEngine:
    """Explicitly constructed engine holding its configuration and cache.

    Attributes:
        provider: Source of questions, templates, weights and config version.
        rule_evaluator: Optional external evaluator (sync or async).
        event_sink: Optional sink for ``recommendations.generated``.
        cache: Fingerprint-keyed result cache.
        organization_name: Summary fallback when an assessment has none.
        rule_timeout: Seconds to wait for the evaluator; 0/None = no limit.
        computations: Number of results computed (cache misses).
    """

    def __init__(
        self,
        provider: ConfigurationProvider,
        rule_evaluator: Optional[RuleEvaluator] = None,
        event_sink: Optional[EventSink] = None,
        cache: Optional[RecommendationCache] = None,
        organization_name: str = DEFAULT_ORGANIZATION,
        rule_timeout: Optional[float] = 5.0,
    ) -> None:
        self.provider = provider
        self.rule_evaluator = rule_evaluator
        self.event_sink = event_sink
        self.cache = cache if cache is not None else RecommendationCache()
        self.organization_name = organization_name
        self.rule_timeout = rule_timeout
        self.computations = 0

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        event_sink: Optional[EventSink] = None,
        rule_evaluator: Optional[RuleEvaluator] = None,
    ) -> "RecommendationEngine":
        """Build an engine (and its rule evaluator) from ``AppConfig``.

        Without an explicit ``rule_evaluator``, a configured
        ``engine.rules_endpoint`` selects the HTTP evaluator; otherwise the
        in-process ``RulesEngine`` runs the questionnaire's rules.
        """
        provider = ConfigurationProvider.from_config(config)
        if rule_evaluator is None:
            rule_evaluator = _default_evaluator(config, provider, event_sink)
        return cls(
            provider=provider,
            rule_evaluator=rule_evaluator,
            event_sink=event_sink,
            organization_name=config.engine.organization_name,
            rule_timeout=config.engine.rule_timeout_seconds,
        )

    # ── Generation ────────────────────────────────────────────────────────────

    async def generate_recommendations(self, assessment: Assessment) -> RecommendationResult:
        """Return the (possibly cached) recommendation result for ``assessment``.

        Raises:
            RecommendationGenerationError: If scoring, selection or composition
                fails (e.g. corrupt configuration).
        """
        key = fingerprint(assessment.id, assessment.answers, self.provider.config_version)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            result = await self._compute(assessment)
        except Exception as exc:
            logger.error(
                "Recommendation generation failed | assessment_id=%s | %s",
                assessment.id, exc,
            )
            raise RecommendationGenerationError(assessment.id, str(exc)) from exc

        self.cache.put(key, result)
        emit_event(self.event_sink, "recommendations.generated", result)
        logger.info(
            "Recommendations generated | assessment_id=%s score=%d/%d level=%s template=%s",
            assessment.id, result.score, result.max_score, result.level, result.template.id,
        )
        return result

    async def _compute(self, assessment: Assessment) -> RecommendationResult:
        self.computations += 1
        provider = self.provider

        score_result = compute_score(
            provider.questions,
            assessment.answers,
            provider.scoring_weights,
            provider.default_category_weight,
        )
        level = determine_governance_level(score_result.total_score)
        template = select_template(assessment.answers, provider.templates)
        document = compose(assessment, score_result, template, self.organization_name)

        rule_results = await apply_rules(self.rule_evaluator, assessment, self.rule_timeout)
        merged = merge_recommendations(document, rule_results)

        return RecommendationResult(
            id=generate_id("rec"),
            assessment_id=assessment.id,
            score=score_result.total_score,
            max_score=score_result.max_score,
            percentage=score_percentage(score_result),
            level=level,
            template=template,
            recommendations=merged,
            score_breakdown=score_result.breakdown,
            generated_at=utc_isoformat(),
            version=RESULT_VERSION,
        )

    # ── Configuration & cache management ──────────────────────────────────────

    def update_scoring_weights(self, partial_weights: Mapping[str, float]) -> dict[str, float]:
        """Merge new category weights and invalidate every cached result."""
        weights = self.provider.update_scoring_weights(partial_weights)
        self.cache.clear_on_weight_change()
        return weights

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_cached_recommendation(self, assessment_id: str) -> Optional[RecommendationResult]:
        return self.cache.find_by_assessment(assessment_id)

    def export_recommendation(self, recommendation_id: str) -> Optional[dict[str, Any]]:
        """Export a cached result by its ``rec-...`` id, or ``None``."""
        result = self.cache.find_by_id(recommendation_id)
        if result is None:
            return None
        return {
            "recommendation": result.model_dump(mode="json"),
            "export_date": utc_isoformat(),
            "format": "json",
        }

    def generate_preview(self, partial_answers: Mapping[str, Any]) -> dict[str, Any]:
        """Quick estimate for an unfinished questionnaire; not cached."""
        questions = self.provider.questions
        estimated = compute_partial_score(questions, partial_answers)
        return {
            "estimated_score": estimated,
            "estimated_level": determine_governance_level(estimated),
            "completeness": compute_completeness(questions, partial_answers).model_dump(),
            "preview": True,
        }

    def get_stats(self) -> dict[str, Any]:
        return {
            "cache_size": len(self.cache),
            "cache_hits": self.cache.hits,
            "cache_misses": self.cache.misses,
            "computations": self.computations,
            "templates_loaded": len(self.provider.templates),
            "scoring_weights": self.provider.scoring_weights,
            "config_version": self.provider.config_version,
        }

    def reset(self) -> None:
        """Drop cached results and reload configuration from its source file."""
        self.cache.clear()
        self.provider.reload()
        if isinstance(self.rule_evaluator, RulesEngine):
            self.rule_evaluator = RulesEngine(
                self.provider.rules, self.event_sink, self.provider.questions,
            )


def _default_evaluator(
    config: AppConfig,
    provider: ConfigurationProvider,
    event_sink: Optional[EventSink],
) -> RuleEvaluator:
    if config.engine.rules_endpoint:
        return HttpRuleEvaluator(
            config.engine.rules_endpoint,
            timeout=config.engine.rule_timeout_seconds or 5.0,
        )
    return RulesEngine(provider.rules, event_sink, provider.questions)
