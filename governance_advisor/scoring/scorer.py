"""
Maturity scoring: converts a question list + answer set into a weighted
``ScoreResult`` and a governance level.

Per-question score (0–10 for scalar types)
------------------------------------------
    single-select : score of the matching option, else 0
    multi-select  : sum of scores of the selected options that exist
    rating-scale  : round(answer / scale * 10); 0 outside [1, scale]
    number-input  : round(clamp((answer - min) / (max - min), 0, 1) * 10)
    text-input    : trimmed length bucket  0 / <10 → 2 / <50 → 5 / <100 → 7 / 10
    unknown type  : 0

Per-question maximum
--------------------
    single-select : highest option score (0 with no options)
    multi-select  : sum of all option scores
    otherwise     : 10

Aggregation
-----------
    category raw  = Σ score(q) * weight(q)         (answered questions only)
    category max  = Σ max(q)   * weight(q)         (every question)
    total score   = round(Σ category raw * category weight)
    total max     = round(Σ category max * category weight)

Rounding is half-up (``floor(x + 0.5)``) and happens per step as listed;
do not replace it with an algebraically equivalent single rounding.

Governance level
----------------
The level is taken against a fixed 100-point basis, not the computed max:
    ≥80 high, ≥60 medium, ≥40 developing, else basic.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Optional

from governance_advisor.models.question import Question
from governance_advisor.models.recommendation import CategoryScore, ScoreResult
from governance_advisor.taxonomy.governance_taxonomy import (
    LEVEL_THRESHOLDS,
    GovernanceLevel,
    QuestionType,
)
from governance_advisor.utils.parsing import parse_float, parse_int

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"
DEFAULT_CATEGORY_WEIGHT = 0.1
NORMALIZED_MAX = 10
LEVEL_BASIS = 100.0


def compute_score(
    questions:        Iterable[Question],
    answers:          Mapping[str, Any],
    category_weights: Optional[Mapping[str, float]] = None,
    default_weight:   float = DEFAULT_CATEGORY_WEIGHT,
) -> ScoreResult:
    """Compute the weighted maturity score for one answer set.

    Args:
        questions:        Active questionnaire questions.
        answers:          Question id -> answer value. Missing or ``None``
                          answers count as unanswered.
        category_weights: Category -> weight. Unlisted categories use
                          ``default_weight``.
        default_weight:   Weight for categories absent from the table.

    Returns:
        ScoreResult with rounded totals and the per-category breakdown.
    """
    weights = category_weights or {}

    by_category: dict[str, list[Question]] = {}
    for question in questions:
        by_category.setdefault(question.category or DEFAULT_CATEGORY, []).append(question)

    total = 0.0
    total_max = 0.0
    breakdown: dict[str, CategoryScore] = {}

    for category, category_questions in by_category.items():
        category_score = 0.0
        category_max = 0.0

        for question in category_questions:
            answer = answers.get(question.id)
            if answer is not None:
                category_score += score_question(question, answer) * question.weight
            category_max += max_question_score(question) * question.weight

        category_weight = weights.get(category, default_weight)
        breakdown[category] = CategoryScore(
            score=category_score,
            max_score=category_max,
            percentage=(
                round_half_up(category_score / category_max * 100)
                if category_max > 0 else 0
            ),
            weight=category_weight,
        )
        total += category_score * category_weight
        total_max += category_max * category_weight

    return ScoreResult(
        total_score=round_half_up(total),
        max_score=round_half_up(total_max),
        breakdown=breakdown,
    )


def score_question(question: Question, answer: Any) -> float:
    """Score one answered question (unweighted). Never raises."""
    qtype = question.type
    if qtype == QuestionType.SINGLE_SELECT:
        return _single_select_score(question, answer)
    if qtype == QuestionType.MULTI_SELECT:
        return _multi_select_score(question, answer)
    if qtype == QuestionType.RATING_SCALE:
        return _rating_score(question, answer)
    if qtype == QuestionType.NUMBER_INPUT:
        return _number_score(question, answer)
    if qtype == QuestionType.TEXT_INPUT:
        return _text_score(answer)
    logger.debug("Unknown question type %r for %s; scoring 0", qtype, question.id)
    return 0


def max_question_score(question: Question) -> float:
    """Maximum achievable (unweighted) score for ``question``."""
    qtype = question.type
    if qtype == QuestionType.SINGLE_SELECT:
        if not question.options:
            return 0
        return max(opt.score for opt in question.options)
    if qtype == QuestionType.MULTI_SELECT:
        if not question.options:
            return 0
        return sum(opt.score for opt in question.options)
    return NORMALIZED_MAX


def determine_governance_level(total_score: float) -> GovernanceLevel:
    """Map a total score to a governance tier on the fixed 100-point basis."""
    percentage = total_score / LEVEL_BASIS * 100
    for threshold, level in LEVEL_THRESHOLDS:
        if percentage >= threshold:
            return level
    return GovernanceLevel.BASIC


def score_percentage(score_result: ScoreResult) -> int:
    """``round(total / max * 100)``; 0 when there is nothing to score."""
    if score_result.max_score <= 0:
        return 0
    return round_half_up(score_result.total_score / score_result.max_score * 100)


def round_half_up(value: float) -> int:
    """Round .5 away from zero toward +inf, the way a JS ``Math.round`` does."""
    return int(math.floor(value + 0.5))


# ── Type-specific scoring ─────────────────────────────────────────────────────

def _single_select_score(question: Question, answer: Any) -> float:
    if not question.options:
        return 0
    option = question.find_option(answer)
    return option.score if option else 0


def _multi_select_score(question: Question, answer: Any) -> float:
    if not question.options or not isinstance(answer, list):
        return 0
    total = 0.0
    for selected in answer:
        option = question.find_option(selected)
        if option:
            total += option.score
    return total


def _rating_score(question: Question, answer: Any) -> float:
    scale = question.scale or 5
    value = parse_int(answer)
    if value is None or value < 1 or value > scale:
        return 0
    return round_half_up(value / scale * NORMALIZED_MAX)


def _number_score(question: Question, answer: Any) -> float:
    value = parse_float(answer)
    if value is None:
        return 0
    span = question.max - question.min
    if span == 0:
        return 0
    normalized = _clamp((value - question.min) / span, 0.0, 1.0)
    return round_half_up(normalized * NORMALIZED_MAX)


def _text_score(answer: Any) -> float:
    if not isinstance(answer, str):
        return 0
    length = len(answer.strip())
    if length == 0:
        return 0
    if length < 10:
        return 2
    if length < 50:
        return 5
    if length < 100:
        return 7
    return 10


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
