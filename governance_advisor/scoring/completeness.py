"""
Partial-answer helpers used for the live preview while a questionnaire is
still being filled in.

``compute_partial_score`` ignores question and category weights: it averages
the unweighted per-question scores of the answered questions and scales the
result by the share of questions answered, producing a rough 0–100 estimate.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from governance_advisor.models.question import Question
from governance_advisor.scoring.scorer import (
    max_question_score,
    round_half_up,
    score_question,
)


class Completeness(BaseModel):
    """Answer coverage, both as percentages in [0, 100]."""

    model_config = ConfigDict(frozen=True)

    total: float
    required: float


def compute_partial_score(
    questions: Sequence[Question],
    partial_answers: Mapping[str, Any],
) -> int:
    """Extrapolated 0–100 score from a partially completed answer set.

    Returns 0 when nothing is answered or the answered questions have no
    scoreable maximum.
    """
    if not partial_answers or not questions:
        return 0

    current = 0.0
    current_max = 0.0
    for question in questions:
        if question.id in partial_answers:
            current += score_question(question, partial_answers[question.id])
            current_max += max_question_score(question)

    if current_max == 0:
        return 0

    completion_ratio = len(partial_answers) / len(questions)
    average = current / current_max
    return round_half_up(average * 100 * completion_ratio)


def compute_completeness(
    questions: Sequence[Question],
    answers: Mapping[str, Any],
) -> Completeness:
    """Share of all questions answered and of required questions answered."""
    required = [q for q in questions if q.required]
    answered_required = [q for q in required if answers.get(q.id) is not None]

    total = len(answers) / len(questions) * 100 if questions else 0.0
    required_pct = len(answered_required) / len(required) * 100 if required else 0.0
    return Completeness(total=total, required=required_pct)
