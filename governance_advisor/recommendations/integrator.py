"""
External rule integration.

The rule evaluator is owned outside the engine. It may be synchronous (the
in-process ``RulesEngine``) or asynchronous (``HttpRuleEvaluator``); either
way ``apply_rules`` awaits it under an optional timeout and folds whatever
comes back into a ``RuleResults``.

Failure policy: a missing evaluator, any exception, a timeout, or a payload
that does not validate all produce ``RuleResults.empty()`` and a WARNING.
Nothing raised by the evaluator reaches the caller.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from governance_advisor.models.assessment import Assessment
from governance_advisor.models.recommendation import RuleResults

logger = logging.getLogger(__name__)


@runtime_checkable
class RuleEvaluator(Protocol):
    """Anything with ``evaluate(answers, assessment_id)``.

    The return value (or awaited value) is a ``RuleResults`` or a mapping with
    ``recommendations`` (each a mapping with a ``message``) and ``actions``.
    """

    def evaluate(self, answers: Mapping[str, Any], assessment_id: str) -> Any: ...


async def apply_rules(
    evaluator:  Optional[RuleEvaluator],
    assessment: Assessment,
    timeout:    Optional[float] = None,
) -> RuleResults:
    """Run the rule evaluator for one assessment; never raises.

    Args:
        evaluator:  Rule evaluator, or ``None`` when none is configured.
        assessment: Assessment whose answers are evaluated.
        timeout:    Seconds to wait for the evaluator; ``None`` or 0 waits
                    indefinitely.

    Returns:
        The evaluator's results, or an empty ``RuleResults`` on any failure.
    """
    if evaluator is None:
        return RuleResults.empty()

    try:
        outcome = evaluator.evaluate(assessment.answers, assessment.id)
        if inspect.isawaitable(outcome):
            if timeout:
                outcome = await asyncio.wait_for(outcome, timeout=timeout)
            else:
                outcome = await outcome
        return _normalize(outcome)
    except asyncio.TimeoutError:
        logger.warning(
            "Rule evaluator timed out after %.1fs | assessment_id=%s",
            timeout, assessment.id,
        )
    except Exception as exc:
        logger.warning(
            "Rule evaluator failed; continuing without rule output | assessment_id=%s | %s",
            assessment.id, exc,
        )
    return RuleResults.empty()


def _normalize(outcome: Any) -> RuleResults:
    if outcome is None:
        return RuleResults.empty()
    if isinstance(outcome, RuleResults):
        return outcome
    try:
        return RuleResults.model_validate(outcome)
    except ValidationError as exc:
        logger.warning("Rule evaluator returned an unusable payload: %s", exc)
        return RuleResults.empty()
