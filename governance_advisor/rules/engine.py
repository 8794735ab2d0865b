"""
In-process rules engine — the default ``RuleEvaluator``.

Evaluation flow
---------------
1. Active rules are taken in descending ``priority`` (ties keep load order).
2. Each rule's ``ConditionGroup`` is evaluated against the context::

       {"answers": {...}, "assessment_id": "...", "timestamp": "...",
        "questions": [...], "variables": {...}}

3. A matched rule applies its actions; ``recommend`` actions contribute the
   recommendations the recommendation engine merges into its ``rules`` section.
4. An exception inside one rule is recorded in ``errors`` and evaluation
   moves on to the next rule.

Usage::

    engine = RulesEngine(rules, event_sink=bus)
    evaluation = engine.evaluate({"question-4": "open_access"}, "assessment-1")
    evaluation.recommendations   # [{"message": ..., "rule_id": ..., ...}]
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from pydantic import ValidationError

from governance_advisor.events import EventSink, emit_event
from governance_advisor.models.question import Question
from governance_advisor.models.rule import Rule, RuleEvaluation
from governance_advisor.rules.actions import ActionContext, RuleOutcome, apply_rule_actions
from governance_advisor.rules.conditions import evaluate_conditions
from governance_advisor.utils.time_utils import utc_isoformat

logger = logging.getLogger(__name__)


class RulesEngine:
    """Evaluates business rules against assessment answers.

    Attributes:
        rules: Rules in evaluation order (highest priority first).
        variables: Values written by ``set_variable`` actions with
            ``scope = "global"``; persists across evaluations.
    """

    def __init__(
        self,
        rules: Iterable[Rule] = (),
        event_sink: Optional[EventSink] = None,
        questions: Sequence[Question] = (),
    ) -> None:
        self.rules: list[Rule] = _by_priority(rules)
        self.event_sink = event_sink
        self.questions = list(questions)
        self.variables: dict[str, Any] = {}

    # ── RuleEvaluator protocol ────────────────────────────────────────────────

    def evaluate(self, answers: Mapping[str, Any], assessment_id: str) -> RuleEvaluation:
        context = {
            "answers": dict(answers),
            "assessment_id": assessment_id,
            "timestamp": utc_isoformat(),
            "questions": [q.model_dump() for q in self.questions],
            "variables": self.variables,
        }
        return self.evaluate_rules(context)

    # ── Evaluation ────────────────────────────────────────────────────────────

    def evaluate_rules(
        self,
        context: dict[str, Any],
        rules: Optional[Iterable[Rule]] = None,
    ) -> RuleEvaluation:
        """Evaluate ``rules`` (default: all active rules) against ``context``."""
        to_evaluate = list(rules) if rules is not None else [r for r in self.rules if r.active]

        evaluated = matched = applied = 0
        score = 0.0
        recommendations: list[dict[str, Any]] = []
        actions: list[dict[str, Any]] = []
        errors: list[dict[str, Any]] = []

        for rule in to_evaluate:
            evaluated += 1
            try:
                outcome = self._evaluate_rule(rule, context)
                if not outcome.matched:
                    continue
                matched += 1
                action_results = apply_rule_actions(
                    ActionContext(
                        context=context,
                        outcome=outcome,
                        rule=rule,
                        event_sink=self.event_sink,
                        variables=self.variables,
                    )
                )
                applied += len(action_results)
                actions.extend(action_results)
                score += outcome.score
                recommendations.extend(outcome.recommendations)
            except Exception as exc:
                logger.error("Error evaluating rule %s: %s", rule.id, exc)
                errors.append({"rule_id": rule.id, "error": str(exc)})

        evaluation = RuleEvaluation(
            evaluated_rules=evaluated,
            matched_rules=matched,
            applied_actions=applied,
            score=score,
            recommendations=recommendations,
            actions=actions,
            errors=errors,
        )
        logger.debug(
            "Rules evaluated | evaluated=%d matched=%d actions=%d",
            evaluated, matched, applied,
        )
        emit_event(self.event_sink, "rules.evaluated", {"context": context, "results": evaluation})
        return evaluation

    def _evaluate_rule(self, rule: Rule, context: Mapping[str, Any]) -> RuleOutcome:
        group = evaluate_conditions(rule.conditions, context)
        return RuleOutcome(rule_id=rule.id, matched=group.matched, conditions=group.details)

    def test_rules(
        self,
        sample_answers: Mapping[str, Any],
        rules: Optional[Sequence[Rule]] = None,
    ) -> dict[str, Any]:
        """Dry-run rules against sample answers and summarize the match rate."""
        context = {
            "answers": dict(sample_answers),
            "assessment_id": "test-assessment",
            "timestamp": utc_isoformat(),
            "test": True,
        }
        results = self.evaluate_rules(context, rules)
        rate = (
            f"{results.matched_rules / results.evaluated_rules * 100:.1f}%"
            if results.evaluated_rules else "0%"
        )
        return {
            "context": context,
            "results": results,
            "summary": {
                "total_rules": len(rules) if rules is not None else len(self.rules),
                "evaluated_rules": results.evaluated_rules,
                "matched_rules": results.matched_rules,
                "success_rate": rate,
            },
        }

    # ── Rule management ───────────────────────────────────────────────────────

    def add_rule(self, raw: Mapping[str, Any]) -> Rule:
        """Validate and add a rule; raises ``ValueError`` listing all problems."""
        errors = validate_rule(raw)
        if errors:
            raise ValueError("Invalid rule: " + ", ".join(errors))
        try:
            rule = Rule.model_validate(raw)
        except ValidationError as exc:
            raise ValueError(f"Invalid rule: {exc}") from exc
        self.rules = _by_priority([r for r in self.rules if r.id != rule.id] + [rule])
        return rule

    def remove_rule(self, rule_id: str) -> bool:
        remaining = [r for r in self.rules if r.id != rule_id]
        removed = len(remaining) != len(self.rules)
        self.rules = remaining
        return removed

    def get_stats(self) -> dict[str, Any]:
        active = [r for r in self.rules if r.active]
        by_category: dict[str, int] = {}
        for rule in self.rules:
            key = rule.category or "uncategorized"
            by_category[key] = by_category.get(key, 0) + 1
        return {
            "total_rules": len(self.rules),
            "active_rules": len(active),
            "inactive_rules": len(self.rules) - len(active),
            "rules_by_category": by_category,
        }


def validate_rule(raw: Mapping[str, Any]) -> list[str]:
    """Structural checks on a raw rule mapping; empty list means valid."""
    errors: list[str] = []
    if not raw.get("id"):
        errors.append("Rule ID is required")
    if not raw.get("name"):
        errors.append("Rule name is required")
    conditions = raw.get("conditions")
    if not conditions:
        errors.append("Rule conditions are required")
    elif not isinstance(conditions, Mapping) or not isinstance(conditions.get("rules"), list):
        errors.append("Rule conditions must have rules array")
    actions = raw.get("actions")
    if actions is None:
        errors.append("Rule actions are required")
    elif not isinstance(actions, list):
        errors.append("Rule actions must be an array")
    return errors


def _by_priority(rules: Iterable[Rule]) -> list[Rule]:
    return sorted(rules, key=lambda r: -r.priority)
