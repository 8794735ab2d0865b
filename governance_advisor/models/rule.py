"""
Business-rule models for the in-process rules engine.

A ``Rule`` matches when its ``ConditionGroup`` holds for the evaluation
context, and then applies each of its ``RuleAction`` entries in order.
``RuleEvaluation`` is what ``RulesEngine.evaluate`` returns; it extends
``RuleResults`` so the recommendation engine can consume it directly.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from governance_advisor.models.recommendation import RuleResults

VALID_GROUP_OPERATORS = frozenset({"AND", "OR", "NOT", "XOR"})


class Condition(BaseModel):
    """One comparison against a dotted path in the evaluation context.

    Attributes:
        field: Dotted path, e.g. ``"answers.question-4"``.
        operator: Comparison operator name (see ``rules.conditions``).
        value: Expected value; shape depends on the operator.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    operator: str
    value: Any = None


class ConditionGroup(BaseModel):
    """Conditions combined with AND / OR / NOT / XOR."""

    model_config = ConfigDict(frozen=True)

    operator: str = "AND"
    rules: list[Condition] = []

    @field_validator("operator")
    @classmethod
    def normalize_operator(cls, v: str) -> str:
        return (v or "AND").upper()


class RuleAction(BaseModel):
    """An action applied when a rule matches.

    Attributes:
        type: ``score``, ``recommend``, ``route``, ``validate``, ``notify``
            or ``set_variable``.
        parameters: Action-specific parameters.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    parameters: dict[str, Any] = {}


class Rule(BaseModel):
    """A named business rule.

    Attributes:
        id: Unique rule identifier.
        name: Human-readable name.
        priority: Higher values are evaluated first.
        active: Inactive rules are skipped by ``evaluate``.
        category: Free-form grouping used in statistics.
        conditions: Match criteria; a rule without conditions never matches.
        actions: Applied in order when the rule matches.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: Optional[str] = None
    priority: int = 1
    active: bool = True
    conditions: Optional[ConditionGroup] = None
    actions: list[RuleAction] = []


class RuleEvaluation(RuleResults):
    """Full rules-engine output, including bookkeeping counters."""

    evaluated_rules: int = 0
    matched_rules: int = 0
    applied_actions: int = 0
    score: float = 0.0
    errors: list[dict[str, Any]] = []
