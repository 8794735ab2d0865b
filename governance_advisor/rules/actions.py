"""
Rule actions, applied in order when a rule matches.

Each handler receives the action parameters and a ``RuleOutcome`` it may
update (score, recommendations) and returns the ``data`` recorded in the
action log. Handlers are looked up in ``ACTION_HANDLERS``; an unknown type
raises ``ValueError``, which ``apply_rule_actions`` records as a failed action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, MutableMapping, Optional

from governance_advisor.events import EventSink, emit_event
from governance_advisor.models.rule import Rule, RuleAction
from governance_advisor.rules.conditions import ConditionOutcome, get_field_value, is_empty
from governance_advisor.utils.ids import generate_id
from governance_advisor.utils.time_utils import utc_isoformat

logger = logging.getLogger(__name__)


@dataclass
class RuleOutcome:
    """Mutable per-rule state while a matched rule's actions run."""

    rule_id: str
    matched: bool = False
    score: float = 0.0
    recommendations: list[dict[str, Any]] = field(default_factory=list)
    conditions: list[ConditionOutcome] = field(default_factory=list)


@dataclass
class ActionContext:
    """Everything an action handler may touch."""

    context: MutableMapping[str, Any]
    outcome: RuleOutcome
    rule: Rule
    event_sink: Optional[EventSink] = None
    variables: MutableMapping[str, Any] = field(default_factory=dict)


def apply_rule_actions(ctx: ActionContext) -> list[dict[str, Any]]:
    """Apply every action of ``ctx.rule``; one result record per action."""
    results: list[dict[str, Any]] = []
    for action in ctx.rule.actions:
        try:
            results.append(apply_action(action, ctx))
        except Exception as exc:
            logger.error("Action %r in rule %s failed: %s", action.type, ctx.rule.id, exc)
            results.append({"type": action.type, "success": False, "error": str(exc)})
    return results


def apply_action(action: RuleAction, ctx: ActionContext) -> dict[str, Any]:
    handler = ACTION_HANDLERS.get(action.type)
    if handler is None:
        raise ValueError(f"Unknown action type: {action.type}")
    data = handler(dict(action.parameters), ctx)
    return {"type": action.type, "success": True, "data": data}


# ── Handlers ──────────────────────────────────────────────────────────────────

def _score_action(params: dict[str, Any], ctx: ActionContext) -> dict[str, Any]:
    operation = params.get("operation", "add")
    value = params.get("value") or 1
    weight = params.get("weight") or 1
    previous = ctx.outcome.score

    if operation == "subtract":
        new_score = previous - value * weight
    elif operation == "multiply":
        new_score = previous + previous * value * weight
    elif operation == "set":
        new_score = value * weight
    else:
        new_score = previous + value * weight

    ctx.outcome.score = new_score
    return {
        "operation": operation,
        "value": value,
        "weight": weight,
        "score_change": new_score - previous,
        "new_score": new_score,
    }


def _recommend_action(params: dict[str, Any], ctx: ActionContext) -> dict[str, Any]:
    recommendation = {
        "id": generate_id("rule"),
        "template_id": params.get("template"),
        "message": params.get("message"),
        "priority": params.get("priority", "normal"),
        "rule_id": ctx.outcome.rule_id,
        "timestamp": utc_isoformat(),
        "data": params.get("data") or {},
    }
    ctx.outcome.recommendations.append(recommendation)
    return recommendation


def _route_action(params: dict[str, Any], ctx: ActionContext) -> dict[str, Any]:
    return {
        "target": params.get("target"),
        "condition": params.get("condition"),
        "timestamp": utc_isoformat(),
    }


def _validate_action(params: dict[str, Any], ctx: ActionContext) -> dict[str, Any]:
    # Only presence is checked here; field-level validation lives elsewhere.
    target = params.get("field")
    valid = True
    if params.get("rule") == "required" and target:
        valid = not is_empty(get_field_value(target, ctx.context))
    return {
        "field": target,
        "rule": params.get("rule"),
        "message": params.get("message"),
        "valid": valid,
    }


def _notify_action(params: dict[str, Any], ctx: ActionContext) -> dict[str, Any]:
    message = params.get("message")
    kind = params.get("type", "info")
    emit_event(
        ctx.event_sink,
        "notification.show",
        {"message": message, "type": kind, "source": "rules-engine", "rule_id": ctx.outcome.rule_id},
    )
    return {
        "message": message,
        "type": kind,
        "recipients": params.get("recipients") or [],
        "sent": ctx.event_sink is not None,
    }


def _set_variable_action(params: dict[str, Any], ctx: ActionContext) -> dict[str, Any]:
    variable = params.get("variable")
    value = params.get("value")
    scope = params.get("scope", "context")
    if not variable:
        raise ValueError("set_variable requires a 'variable' parameter")
    if scope == "global":
        ctx.variables[variable] = value
    else:
        ctx.context[variable] = value
    return {"variable": variable, "value": value, "scope": scope}


ACTION_HANDLERS: dict[str, Callable[[dict[str, Any], ActionContext], dict[str, Any]]] = {
    "score": _score_action,
    "recommend": _recommend_action,
    "route": _route_action,
    "validate": _validate_action,
    "notify": _notify_action,
    "set_variable": _set_variable_action,
}
