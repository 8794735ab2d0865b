"""
Template selection: an ordered eligibility table, first match wins.

Rules (evaluated in order)
--------------------------
    1. high_security_template          : financial data, or HIPAA in scope
    2. simplified_governance_template  : organization size is "small"
    3. advanced_governance_template    : maturity is "defined" or "managed"
    4. basic_governance_template       : always

A rule whose template id is not loaded is skipped and evaluation continues
with the next rule. When nothing resolves the built-in ``DEFAULT_TEMPLATE``
is returned, so selection always yields a template.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, NamedTuple

from governance_advisor.models.template import DEFAULT_TEMPLATE, Template
from governance_advisor.recommendations import signals

logger = logging.getLogger(__name__)

BASIC_TEMPLATE_ID = "basic_governance_template"


class TemplateRule(NamedTuple):
    name: str
    predicate: Callable[[Mapping[str, Any]], bool]
    template_id: str


TEMPLATE_RULES: tuple[TemplateRule, ...] = (
    TemplateRule(
        "sensitive_data",
        lambda a: signals.data_type(a) == "financial_data"
        or signals.has_framework(a, "hipaa"),
        "high_security_template",
    ),
    TemplateRule(
        "small_organization",
        lambda a: signals.organization_size(a) == "small",
        "simplified_governance_template",
    ),
    TemplateRule(
        "mature_governance",
        lambda a: signals.maturity(a) in ("defined", "managed"),
        "advanced_governance_template",
    ),
    TemplateRule("default", lambda a: True, BASIC_TEMPLATE_ID),
)


def select_template(
    answers:   Mapping[str, Any],
    templates: Iterable[Template],
    rules:     Iterable[TemplateRule] = TEMPLATE_RULES,
) -> Template:
    """Pick the recommendation template for an answer set.

    Args:
        answers:   Assessment answers.
        templates: Loaded templates, looked up by id.
        rules:     Ordered eligibility table; defaults to ``TEMPLATE_RULES``.

    Returns:
        The first loaded template whose rule matches, else the basic
        template if loaded, else ``DEFAULT_TEMPLATE``.
    """
    by_id: dict[str, Template] = {}
    for template in templates:
        by_id.setdefault(template.id, template)

    for rule in rules:
        if not rule.predicate(answers):
            continue
        template = by_id.get(rule.template_id)
        if template is not None:
            logger.debug("Template rule %r matched -> %s", rule.name, template.id)
            return template
        logger.debug(
            "Template rule %r matched but %s is not loaded; falling through",
            rule.name, rule.template_id,
        )

    fallback = by_id.get(BASIC_TEMPLATE_ID)
    if fallback is not None:
        return fallback
    logger.info("No configured template resolved; using built-in default template")
    return DEFAULT_TEMPLATE
