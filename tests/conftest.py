"""
Shared pytest fixtures for the Governance Advisor test suite.

Provides:
  - ``questionnaire_path`` / ``questionnaire``: the committed
    ``config/questionnaire.json``, loaded fresh for each test that
    requests it.
  - ``provider`` / ``rules_engine`` / ``engine``: a fully wired engine over
    that questionnaire, with the in-process rules engine as evaluator.
  - ``full_answers`` / ``sample_assessment``: a complete answer set that
    selects the high-security template and triggers a rule.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from governance_advisor.engine import RecommendationEngine
from governance_advisor.models.assessment import Assessment
from governance_advisor.questionnaire import (
    ConfigurationProvider,
    Questionnaire,
    load_questionnaire,
)
from governance_advisor.rules.engine import RulesEngine

QUESTIONNAIRE_PATH = Path(__file__).parent.parent / "config" / "questionnaire.json"


# ── Configuration fixtures ────────────────────────────────────────────────────

@pytest.fixture
def questionnaire_path() -> Path:
    return QUESTIONNAIRE_PATH


@pytest.fixture
def questionnaire() -> Questionnaire:
    return load_questionnaire(QUESTIONNAIRE_PATH)


@pytest.fixture
def provider(questionnaire: Questionnaire) -> ConfigurationProvider:
    """Provider over the committed questionnaire with the default weights."""
    return ConfigurationProvider(questionnaire=questionnaire, source_path=QUESTIONNAIRE_PATH)


@pytest.fixture
def rules_engine(provider: ConfigurationProvider) -> RulesEngine:
    return RulesEngine(provider.rules, questions=provider.questions)


@pytest.fixture
def engine(provider: ConfigurationProvider, rules_engine: RulesEngine) -> RecommendationEngine:
    return RecommendationEngine(provider, rule_evaluator=rules_engine)


# ── Sample answers ────────────────────────────────────────────────────────────

@pytest.fixture
def full_answers() -> dict[str, Any]:
    """Financial data, managed maturity, GDPR + HIPAA, open access, enterprise.

    Weighted total with the default weights is 8 of 19 (42%), level basic.
    """
    return {
        "question-1": "financial_data",
        "question-2": "managed",
        "question-3": ["gdpr", "hipaa"],
        "question-4": "open_access",
        "question-5": "enterprise",
    }


@pytest.fixture
def sample_assessment(full_answers: dict[str, Any]) -> Assessment:
    return Assessment(id="acme-2026-q3", answers=full_answers, organization="Acme")
