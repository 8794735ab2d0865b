"""
Answer signals read by the template selector and the composer.

The standard questionnaire uses fixed question ids for the handful of answers
that drive template choice and contextual text. Every accessor tolerates a
missing or malformed answer and returns an "absent" value instead of raising.
"""

from __future__ import annotations

from typing import Any, Mapping

DATA_TYPE_QUESTION = "question-1"
MATURITY_QUESTION = "question-2"
FRAMEWORKS_QUESTION = "question-3"
ACCESS_QUESTION = "question-4"
ORG_SIZE_QUESTION = "question-5"


def data_type(answers: Mapping[str, Any]) -> Any:
    return answers.get(DATA_TYPE_QUESTION)


def maturity(answers: Mapping[str, Any]) -> Any:
    return answers.get(MATURITY_QUESTION)


def access_model(answers: Mapping[str, Any]) -> Any:
    return answers.get(ACCESS_QUESTION)


def organization_size(answers: Mapping[str, Any]) -> Any:
    return answers.get(ORG_SIZE_QUESTION)


def frameworks(answers: Mapping[str, Any]) -> list[Any]:
    """Selected compliance frameworks; empty unless the answer is a list."""
    value = answers.get(FRAMEWORKS_QUESTION)
    return list(value) if isinstance(value, list) else []


def has_framework(answers: Mapping[str, Any], *names: str) -> bool:
    selected = frameworks(answers)
    return any(name in selected for name in names)
