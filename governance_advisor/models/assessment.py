"""
Assessment model: one questionnaire instance and its answer set.

The answer set is never edited in place. ``with_answer()`` and
``without_answer()`` return a new ``Assessment`` with the whole entry
replaced, so a result cached for the old answers can never be confused with
the new ones.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Assessment(BaseModel):
    """A completed or in-progress questionnaire.

    Attributes:
        id: Assessment identifier (part of the cache fingerprint).
        answers: Mapping of question id to answer value. The value shape
            depends on the question type (scalar, list, number, string).
        organization: Organization name used in the generated summary;
            ``None`` falls back to the engine's configured name.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    answers: dict[str, Any] = {}
    organization: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Assessment id must not be empty.")
        return v

    @field_validator("answers", mode="before")
    @classmethod
    def default_answers(cls, v: Optional[dict[str, Any]]) -> dict[str, Any]:
        return dict(v or {})

    def with_answer(self, question_id: str, value: Any) -> "Assessment":
        """Return a copy with ``question_id`` set to ``value``."""
        answers = dict(self.answers)
        answers[question_id] = value
        return self.model_copy(update={"answers": answers})

    def without_answer(self, question_id: str) -> "Assessment":
        """Return a copy with ``question_id`` removed from the answer set."""
        answers = {k: v for k, v in self.answers.items() if k != question_id}
        return self.model_copy(update={"answers": answers})
