"""
Questionnaire question model.

A ``Question`` is loaded from the questionnaire file and is immutable while it
sits in the active configuration. ``type`` is kept as a plain string so that
questionnaires authored with a newer widget type still load; the scorer gives
unknown types 0 rather than failing validation.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuestionOption(BaseModel):
    """One selectable answer for a select-type question.

    Attributes:
        value: Answer value stored in the answer set when chosen.
        label: Human-readable text; defaults to ``str(value)``.
        score: Points awarded when chosen (may be 0).
    """

    model_config = ConfigDict(frozen=True)

    value: Any
    label: str = ""
    score: float = 0.0

    @field_validator("score", mode="before")
    @classmethod
    def default_score(cls, v: Optional[float]) -> float:
        return v or 0.0


class Question(BaseModel):
    """A single questionnaire question.

    Attributes:
        id: Unique identifier, referenced by answer-set keys.
        text: Question prompt shown to the respondent.
        category: Scoring category; ``"general"`` when omitted.
        type: One of the ``QuestionType`` values (unknown strings tolerated).
        options: Option list for select questions. ``None`` = no options.
        scale: Top of the rating scale for ``rating-scale`` questions.
        min: Lower bound for ``number-input`` normalization.
        max: Upper bound for ``number-input`` normalization.
        weight: Positive multiplier applied to score and max score.
        required: Whether the question counts toward required completeness.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    text: str = ""
    category: str = "general"
    type: str
    options: Optional[list[QuestionOption]] = None
    scale: int = 5
    min: float = 0.0
    max: float = 100.0
    weight: float = 1.0
    required: bool = True
    help_text: Optional[str] = Field(default=None, alias="helpText")

    @field_validator("id")
    @classmethod
    def validate_id_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Question id must not be empty.")
        return v.strip()

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: Optional[str]) -> str:
        return v or "general"

    @field_validator("weight", mode="before")
    @classmethod
    def default_weight(cls, v: Any) -> Any:
        # A missing or zero weight falls back to 1.
        return v or 1.0

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"Question weight must be positive, got {v}.")
        return v

    @field_validator("scale", mode="before")
    @classmethod
    def default_scale(cls, v: Any) -> Any:
        return v or 5

    @field_validator("scale")
    @classmethod
    def validate_scale(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Rating scale must be >= 1, got {v}.")
        return v

    @field_validator("min", mode="before")
    @classmethod
    def default_min(cls, v: Optional[float]) -> float:
        return v or 0.0

    @field_validator("max", mode="before")
    @classmethod
    def default_max(cls, v: Optional[float]) -> float:
        # Zero is treated as unset.
        return v or 100.0

    def find_option(self, value: Any) -> Optional[QuestionOption]:
        """Return the first option whose value equals ``value``, or ``None``.

        ``True`` never matches ``1``: booleans only match booleans.
        """
        for option in self.options or []:
            if option.value == value and isinstance(option.value, bool) == isinstance(value, bool):
                return option
        return None
