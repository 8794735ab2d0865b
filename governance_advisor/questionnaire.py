"""
Questionnaire content and the configuration provider the engine reads from.

Questionnaire file (JSON)
-------------------------
    {
      "questions": [ {"id": "question-1", "type": "single-select", ...}, ... ],
      "templates": [ {"id": "basic_governance_template", "sections": {...}}, ... ],
      "rules":     [ {"id": "open-access", "conditions": {...}, "actions": [...]} ]
    }

Validation rules
----------------
- Duplicate question ids are rejected.
- Duplicate template ids are rejected.

Configuration version
---------------------
``ConfigurationProvider.config_version`` is a short SHA-256 of the questions,
templates, rules and scoring weights. Any edit made through the provider
changes it, which in turn changes every cache fingerprint.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, model_validator

from governance_advisor.config import DEFAULT_CATEGORY_WEIGHTS, AppConfig
from governance_advisor.models.question import Question
from governance_advisor.models.rule import Rule
from governance_advisor.models.template import Template

logger = logging.getLogger(__name__)


class Questionnaire(BaseModel):
    """Questions, templates and rules loaded from one file."""

    model_config = ConfigDict(frozen=True)

    questions: list[Question] = []
    templates: list[Template] = []
    rules: list[Rule] = []

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "Questionnaire":
        for label, ids in (
            ("question", [q.id for q in self.questions]),
            ("template", [t.id for t in self.templates]),
        ):
            seen: set[str] = set()
            for item_id in ids:
                if item_id in seen:
                    raise ValueError(f"Duplicate {label} id: '{item_id}'.")
                seen.add(item_id)
        return self


def load_questionnaire(path: Path) -> Questionnaire:
    """Load and validate a questionnaire JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        pydantic.ValidationError: If any question, template or rule is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Questionnaire file not found: {path}\n"
            "Set [data] questionnaire_file in config/default.toml to override."
        )
    with path.open(encoding="utf-8") as f:
        raw: dict[str, Any] = json.load(f)

    questionnaire = Questionnaire.model_validate(raw)
    logger.info(
        "Loaded questionnaire | questions=%d templates=%d rules=%d | path=%s",
        len(questionnaire.questions), len(questionnaire.templates),
        len(questionnaire.rules), path,
    )
    return questionnaire


class ConfigurationProvider:
    """Live questionnaire configuration plus the category weight table.

    Attributes:
        default_category_weight: Weight for categories missing from the table.
    """

    def __init__(
        self,
        questionnaire: Optional[Questionnaire] = None,
        scoring_weights: Optional[Mapping[str, float]] = None,
        default_category_weight: float = 0.1,
        source_path: Optional[Path] = None,
    ) -> None:
        self._questionnaire = questionnaire or Questionnaire()
        self._weights: dict[str, float] = dict(
            DEFAULT_CATEGORY_WEIGHTS if scoring_weights is None else scoring_weights
        )
        self.default_category_weight = default_category_weight
        self.source_path = source_path
        self._version: Optional[str] = None

    @classmethod
    def from_config(cls, config: AppConfig) -> "ConfigurationProvider":
        path = Path(config.data.questionnaire_file)
        return cls(
            questionnaire=load_questionnaire(path),
            scoring_weights=config.scoring.weights,
            default_category_weight=config.scoring.default_category_weight,
            source_path=path,
        )

    # ── Read side ─────────────────────────────────────────────────────────────

    @property
    def questions(self) -> list[Question]:
        return list(self._questionnaire.questions)

    @property
    def templates(self) -> list[Template]:
        return list(self._questionnaire.templates)

    @property
    def rules(self) -> list[Rule]:
        return list(self._questionnaire.rules)

    @property
    def scoring_weights(self) -> dict[str, float]:
        return dict(self._weights)

    @property
    def config_version(self) -> str:
        if self._version is None:
            self._version = self._compute_version()
        return self._version

    # ── Edits ─────────────────────────────────────────────────────────────────

    def update_scoring_weights(self, partial: Mapping[str, float]) -> dict[str, float]:
        """Merge ``partial`` into the weight table; returns the new table."""
        for category, weight in partial.items():
            if weight < 0:
                raise ValueError(f"Category weight for '{category}' must be >= 0, got {weight}.")
        self._weights.update(partial)
        self._version = None
        return self.scoring_weights

    def set_questions(self, questions: Sequence[Question]) -> None:
        self._replace(questions=list(questions))

    def set_templates(self, templates: Sequence[Template]) -> None:
        self._replace(templates=list(templates))

    def set_rules(self, rules: Sequence[Rule]) -> None:
        self._replace(rules=list(rules))

    def reload(self) -> None:
        """Re-read the questionnaire file this provider was built from."""
        if self.source_path is None:
            return
        self._questionnaire = load_questionnaire(self.source_path)
        self._version = None

    def _replace(self, **changes: Any) -> None:
        data = {
            "questions": self._questionnaire.questions,
            "templates": self._questionnaire.templates,
            "rules": self._questionnaire.rules,
            **changes,
        }
        self._questionnaire = Questionnaire(**data)
        self._version = None

    def _compute_version(self) -> str:
        payload = json.dumps(
            {
                "questionnaire": self._questionnaire.model_dump(mode="json"),
                "weights": self._weights,
                "default_weight": self.default_category_weight,
            },
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]
