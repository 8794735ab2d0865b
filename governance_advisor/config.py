"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``GOVERNANCE_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine, the CLI and the rule evaluators all receive an ``AppConfig``
instance — never raw dicts or individual env var lookups.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────

DEFAULT_CATEGORY_WEIGHTS: dict[str, float] = {
    "dataClassification": 0.25,
    "governanceMaturity": 0.30,
    "compliance":         0.20,
    "accessControl":      0.15,
    "organizationSize":   0.10,
}


class DataConfig(BaseModel):
    """Filesystem paths for questionnaire content."""

    model_config = ConfigDict(frozen=True)

    questionnaire_file: str = "config/questionnaire.json"


class ScoringConfig(BaseModel):
    """Category weight table used when aggregating category scores."""

    model_config = ConfigDict(frozen=True)

    weights: dict[str, float] = dict(DEFAULT_CATEGORY_WEIGHTS)
    default_category_weight: float = 0.1

    @field_validator("weights")
    @classmethod
    def validate_weights(cls, v: dict[str, float]) -> dict[str, float]:
        for category, weight in v.items():
            if weight < 0:
                raise ValueError(
                    f"Category weight for '{category}' must be >= 0, got {weight}."
                )
        return v

    @field_validator("default_category_weight")
    @classmethod
    def validate_default_weight(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"default_category_weight must be >= 0, got {v}.")
        return v


class EngineConfig(BaseModel):
    """Recommendation engine behaviour."""

    model_config = ConfigDict(frozen=True)

    organization_name: str = "Your organization"
    rule_timeout_seconds: float = 5.0    # 0 disables the timeout
    rules_endpoint: Optional[str] = None  # remote rule service; None = in-process

    @field_validator("rule_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"rule_timeout_seconds must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    scoring: ScoringConfig = ScoringConfig()
    engine: EngineConfig = EngineConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply GOVERNANCE_ADVISOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw, base_dir=config_path.parent.parent)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply GOVERNANCE_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      GOVERNANCE_ADVISOR_QUESTIONNAIRE   → raw["data"]["questionnaire_file"]
      GOVERNANCE_ADVISOR_RULES_ENDPOINT  → raw["engine"]["rules_endpoint"]
      GOVERNANCE_ADVISOR_LOG_LEVEL       → raw["logging"]["level"]
      GOVERNANCE_ADVISOR_DEBUG           → raw["debug"]
    """
    if questionnaire := os.environ.get("GOVERNANCE_ADVISOR_QUESTIONNAIRE"):
        raw.setdefault("data", {})["questionnaire_file"] = questionnaire

    if endpoint := os.environ.get("GOVERNANCE_ADVISOR_RULES_ENDPOINT"):
        raw.setdefault("engine", {})["rules_endpoint"] = endpoint

    if log_level := os.environ.get("GOVERNANCE_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("GOVERNANCE_ADVISOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any], base_dir: Optional[Path] = None) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure.

    A relative ``questionnaire_file`` is resolved against ``base_dir`` (the
    directory holding ``config/``) so the CLI works from any cwd.
    """
    project = raw.pop("project", {})

    data_raw = dict(raw.get("data", {}))
    questionnaire = data_raw.get("questionnaire_file")
    if questionnaire and base_dir is not None and not Path(questionnaire).is_absolute():
        candidate = base_dir / questionnaire
        if candidate.exists():
            data_raw["questionnaire_file"] = str(candidate)

    # Categories left out of [scoring.weights] keep their default weight.
    scoring_raw = dict(raw.get("scoring", {}))
    if "weights" in scoring_raw:
        scoring_raw["weights"] = {**DEFAULT_CATEGORY_WEIGHTS, **scoring_raw["weights"]}

    return AppConfig(
        data=DataConfig(**data_raw),
        scoring=ScoringConfig(**scoring_raw),
        engine=EngineConfig(**raw.get("engine", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
