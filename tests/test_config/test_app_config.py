"""
Tests for governance_advisor/config.py.

What we test
------------
load_config():
  - The committed config/default.toml loads and validates.
  - A relative questionnaire path resolves against the project directory.
  - Partial ``[scoring.weights]`` tables keep defaults for other categories.
  - ``local.toml`` beside the config file overrides it.
  - ``GOVERNANCE_ADVISOR_*`` environment variables override both.
  - Missing file → FileNotFoundError; bad values → ValidationError.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from governance_advisor.config import DEFAULT_CATEGORY_WEIGHTS, AppConfig, load_config

_ENV_VARS = (
    "GOVERNANCE_ADVISOR_QUESTIONNAIRE",
    "GOVERNANCE_ADVISOR_RULES_ENDPOINT",
    "GOVERNANCE_ADVISOR_LOG_LEVEL",
    "GOVERNANCE_ADVISOR_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write_config(tmp_path: Path, body: str, local: str | None = None) -> Path:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    path = config_dir / "app.toml"
    path.write_text(body, encoding="utf-8")
    if local is not None:
        (config_dir / "local.toml").write_text(local, encoding="utf-8")
    return path


class TestDefaultConfig:
    def test_committed_default_loads(self):
        config = load_config()
        assert isinstance(config, AppConfig)
        assert config.scoring.weights == DEFAULT_CATEGORY_WEIGHTS
        assert config.scoring.default_category_weight == 0.1
        assert config.engine.rule_timeout_seconds == 5.0
        assert config.engine.rules_endpoint is None
        assert Path(config.data.questionnaire_file).exists()

    def test_model_defaults(self):
        config = AppConfig()
        assert config.engine.organization_name == "Your organization"
        assert config.logging.level == "INFO"


class TestLoadConfig:
    def test_relative_questionnaire_resolved(self, tmp_path):
        (tmp_path / "q.json").write_text("{}", encoding="utf-8")
        path = _write_config(tmp_path, '[data]\nquestionnaire_file = "q.json"\n')
        config = load_config(path)
        assert config.data.questionnaire_file == str(tmp_path / "q.json")

    def test_partial_weights_keep_defaults(self, tmp_path):
        path = _write_config(tmp_path, "[scoring.weights]\ncompliance = 0.5\n")
        weights = load_config(path).scoring.weights
        assert weights["compliance"] == 0.5
        assert weights["governanceMaturity"] == 0.30

    def test_local_override(self, tmp_path):
        path = _write_config(
            tmp_path,
            '[engine]\norganization_name = "Base"\nrule_timeout_seconds = 2.0\n',
            local='[engine]\norganization_name = "Local"\n',
        )
        config = load_config(path)
        assert config.engine.organization_name == "Local"
        assert config.engine.rule_timeout_seconds == 2.0

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = _write_config(tmp_path, '[logging]\nlevel = "INFO"\n')
        monkeypatch.setenv("GOVERNANCE_ADVISOR_LOG_LEVEL", "debug")
        monkeypatch.setenv("GOVERNANCE_ADVISOR_RULES_ENDPOINT", "http://rules.test")
        monkeypatch.setenv("GOVERNANCE_ADVISOR_QUESTIONNAIRE", "/srv/q.json")
        monkeypatch.setenv("GOVERNANCE_ADVISOR_DEBUG", "true")

        config = load_config(path)
        assert config.logging.level == "DEBUG"
        assert config.engine.rules_endpoint == "http://rules.test"
        assert config.data.questionnaire_file == "/srv/q.json"
        assert config.debug is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_negative_weight_rejected(self, tmp_path):
        path = _write_config(tmp_path, "[scoring.weights]\ncompliance = -0.2\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_negative_timeout_rejected(self, tmp_path):
        path = _write_config(tmp_path, "[engine]\nrule_timeout_seconds = -1\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_bad_log_level_rejected(self, tmp_path):
        path = _write_config(tmp_path, '[logging]\nlevel = "LOUD"\n')
        with pytest.raises(ValidationError):
            load_config(path)
