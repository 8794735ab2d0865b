"""
Governance Advisor — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the answers file.
  4. Run the engine (score, recommend, preview).
  5. Report result to stdout.

Answers files are JSON, either a bare ``{"question-1": ...}`` mapping or an
assessment object ``{"id": ..., "answers": {...}, "organization": ...}``.
Without an ``id`` the file stem is used as the assessment id.

Install and run::

    pip install -e .
    governance-advisor --help
    governance-advisor validate-config
    governance-advisor score answers.json
    governance-advisor recommend answers.json --output out/acme.json
    governance-advisor preview partial.json
    governance-advisor list-templates
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="governance-advisor",
    help="Data-governance maturity scoring and recommendation CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from governance_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from governance_advisor.utils.logging import configure_logging
    configure_logging(config.logging)


def _build_engine_or_exit(config):
    """Build the engine; a missing or invalid questionnaire exits with code 1."""
    from governance_advisor.engine import RecommendationEngine

    try:
        return RecommendationEngine.from_config(config)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Questionnaire validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _load_assessment_or_exit(answers_file: str):
    """Read an answers file into an ``Assessment``."""
    from pydantic import ValidationError

    from governance_advisor.models.assessment import Assessment

    path = Path(answers_file)
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        typer.echo(f"[ERROR] Could not read answers file: {exc}", err=True)
        raise typer.Exit(code=1)

    if not isinstance(raw, dict):
        typer.echo("[ERROR] Answers file must contain a JSON object.", err=True)
        raise typer.Exit(code=1)

    if isinstance(raw.get("answers"), dict):
        data = {
            "id": raw.get("id") or path.stem,
            "answers": raw["answers"],
            "organization": raw.get("organization"),
        }
    else:
        data = {"id": path.stem, "answers": raw}

    try:
        return Assessment(**data)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid assessment: {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration and questionnaire and print parsed values.

    Exits with code 1 if either fails validation.
    """
    config = _load_config_or_exit(config_path)
    engine = _build_engine_or_exit(config)
    provider = engine.provider

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Questionnaire:    {config.data.questionnaire_file}")
    typer.echo(f"  Questions:        {len(provider.questions)}")
    typer.echo(f"  Templates:        {len(provider.templates)}")
    typer.echo(f"  Rules:            {len(provider.rules)}")
    typer.echo(f"  Rule evaluator:   {config.engine.rules_endpoint or 'in-process'}")
    typer.echo(f"  Config version:   {provider.config_version}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("score")
def score(
    answers_file: str = typer.Argument(..., help="Path to the answers JSON file."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the score result as JSON.",
    ),
) -> None:
    """Score an answer set and print the total, level and category breakdown."""
    from governance_advisor.scoring.scorer import (
        compute_score,
        determine_governance_level,
        score_percentage,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)
    assessment = _load_assessment_or_exit(answers_file)

    provider = engine.provider
    result = compute_score(
        provider.questions,
        assessment.answers,
        provider.scoring_weights,
        provider.default_category_weight,
    )
    level = determine_governance_level(result.total_score)
    percentage = score_percentage(result)

    if as_json:
        payload = result.model_dump(mode="json")
        payload["percentage"] = percentage
        payload["level"] = str(level)
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Assessment: {assessment.id}")
    typer.echo(f"  Score: {result.total_score}/{result.max_score} ({percentage}%)")
    typer.echo(f"  Level: {level}")
    for category, cat in result.breakdown.items():
        typer.echo(
            f"  {category:<22} {cat.score:>5.1f} / {cat.max_score:<5.1f} {cat.percentage:>4d}%"
        )


@app.command("recommend")
def recommend(
    answers_file: str = typer.Argument(..., help="Path to the answers JSON file."),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the full result as JSON to this path.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON instead of a text report.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Generate prioritized recommendations for an answer set."""
    from governance_advisor.engine import RecommendationGenerationError
    from governance_advisor.recommendations.reporter import (
        format_recommendation_report,
        write_recommendation_json,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)
    assessment = _load_assessment_or_exit(answers_file)

    try:
        result = asyncio.run(engine.generate_recommendations(assessment))
    except RecommendationGenerationError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        typer.echo(format_recommendation_report(result))

    if output:
        path = write_recommendation_json(result, Path(output))
        typer.echo(f"[OK] Written: {path}", err=as_json)


@app.command("preview")
def preview(
    answers_file: str = typer.Argument(..., help="Path to a (partial) answers JSON file."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Estimate score and level for an unfinished questionnaire."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)
    assessment = _load_assessment_or_exit(answers_file)

    result = engine.generate_preview(assessment.answers)
    completeness = result["completeness"]

    typer.echo(f"Preview: {assessment.id}")
    typer.echo(f"  Estimated score: {result['estimated_score']}")
    typer.echo(f"  Estimated level: {result['estimated_level']}")
    typer.echo(
        f"  Completeness:    {completeness['total']:.0f}% answered, "
        f"{completeness['required']:.0f}% of required"
    )


@app.command("list-templates")
def list_templates(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """List the recommendation templates in the configured questionnaire."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)

    templates = engine.provider.templates
    if not templates:
        typer.echo("No templates configured; the built-in default template will be used.")
        return

    for template in templates:
        sections = ", ".join(template.sections or {}) or "-"
        typer.echo(f"  {template.id:<34} {template.name}  [{sections}]")
    typer.echo(f"[OK] {len(templates)} template(s).")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
