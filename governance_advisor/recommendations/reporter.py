"""
Recommendation report output: a structured JSON file and a plain-text report
for the terminal.

Both functions consume an in-memory ``RecommendationResult``; neither calls
back into the engine.

Text layout::

    Data Governance Recommendations
    ===============================
    Assessment : acme-2026-q3
    Score      : 42/60 (70%)   Level: medium
    Template   : Advanced Governance Template

    Acme demonstrates medium data governance maturity ...

    [controls]
      1. PRIORITY: Implement immediate access controls ...
      2. Deploy role-based access controls for sensitive data

    Category breakdown
      governanceMaturity     7.0 / 10.0   70%   w=0.30
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from governance_advisor.models.recommendation import RecommendationResult

logger = logging.getLogger(__name__)


def write_recommendation_json(result: RecommendationResult, output_path: Path) -> Path:
    """Write ``result`` as indented JSON; parent directories are created.

    Returns:
        Path to the written JSON file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as f:
        json.dump(result.model_dump(mode="json"), f, indent=2)

    logger.info("Recommendation JSON written: %s", output_path)
    return output_path


def format_recommendation_report(result: RecommendationResult) -> str:
    """Render ``result`` as a multi-line report suitable for ``typer.echo()``."""
    title = "Data Governance Recommendations"
    if result.template.recommendation and result.template.recommendation.title:
        title = result.template.recommendation.title

    lines = [
        title,
        "=" * len(title),
        f"Assessment : {result.assessment_id}",
        f"Score      : {result.score}/{result.max_score} ({result.percentage}%)"
        f"   Level: {result.level}",
        f"Template   : {result.template.name}",
        "",
        result.recommendations.summary,
    ]

    for section, items in result.recommendations.sections.items():
        if not items:
            continue
        lines.append("")
        lines.append(f"[{section}]")
        for i, item in enumerate(items, start=1):
            lines.append(f"  {i}. {item}")

    if result.score_breakdown:
        lines.append("")
        lines.append("Category breakdown")
        for category, cat in result.score_breakdown.items():
            lines.append(
                f"  {category:<22} {cat.score:>5.1f} / {cat.max_score:<5.1f} "
                f"{cat.percentage:>4d}%   w={cat.weight:.2f}"
            )

    return "\n".join(lines)
