"""
Recommendation template model.

Templates are read-only to the engine. ``sections`` maps a section name
(``placement``, ``controls``, ...) to the base recommendations for that
section; a template without sections yields a document with no sections.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TemplateRecommendation(BaseModel):
    """Headline block of a template.

    ``summary`` may contain ``{organization}``, ``{level}``, ``{score}`` and
    ``{percentage}`` placeholders.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    summary: Optional[str] = None
    governance_level: Optional[str] = Field(default=None, alias="governanceLevel")
    confidence_score: Optional[float] = Field(default=None, alias="confidenceScore")


class Template(BaseModel):
    """A named bundle of base recommendation text per section."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: str = "basic"
    version: str = "1.0.0"
    tags: list[str] = []
    recommendation: Optional[TemplateRecommendation] = None
    sections: Optional[dict[str, list[str]]] = None

    @property
    def summary(self) -> Optional[str]:
        return self.recommendation.summary if self.recommendation else None


DEFAULT_TEMPLATE = Template(
    id="default_template",
    name="Default Governance Template",
    description="Basic governance recommendations",
    recommendation=TemplateRecommendation(
        title="Data Governance Recommendations",
        summary="Based on your assessment, here are our recommendations.",
        governance_level="basic",
    ),
    sections={
        "placement": [
            "Implement centralized data storage with appropriate security controls",
            "Establish clear data classification and handling procedures",
        ],
        "controls": [
            "Deploy role-based access controls for sensitive data",
            "Implement regular access reviews and audit procedures",
        ],
        "sharing": [
            "Create data sharing agreements and approval processes",
            "Establish secure channels for external data collaboration",
        ],
        "compliance": [
            "Document data handling procedures and retention policies",
            "Conduct regular compliance assessments and reviews",
        ],
    },
)
