"""
Governance taxonomy: question types, maturity tiers, and recommendation sections.

  - ``QuestionType``    — the answer shape a question expects.
  - ``GovernanceLevel`` — coarse maturity tier derived from the total score.
  - ``Section``         — well-known recommendation document sections.

Usage example::

    from governance_advisor.taxonomy.governance_taxonomy import GovernanceLevel

    level = GovernanceLevel.DEVELOPING

This module has NO imports from any other ``governance_advisor`` package.
"""

from enum import StrEnum


class QuestionType(StrEnum):
    """Input widget / answer shape for a questionnaire question."""

    SINGLE_SELECT = "single-select"
    """One value chosen from ``options``; scores the chosen option."""

    MULTI_SELECT = "multi-select"
    """A list of values from ``options``; scores the sum of chosen options."""

    RATING_SCALE = "rating-scale"
    """Integer 1..scale, normalized to 0–10."""

    NUMBER_INPUT = "number-input"
    """Free number, clamped into [min, max] and normalized to 0–10."""

    TEXT_INPUT = "text-input"
    """Free text, scored by trimmed length bucket."""


class GovernanceLevel(StrEnum):
    """Maturity tier, ordered lowest to highest."""

    BASIC = "basic"
    DEVELOPING = "developing"
    MEDIUM = "medium"
    HIGH = "high"


# Lower bound (inclusive, percent of a fixed 100-point basis) for each tier,
# checked top to bottom.
LEVEL_THRESHOLDS: tuple[tuple[float, GovernanceLevel], ...] = (
    (80.0, GovernanceLevel.HIGH),
    (60.0, GovernanceLevel.MEDIUM),
    (40.0, GovernanceLevel.DEVELOPING),
)


class Section(StrEnum):
    """Recommendation sections with contextual rules attached."""

    PLACEMENT = "placement"
    CONTROLS = "controls"
    SHARING = "sharing"
    COMPLIANCE = "compliance"
    RULES = "rules"
    """Holds messages contributed by the rule evaluator."""


PRIORITY_MARKER = "PRIORITY"
