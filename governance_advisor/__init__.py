"""
Governance Advisor: data-governance maturity scoring and recommendations.

Entry points::

    from governance_advisor.config import load_config
    from governance_advisor.engine import RecommendationEngine

    engine = RecommendationEngine.from_config(load_config())
"""

__version__ = "1.0.0"
