"""
Recommendation pipeline: turns a scored assessment into a prioritized
recommendation document.

Modules
-------
signals    : accessors for the answers that drive selection and insights.
selector   : TemplateRule table + select_template() — first match wins.
composer   : compose() + build_summary() + contextual_recommendations().
integrator : RuleEvaluator protocol + apply_rules() — failures absorbed.
merger     : merge_recommendations() + prioritize_recommendations().
cache      : fingerprint() + RecommendationCache.
reporter   : write_recommendation_json() + format_recommendation_report().
"""
