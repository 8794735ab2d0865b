"""Pydantic models: questions, templates, assessments, rules and results."""
