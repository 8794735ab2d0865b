"""Governance taxonomy enums and constants."""
