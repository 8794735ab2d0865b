"""Shared helpers: logging setup, time, ids and lenient number parsing."""
