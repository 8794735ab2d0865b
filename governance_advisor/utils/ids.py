"""Identifier helpers."""

from __future__ import annotations

import secrets
import string

from governance_advisor.utils.time_utils import epoch_millis

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str) -> str:
    """``<prefix>-<epoch ms>-<9 random base36 chars>``, e.g. ``rec-1761000000000-k3j9x0a1b``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}-{epoch_millis()}-{suffix}"
