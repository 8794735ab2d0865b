"""
Content-addressed recommendation cache.

Key
---
``fingerprint(assessment_id, answers, config_version)`` is the SHA-256 of a
canonical JSON encoding (sorted keys, compact separators) of the three
inputs. Answer dict ordering therefore never changes the key, while any
change to an answer value or to the configuration version does.

Lifecycle
---------
Entries are created once per fingerprint and replaced whole by a later
``put``. The cache keeps its own deep copy of each result and hands out
deep copies, so callers editing nested sections never reach a stored entry.
Any scoring-weight change clears the whole cache.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Mapping, Optional

from governance_advisor.models.recommendation import RecommendationResult

logger = logging.getLogger(__name__)


def fingerprint(
    assessment_id:  str,
    answers:        Mapping[str, Any],
    config_version: str,
) -> str:
    """Deterministic cache key for (assessment id, answers, config version)."""
    payload = json.dumps(
        {"assessment_id": assessment_id, "answers": answers, "config_version": config_version},
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class RecommendationCache:
    """In-memory fingerprint -> ``RecommendationResult`` store.

    Attributes:
        hits:   Number of ``get`` calls that found an entry.
        misses: Number of ``get`` calls that did not.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RecommendationResult] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[RecommendationResult]:
        result = self._entries.get(key)
        if result is None:
            self.misses += 1
            logger.debug("Cache miss | key=%s", key[:12])
            return None
        self.hits += 1
        logger.debug("Cache hit | key=%s", key[:12])
        return result.model_copy(deep=True)

    def put(self, key: str, result: RecommendationResult) -> None:
        # Re-insert so iteration order tracks write order.
        self._entries.pop(key, None)
        self._entries[key] = result.model_copy(deep=True)

    def clear(self) -> None:
        self._entries.clear()

    def clear_on_weight_change(self) -> None:
        """Weights feed every score, so no entry survives a weight change."""
        if self._entries:
            logger.info("Scoring weights changed; dropping %d cached results", len(self._entries))
        self.clear()

    def find_by_assessment(self, assessment_id: str) -> Optional[RecommendationResult]:
        """Most recently stored result for ``assessment_id``, if any."""
        for result in reversed(list(self._entries.values())):
            if result.assessment_id == assessment_id:
                return result.model_copy(deep=True)
        return None

    def find_by_id(self, recommendation_id: str) -> Optional[RecommendationResult]:
        for result in self._entries.values():
            if result.id == recommendation_id:
                return result.model_copy(deep=True)
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
