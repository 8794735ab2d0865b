"""
Remote rule evaluator over HTTP.

POSTs ``{"answers": {...}, "assessment_id": "..."}`` to ``<base_url>/evaluate``
and returns the decoded JSON body, which must carry ``recommendations`` and
``actions`` lists.

Errors (connection failures, non-2xx responses, bad JSON) are raised; the
recommendation engine's rule integrator is the layer that absorbs them.

Usage::

    evaluator = HttpRuleEvaluator("https://rules.internal.example")
    engine = RecommendationEngine(provider, rule_evaluator=evaluator)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from governance_advisor.models.recommendation import RuleResults

logger = logging.getLogger(__name__)


class HttpRuleEvaluator:
    """Async ``RuleEvaluator`` backed by a rule service.

    Attributes:
        base_url: Service root, without the ``/evaluate`` suffix.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def evaluate(self, answers: Mapping[str, Any], assessment_id: str) -> RuleResults:
        """Call the remote service.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response.
            pydantic.ValidationError: If the body is not a rule-results object.
        """
        payload = {"answers": dict(answers), "assessment_id": assessment_id}
        url = f"{self.base_url}/evaluate"

        if self._client is not None:
            resp = await self._client.post(url, json=payload, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload)

        resp.raise_for_status()
        logger.debug("Rule service responded %d | assessment_id=%s", resp.status_code, assessment_id)
        return RuleResults.model_validate(resp.json())
