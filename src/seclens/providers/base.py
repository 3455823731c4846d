"""Backend invoker interface and shared HTTP plumbing."""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

import requests

from seclens.agents.contracts import AnalysisRequest, BackendResponse
from seclens.core.errors import BackendUnavailableError

logger = logging.getLogger(__name__)


class Invoker(Protocol):
    name: str

    async def invoke(self, request: AnalysisRequest) -> BackendResponse: ...


def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    headers: dict[str, str] | None = None,
    timeout_s: float = 60.0,
    max_retries: int = 0,
    retry_backoff_s: float = 1.0,
) -> dict[str, Any]:
    """POST a JSON body and return the decoded JSON object.

    Every transport, status or decoding failure ends in `BackendUnavailableError`
    once the retries are spent.
    """

    last_exc: Exception | None = None
    for attempt in range(max_retries + 1):
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=timeout_s)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            last_exc = exc
            logger.warning("backend request failed (attempt %d/%d): %s", attempt + 1, max_retries + 1, exc)
            if attempt < max_retries:
                time.sleep(retry_backoff_s * (attempt + 1))
            continue
        if not isinstance(data, dict):
            raise BackendUnavailableError("backend returned a non-object JSON body")
        return data
    raise BackendUnavailableError(str(last_exc) if last_exc else "backend request failed") from last_exc
