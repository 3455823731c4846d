"""Ollama /api/generate adapter for local models."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any

from seclens.agents.contracts import AnalysisRequest, BackendResponse
from seclens.providers.base import post_json

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://127.0.0.1:11434"


def build_ollama_payload(request: AnalysisRequest, *, model: str, temperature: float = 0.0) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "model": model,
        "prompt": request.prompt,
        "stream": False,
        "options": {"temperature": temperature},
    }
    if request.image is not None:
        payload["images"] = [request.image.b64()]
    return payload


@dataclass
class OllamaInvoker:
    model: str
    api_base: str | None = None
    temperature: float = 0.0
    timeout_s: float = 120.0
    max_retries: int = 0
    retry_backoff_s: float = 1.0
    name: str = "ollama"

    def endpoint(self) -> str:
        base = (self.api_base or DEFAULT_API_BASE).rstrip("/")
        return f"{base}/api/generate"

    def invoke_sync(self, request: AnalysisRequest) -> BackendResponse:
        if request.enable_grounding:
            logger.debug("ollama has no web grounding; %s request runs without citations", request.kind.value)
        data = post_json(
            self.endpoint(),
            build_ollama_payload(request, model=self.model, temperature=self.temperature),
            timeout_s=self.timeout_s,
            max_retries=self.max_retries,
            retry_backoff_s=self.retry_backoff_s,
        )
        return BackendResponse(text=str(data.get("response") or ""))

    async def invoke(self, request: AnalysisRequest) -> BackendResponse:
        return await asyncio.to_thread(self.invoke_sync, request)
