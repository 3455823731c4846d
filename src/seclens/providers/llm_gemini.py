"""Gemini generateContent adapter (REST over requests)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any

from seclens.agents.contracts import AnalysisRequest, BackendResponse, RawCitation
from seclens.core.errors import BackendUnavailableError
from seclens.providers.base import post_json

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


def build_gemini_payload(request: AnalysisRequest, *, temperature: float = 0.0) -> dict[str, Any]:
    parts: list[dict[str, Any]] = []
    if request.image is not None:
        parts.append({"inline_data": {"mime_type": request.image.mime_type, "data": request.image.b64()}})
    parts.append({"text": request.prompt})
    payload: dict[str, Any] = {
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {"temperature": temperature},
    }
    if request.enable_grounding:
        payload["tools"] = [{"google_search": {}}]
    return payload


def parse_gemini_response(data: dict[str, Any]) -> BackendResponse:
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        feedback = data.get("promptFeedback")
        logger.warning("gemini returned no candidates: %s", feedback)
        return BackendResponse(text="")

    first = candidates[0]
    content = first.get("content") if isinstance(first.get("content"), dict) else {}
    parts = content.get("parts") if isinstance(content.get("parts"), list) else []
    text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))

    metadata = first.get("groundingMetadata") if isinstance(first.get("groundingMetadata"), dict) else {}
    chunks = metadata.get("groundingChunks") if isinstance(metadata.get("groundingChunks"), list) else []
    citations = []
    for chunk in chunks:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if not isinstance(web, dict):
            continue
        uri = web.get("uri")
        title = web.get("title")
        citations.append(
            RawCitation(
                uri=uri if isinstance(uri, str) else None,
                title=title if isinstance(title, str) else None,
            )
        )
    return BackendResponse(text=text, citations=citations)


@dataclass
class GeminiInvoker:
    model: str
    api_key: str | None = None
    api_base: str | None = None
    temperature: float = 0.0
    timeout_s: float = 60.0
    max_retries: int = 0
    retry_backoff_s: float = 1.0
    name: str = "gemini"

    def endpoint(self) -> str:
        base = (self.api_base or DEFAULT_API_BASE).rstrip("/")
        return f"{base}/models/{self.model}:generateContent"

    def invoke_sync(self, request: AnalysisRequest) -> BackendResponse:
        if not self.api_key:
            raise BackendUnavailableError("Gemini API key is not configured")
        data = post_json(
            self.endpoint(),
            build_gemini_payload(request, temperature=self.temperature),
            headers={"x-goog-api-key": self.api_key},
            timeout_s=self.timeout_s,
            max_retries=self.max_retries,
            retry_backoff_s=self.retry_backoff_s,
        )
        return parse_gemini_response(data)

    async def invoke(self, request: AnalysisRequest) -> BackendResponse:
        return await asyncio.to_thread(self.invoke_sync, request)
