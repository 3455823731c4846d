"""Turn raw backend text into a fully populated, typed result.

`normalize` is total: whatever the backend returned, the caller gets a result
of the requested kind. Unparseable or unexpected payloads produce a fallback
result whose summary quotes the raw text so an operator can inspect it.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
import logging
import re
from typing import Any

from seclens.domain.results import AnalysisResult, GroundingSource
from seclens.domain.verdicts import AnalysisKind
from seclens.orchestrator.coercion import OMIT, text
from seclens.orchestrator.descriptors import MISSING_SUMMARY, KindDescriptor, descriptor_for
from seclens.orchestrator.sources import map_citations, source_domain
from seclens.tools.validation import InputValidation

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^```[A-Za-z0-9_+.-]*[ \t]*(?:\r?\n)?")
_FENCE_CLOSE_RE = re.compile(r"(?:\r?\n)?[ \t]*```$")


def strip_code_fences(raw: str) -> str:
    """Remove a leading ```lang marker and a trailing ``` marker, then trim."""

    cleaned = (raw or "").strip()
    cleaned = _FENCE_OPEN_RE.sub("", cleaned, count=1)
    cleaned = _FENCE_CLOSE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_payload(raw: str) -> dict[str, Any] | None:
    try:
        value = json.loads(raw)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def _grounding_sources(
    descriptor: KindDescriptor,
    citations: Iterable[Any] | None,
    subject: InputValidation | None,
) -> list[GroundingSource]:
    if not descriptor.grounded:
        return []
    try:
        return map_citations(citations, source_domain(subject))
    except Exception:
        logger.warning("discarding malformed citation metadata", exc_info=True)
        return []


def _build(
    descriptor: KindDescriptor,
    payload: dict[str, Any],
    subject: InputValidation | None,
    sources: list[GroundingSource],
) -> AnalysisResult:
    clean: dict[str, Any] = {
        descriptor.verdict_field: descriptor.coerce_verdict(payload.get(descriptor.verdict_field)),
        descriptor.summary_field: text(payload.get(descriptor.summary_field), MISSING_SUMMARY),
    }
    for rule in descriptor.fields:
        value = rule.coerce(payload.get(rule.name))
        if value is not OMIT:
            clean[rule.name] = value
    if descriptor.finalize is not None:
        clean = descriptor.finalize(clean, subject)
    if descriptor.grounded:
        clean["sources"] = sources
    return descriptor.model.model_validate(clean)


def fallback_result(
    descriptor: KindDescriptor,
    raw: str,
    sources: list[GroundingSource] | None = None,
) -> AnalysisResult:
    payload: dict[str, Any] = {
        descriptor.verdict_field: descriptor.fallback,
        descriptor.summary_field: descriptor.failure_summary.format(raw=raw),
    }
    payload.update({key: dict(value) for key, value in descriptor.failure_fields.items()})
    if descriptor.grounded:
        payload["sources"] = list(sources or [])
    return descriptor.model.model_validate(payload)


def normalize(
    raw_text: str,
    kind: AnalysisKind | str,
    *,
    citations: Iterable[Any] | None = (),
    subject: InputValidation | None = None,
) -> AnalysisResult:
    descriptor = descriptor_for(kind)
    raw = raw_text if isinstance(raw_text, str) else ("" if raw_text is None else str(raw_text))
    sources = _grounding_sources(descriptor, citations, subject)

    payload = parse_payload(strip_code_fences(raw))
    if payload is None:
        logger.warning("unparseable %s response, using fallback result: %r", descriptor.kind.value, raw[:500])
        return fallback_result(descriptor, raw, sources)

    try:
        return _build(descriptor, payload, subject, sources)
    except Exception:
        logger.warning("could not normalize %s response, using fallback result", descriptor.kind.value, exc_info=True)
        return fallback_result(descriptor, raw, sources)
