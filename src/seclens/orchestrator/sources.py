"""Map backend citation metadata onto grounding sources."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from seclens.agents.contracts import RawCitation
from seclens.domain.results import GroundingSource
from seclens.tools.validation import InputValidation


def source_domain(subject: InputValidation | None) -> str:
    if subject is None:
        return "the analyzed domain"
    return subject.domain or subject.value or "the analyzed domain"


def _citation_fields(item: Any) -> tuple[Any, Any] | None:
    if isinstance(item, RawCitation):
        return item.uri, item.title
    if isinstance(item, Mapping):
        web = item.get("web")
        holder = web if isinstance(web, Mapping) else item
        return holder.get("uri"), holder.get("title")
    return None


def map_citations(citations: Iterable[Any] | None, domain: str) -> list[GroundingSource]:
    """Entries without a URI are dropped; a missing title names the analysed domain."""

    sources: list[GroundingSource] = []
    for item in citations or ():
        fields = _citation_fields(item)
        if fields is None:
            continue
        uri, title = fields
        uri = uri.strip() if isinstance(uri, str) else ""
        if not uri:
            continue
        title = title.strip() if isinstance(title, str) else ""
        sources.append(GroundingSource(uri=uri, title=title or f"Source from {domain}"))
    return sources
