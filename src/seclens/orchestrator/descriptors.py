"""Per-kind normalization tables.

Adding a field to a result kind means adding a `FieldRule` here; the
normalization algorithm itself stays the same for every kind.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from seclens.domain.results import (
    AnalysisResult,
    DomainAnalysisResult,
    RawEmailAnalysisResult,
    ScreenshotAnalysisResult,
    SecretAnalysisResult,
    TokenAnalysisResult,
    URLAnalysisResult,
)
from seclens.domain.verdicts import (
    AnalysisKind,
    AttachmentRisk,
    LegitimacyStatus,
    LinkVerdict,
    RawEmailVerdict,
    ScreenshotVerdict,
    SecretRisk,
    SecretVerdict,
    TokenVerdict,
    URLVerdict,
)
from seclens.orchestrator.coercion import (
    Coercer,
    enum_member,
    optional_record,
    optional_text,
    positive_int,
    record_list,
    required_record,
    sorted_string_list,
    string_list,
    text,
)
from seclens.tools.validation import InputValidation

MISSING_SUMMARY = "No summary was provided by the analysis backend."
PARSE_FAILURE = (
    "An error occurred while parsing the analysis. The AI model may have provided a response "
    "in an unexpected format. Raw output: {raw}"
)

HEADER_DEFAULTS = {
    "from": "N/A",
    "subject": "N/A",
    "dkim": "N/A",
    "spf": "N/A",
    "dmarc": "N/A",
    "summary": "Header analysis was not provided.",
}
HEADER_FAILURE = {**HEADER_DEFAULTS, "summary": "Failed to parse headers."}


@dataclass(frozen=True)
class FieldRule:
    name: str
    coerce: Coercer


Finalizer = Callable[[dict[str, Any], InputValidation | None], dict[str, Any]]


@dataclass(frozen=True)
class KindDescriptor:
    kind: AnalysisKind
    model: type[AnalysisResult]
    verdicts: type[Enum]
    fallback: Enum
    verdict_field: str = "overallVerdict"
    summary_field: str = "analysisSummary"
    fields: tuple[FieldRule, ...] = ()
    failure_summary: str = PARSE_FAILURE
    failure_fields: Mapping[str, Any] = field(default_factory=dict)
    grounded: bool = False
    finalize: Finalizer | None = None

    def coerce_verdict(self, value: Any) -> Enum:
        return enum_member(self.verdicts, self.fallback)(value)


def _specific_email(item: Mapping[str, Any]) -> dict[str, Any]:
    suggestion = text(item.get("foundSuggestion"))
    record: dict[str, Any] = {
        "email": text(item.get("email")),
        "isVerified": item.get("isVerified") is True,
        "summary": text(item.get("summary")),
    }
    if suggestion and suggestion.lower() not in {"null", "none", "n/a"}:
        record["foundSuggestion"] = suggestion
    return record


def _stamp_specific_email(payload: dict[str, Any], subject: InputValidation | None) -> dict[str, Any]:
    # Only a full address gets a specific-email verdict, and it always names the analysed address.
    if subject is None:
        return payload
    if not subject.local_part:
        payload.pop("specificEmailAnalysis", None)
        return payload
    if "specificEmailAnalysis" in payload:
        payload["specificEmailAnalysis"] = {**payload["specificEmailAnalysis"], "email": subject.value}
    return payload


def _grammar(item: Mapping[str, Any]) -> dict[str, Any]:
    return {"summary": text(item.get("summary")), "errors": string_list(item.get("errors"))}


def _certificate(item: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "issuer": text(item.get("issuer")),
        "subject": text(item.get("subject")),
        "validFrom": text(item.get("validFrom")),
        "validTo": text(item.get("validTo")),
        "protocol": text(item.get("protocol")),
        "summary": text(item.get("summary")),
    }


def _claim(item: Mapping[str, Any]) -> dict[str, Any] | None:
    key = text(item.get("key"))
    if not key:
        return None
    return {"key": key, "value": item.get("value")}


_secret_risk = enum_member(SecretRisk, SecretRisk.CRITICAL)
_link_verdict = enum_member(LinkVerdict, LinkVerdict.SUSPICIOUS)
_attachment_risk = enum_member(AttachmentRisk, AttachmentRisk.HIGH)


def _secret(item: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "line": positive_int(item.get("line")),
        "type": text(item.get("type"), "Unclassified secret"),
        "snippet": text(item.get("snippet")),
        "risk": _secret_risk(item.get("risk")),
        "suggestion": text(item.get("suggestion")),
    }


def _header(item: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "from": text(item.get("from"), "N/A"),
        "subject": text(item.get("subject"), "N/A"),
        "dkim": text(item.get("dkim"), "N/A"),
        "spf": text(item.get("spf"), "N/A"),
        "dmarc": text(item.get("dmarc"), "N/A"),
        "summary": text(item.get("summary")),
    }


def _link(item: Mapping[str, Any]) -> dict[str, Any] | None:
    url = text(item.get("url"))
    if not url:
        return None
    return {"url": url, "verdict": _link_verdict(item.get("verdict")), "summary": text(item.get("summary"))}


def _attachment(item: Mapping[str, Any]) -> dict[str, Any] | None:
    filename = text(item.get("filename"))
    if not filename:
        return None
    return {
        "filename": filename,
        "risk": _attachment_risk(item.get("risk")),
        "summary": text(item.get("summary")),
    }


DESCRIPTORS: dict[AnalysisKind, KindDescriptor] = {
    AnalysisKind.DOMAIN: KindDescriptor(
        kind=AnalysisKind.DOMAIN,
        model=DomainAnalysisResult,
        verdicts=LegitimacyStatus,
        fallback=LegitimacyStatus.UNKNOWN,
        verdict_field="legitimacy",
        summary_field="reputationSummary",
        fields=(
            FieldRule("commonAliases", sorted_string_list),
            FieldRule("observedFormats", sorted_string_list),
            FieldRule("otherDiscoveredEmails", sorted_string_list),
            FieldRule("sourcesSummary", optional_text),
            FieldRule("specificEmailAnalysis", optional_record(_specific_email)),
        ),
        failure_summary="An error occurred while parsing the analysis, but here is the raw output: {raw}",
        grounded=True,
        finalize=_stamp_specific_email,
    ),
    AnalysisKind.SCREENSHOT: KindDescriptor(
        kind=AnalysisKind.SCREENSHOT,
        model=ScreenshotAnalysisResult,
        verdicts=ScreenshotVerdict,
        fallback=ScreenshotVerdict.UNKNOWN,
        fields=(
            FieldRule("redFlags", string_list),
            FieldRule("grammaticalAnalysis", optional_record(_grammar)),
        ),
    ),
    AnalysisKind.URL: KindDescriptor(
        kind=AnalysisKind.URL,
        model=URLAnalysisResult,
        verdicts=URLVerdict,
        fallback=URLVerdict.UNKNOWN,
        fields=(
            FieldRule("redFlags", string_list),
            FieldRule("certificateAnalysis", optional_record(_certificate)),
        ),
        grounded=True,
    ),
    AnalysisKind.TOKEN: KindDescriptor(
        kind=AnalysisKind.TOKEN,
        model=TokenAnalysisResult,
        verdicts=TokenVerdict,
        fallback=TokenVerdict.INVALID_MALFORMED,
        fields=(
            FieldRule("securityRisks", string_list),
            FieldRule("decodedHeader", record_list(_claim)),
            FieldRule("decodedPayload", record_list(_claim)),
        ),
        failure_summary=(
            "An error occurred while parsing the analysis. The AI model may have provided a response "
            "in an unexpected format or the token is severely malformed. Raw output: {raw}"
        ),
    ),
    AnalysisKind.SECRETS: KindDescriptor(
        kind=AnalysisKind.SECRETS,
        model=SecretAnalysisResult,
        verdicts=SecretVerdict,
        fallback=SecretVerdict.INCOMPLETE,
        fields=(FieldRule("foundSecrets", record_list(_secret)),),
    ),
    AnalysisKind.RAW_EMAIL: KindDescriptor(
        kind=AnalysisKind.RAW_EMAIL,
        model=RawEmailAnalysisResult,
        verdicts=RawEmailVerdict,
        fallback=RawEmailVerdict.UNKNOWN,
        fields=(
            FieldRule("redFlags", string_list),
            FieldRule("headerAnalysis", required_record(_header, HEADER_DEFAULTS)),
            FieldRule("links", record_list(_link)),
            FieldRule("attachments", record_list(_attachment)),
        ),
        failure_fields={"headerAnalysis": HEADER_FAILURE},
    ),
}


def descriptor_for(kind: AnalysisKind | str) -> KindDescriptor:
    return DESCRIPTORS[AnalysisKind(kind)]
