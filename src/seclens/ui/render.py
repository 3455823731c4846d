"""Markdown rendering for normalized results."""

from __future__ import annotations

import json
from typing import Any

from seclens.domain.results import (
    AnalysisResult,
    DomainAnalysisResult,
    GroundingSource,
    RawEmailAnalysisResult,
    ScreenshotAnalysisResult,
    SecretAnalysisResult,
    TokenAnalysisResult,
    TokenClaim,
    URLAnalysisResult,
)
from seclens.ui.presentation import style_for


def _escape_cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def _headline(result: AnalysisResult) -> list[str]:
    style = style_for(result.verdict)
    return [f"## {style.icon} {style.label}", "", result.summary, ""]


def _bullets(title: str, items: list[str], empty: str) -> list[str]:
    lines = [f"### {title}"]
    if not items:
        return lines + [f"_{empty}_", ""]
    return lines + [f"- {item}" for item in items] + [""]


def _sources(sources: list[GroundingSource]) -> list[str]:
    if not sources:
        return []
    return ["### Sources"] + [f"- [{source.title}]({source.uri})" for source in sources] + [""]


def _claims(title: str, claims: list[TokenClaim]) -> list[str]:
    lines = [f"### {title}"]
    if not claims:
        return lines + ["_No claims decoded._", ""]
    lines += ["| Claim | Value |", "|---|---|"]
    for claim in claims:
        value = claim.value if isinstance(claim.value, str) else json.dumps(claim.value, ensure_ascii=True)
        lines.append(f"| `{_escape_cell(claim.key)}` | {_escape_cell(value)} |")
    return lines + [""]


def _render_domain(result: DomainAnalysisResult) -> list[str]:
    lines = _headline(result)
    specific = result.specific_email_analysis
    if specific is not None:
        status = "Verified" if specific.is_verified else "Not verified"
        lines += [f"### Specific Email: `{specific.email}` ({status})", specific.summary, ""]
        if specific.found_suggestion:
            lines += [f"Did you mean `{specific.found_suggestion}`?", ""]
    lines += _bullets("Common Aliases", result.common_aliases, "No common aliases found.")
    lines += _bullets("Observed Formats", result.observed_formats, "No address formats observed.")
    lines += _bullets("Other Discovered Emails", result.other_discovered_emails, "No other addresses discovered.")
    if result.sources_summary:
        lines += ["### Source Summary", result.sources_summary, ""]
    return lines + _sources(result.sources)


def _render_screenshot(result: ScreenshotAnalysisResult) -> list[str]:
    lines = _headline(result) + _bullets("Red Flags", result.red_flags, "No red flags identified.")
    grammar = result.grammatical_analysis
    if grammar is not None:
        lines += ["### Grammar & Spelling", grammar.summary, ""]
        lines += [f"- {error}" for error in grammar.errors]
        lines.append("")
    return lines


def _render_url(result: URLAnalysisResult) -> list[str]:
    lines = _headline(result) + _bullets("Red Flags", result.red_flags, "No red flags identified.")
    cert = result.certificate_analysis
    if cert is not None:
        lines += [
            "### SSL Certificate",
            f"- Issuer: {cert.issuer}",
            f"- Subject: {cert.subject}",
            f"- Valid: {cert.valid_from} to {cert.valid_to}",
            f"- Protocol: {cert.protocol}",
            "",
            cert.summary,
            "",
        ]
    return lines + _sources(result.sources)


def _render_token(result: TokenAnalysisResult) -> list[str]:
    lines = _headline(result) + _bullets("Security Risks", result.security_risks, "No security risks identified.")
    return lines + _claims("Decoded Header", result.decoded_header) + _claims("Decoded Payload", result.decoded_payload)


def _render_secrets(result: SecretAnalysisResult) -> list[str]:
    lines = _headline(result) + ["### Found Secrets"]
    if not result.found_secrets:
        return lines + ["_No secrets found._", ""]
    lines += ["| Line | Type | Risk | Snippet | Suggestion |", "|---|---|---|---|---|"]
    for secret in result.found_secrets:
        risk = style_for(secret.risk)
        line = secret.line if secret.line is not None else "?"
        lines.append(
            f"| {line} | {_escape_cell(secret.type)} | {risk.icon} {risk.label} "
            f"| `{_escape_cell(secret.snippet)}` | {_escape_cell(secret.suggestion)} |"
        )
    return lines + [""]


def _render_raw_email(result: RawEmailAnalysisResult) -> list[str]:
    header = result.header_analysis
    lines = _headline(result) + _bullets("Red Flags", result.red_flags, "No red flags identified.")
    lines += [
        "### Header Analysis",
        f"- From: {header.sender}",
        f"- Subject: {header.subject}",
        f"- DKIM: {header.dkim}",
        f"- SPF: {header.spf}",
        f"- DMARC: {header.dmarc}",
        "",
        header.summary,
        "",
        "### Links",
    ]
    if result.links:
        for link in result.links:
            style = style_for(link.verdict)
            lines.append(f"- {style.icon} `{link.url}` ({style.label}): {link.summary}")
    else:
        lines.append("_No links found._")
    lines += ["", "### Attachments"]
    if result.attachments:
        for attachment in result.attachments:
            style = style_for(attachment.risk)
            lines.append(f"- {style.icon} `{attachment.filename}` ({style.label}): {attachment.summary}")
    else:
        lines.append("_No attachments found._")
    return lines + [""]


_RENDERERS = {
    DomainAnalysisResult: _render_domain,
    ScreenshotAnalysisResult: _render_screenshot,
    URLAnalysisResult: _render_url,
    TokenAnalysisResult: _render_token,
    SecretAnalysisResult: _render_secrets,
    RawEmailAnalysisResult: _render_raw_email,
}


def render_markdown(result: AnalysisResult) -> str:
    return "\n".join(_RENDERERS[type(result)](result)).strip() + "\n"
