import json

import pytest

from seclens.agents.contracts import RawCitation
from seclens.domain.results import GroundingSource
from seclens.domain.verdicts import (
    AnalysisKind,
    AttachmentRisk,
    LegitimacyStatus,
    LinkVerdict,
    RawEmailVerdict,
    SecretRisk,
    SecretVerdict,
    TokenVerdict,
    URLVerdict,
)
from seclens.orchestrator.descriptors import descriptor_for
from seclens.orchestrator.normalizer import normalize, strip_code_fences
from seclens.tools.validation import validate_address, validate_url

LIST_FIELDS = {
    AnalysisKind.DOMAIN: ("common_aliases", "observed_formats", "other_discovered_emails", "sources"),
    AnalysisKind.SCREENSHOT: ("red_flags",),
    AnalysisKind.URL: ("red_flags", "sources"),
    AnalysisKind.TOKEN: ("security_risks", "decoded_header", "decoded_payload"),
    AnalysisKind.SECRETS: ("found_secrets",),
    AnalysisKind.RAW_EMAIL: ("red_flags", "links", "attachments"),
}

HOSTILE_INPUTS = [
    "",
    "   ",
    "Sorry, I cannot comply.",
    "null",
    "[]",
    "42",
    '"just a string"',
    "{",
    '{"overallVerdict": ',
    "```json\n```",
    "[" * 5000 + "]" * 5000,
    '{"legitimacy": ["Legitimate"], "overallVerdict": {"x": 1}}',
    json.dumps(
        {
            "legitimacy": 7,
            "overallVerdict": None,
            "reputationSummary": ["not", "text"],
            "analysisSummary": 12,
            "commonAliases": "a@b.c",
            "observedFormats": [None, 3, True, {"x": 1}],
            "redFlags": {"a": 1},
            "securityRisks": None,
            "decodedHeader": {"alg": "none"},
            "decodedPayload": [1, "x", {"key": ""}, {"value": 3}],
            "foundSecrets": [1, "x", {"line": "abc", "risk": "Extreme"}],
            "headerAnalysis": [],
            "links": [{"verdict": "Safe"}, "https://x", {"url": 5}],
            "attachments": [{"filename": None}],
            "certificateAnalysis": "none",
            "grammaticalAnalysis": [],
            "specificEmailAnalysis": "n/a",
        }
    ),
]


@pytest.mark.parametrize("kind", list(AnalysisKind))
@pytest.mark.parametrize("raw", HOSTILE_INPUTS)
def test_normalize_is_total(kind, raw):
    result = normalize(raw, kind)
    descriptor = descriptor_for(kind)
    assert isinstance(result, descriptor.model)
    assert isinstance(result.verdict, descriptor.verdicts)
    assert isinstance(result.summary, str) and result.summary
    for name in LIST_FIELDS[kind]:
        assert isinstance(getattr(result, name), list)


@pytest.mark.parametrize("kind", list(AnalysisKind))
def test_out_of_enum_verdict_uses_fallback_member(kind):
    descriptor = descriptor_for(kind)
    payload = {descriptor.verdict_field: "Definitely Fine", descriptor.summary_field: "ok"}
    result = normalize(json.dumps(payload), kind)
    assert result.verdict is descriptor.fallback
    assert result.summary == "ok"


def test_fallback_members():
    assert descriptor_for(AnalysisKind.DOMAIN).fallback is LegitimacyStatus.UNKNOWN
    assert descriptor_for(AnalysisKind.TOKEN).fallback is TokenVerdict.INVALID_MALFORMED
    assert descriptor_for(AnalysisKind.SECRETS).fallback is SecretVerdict.INCOMPLETE
    assert descriptor_for(AnalysisKind.RAW_EMAIL).fallback is RawEmailVerdict.UNKNOWN


def test_verdict_is_trimmed_before_matching():
    result = normalize('{"overallVerdict": "  Malicious ", "analysisSummary": "bad"}', AnalysisKind.URL)
    assert result.verdict is URLVerdict.MALICIOUS


@pytest.mark.parametrize("kind", list(AnalysisKind))
def test_malformed_output_embeds_raw_text(kind):
    result = normalize("Sorry, I cannot comply.", kind)
    assert result.verdict is descriptor_for(kind).fallback
    assert "Sorry, I cannot comply." in result.summary
    for name in LIST_FIELDS[kind]:
        assert getattr(result, name) == []


def test_raw_email_fallback_keeps_header_record():
    result = normalize("not json", AnalysisKind.RAW_EMAIL)
    header = result.header_analysis
    assert header.sender == "N/A"
    assert header.dkim == "N/A"
    assert header.summary == "Failed to parse headers."


def test_domain_lists_are_sorted():
    payload = {
        "legitimacy": "Legitimate",
        "reputationSummary": "Long-standing reserved domain.",
        "commonAliases": ["privacy@example.com", "noreply@example.com"],
        "observedFormats": ["z@example.com", "a@example.com", "m@example.com"],
        "otherDiscoveredEmails": [],
    }
    result = normalize(json.dumps(payload), AnalysisKind.DOMAIN, subject=validate_address("example.com"))
    assert result.legitimacy is LegitimacyStatus.LEGITIMATE
    assert result.common_aliases == ["noreply@example.com", "privacy@example.com"]
    assert result.observed_formats == sorted(result.observed_formats)
    assert result.other_discovered_emails == []
    assert result.specific_email_analysis is None


@pytest.mark.parametrize("fence", ["```json\n{}\n```", "```\n{}\n```", "```JSON {} ```", "  ```json\n{}```  "])
def test_defencing_is_transparent(fence):
    payload = json.dumps(
        {
            "overallVerdict": "Suspicious",
            "analysisSummary": "Lookalike domain.",
            "redFlags": ["Typosquatted domain"],
        }
    )
    wrapped = fence.replace("{}", payload)
    assert normalize(wrapped, AnalysisKind.URL) == normalize(payload, AnalysisKind.URL)


def test_strip_code_fences_is_idempotent():
    once = strip_code_fences('```json\n{"a": 1}\n```')
    assert once == '{"a": 1}'
    assert strip_code_fences(once) == once


def test_address_without_specific_analysis_still_normalizes():
    payload = {"legitimacy": "Legitimate", "reputationSummary": "Fine."}
    result = normalize(json.dumps(payload), AnalysisKind.DOMAIN, subject=validate_address("user@example.com"))
    assert result.legitimacy is LegitimacyStatus.LEGITIMATE
    assert result.specific_email_analysis is None
    assert "specificEmailAnalysis" in result.to_wire()


def test_specific_analysis_names_the_analysed_address():
    payload = {
        "legitimacy": "Potentially Malicious",
        "reputationSummary": "Domain is real, address is not.",
        "specificEmailAnalysis": {
            "email": "someone-else@example.com",
            "isVerified": False,
            "summary": "Not published.",
            "foundSuggestion": "support@example.com",
        },
    }
    result = normalize(json.dumps(payload), AnalysisKind.DOMAIN, subject=validate_address("suport@example.com"))
    specific = result.specific_email_analysis
    assert specific.email == "suport@example.com"
    assert specific.is_verified is False
    assert specific.found_suggestion == "support@example.com"


def test_specific_analysis_dropped_for_bare_domain():
    payload = {
        "legitimacy": "Legitimate",
        "reputationSummary": "Fine.",
        "specificEmailAnalysis": {"isVerified": True, "summary": "?"},
    }
    result = normalize(json.dumps(payload), AnalysisKind.DOMAIN, subject=validate_address("example.com"))
    assert result.specific_email_analysis is None


def test_null_suggestion_is_omitted():
    payload = {
        "legitimacy": "Legitimate",
        "reputationSummary": "Fine.",
        "specificEmailAnalysis": {"isVerified": True, "summary": "Published.", "foundSuggestion": "null"},
    }
    result = normalize(json.dumps(payload), AnalysisKind.DOMAIN, subject=validate_address("info@example.com"))
    assert result.specific_email_analysis.found_suggestion is None
    assert result.specific_email_analysis.is_verified is True


def test_secret_scan_finding():
    payload = {
        "overallVerdict": "Secrets Found",
        "analysisSummary": "One AWS key exposed.",
        "foundSecrets": [
            {
                "line": 12,
                "type": "AWS Access Key ID",
                "snippet": "aws_access_key_id = AKIA...",
                "risk": "Critical",
                "suggestion": "Rotate the key.",
            }
        ],
    }
    result = normalize(json.dumps(payload), AnalysisKind.SECRETS)
    assert result.verdict is SecretVerdict.SECRETS_FOUND
    assert len(result.found_secrets) == 1
    secret = result.found_secrets[0]
    assert secret.risk is SecretRisk.CRITICAL
    assert secret.line == 12
    assert secret.type == "AWS Access Key ID"


def test_secret_records_are_coerced():
    payload = {
        "overallVerdict": "Secrets Found",
        "analysisSummary": "x",
        "foundSecrets": [{"line": "7", "risk": "low"}, {"line": 0, "risk": "Medium"}, "junk"],
    }
    result = normalize(json.dumps(payload), AnalysisKind.SECRETS)
    assert [secret.line for secret in result.found_secrets] == [7, None]
    assert [secret.risk for secret in result.found_secrets] == [SecretRisk.CRITICAL, SecretRisk.MEDIUM]


def test_token_claims_keep_value_shapes():
    payload = {
        "overallVerdict": "Expired",
        "analysisSummary": "exp is in the past.",
        "securityRisks": ["Token expired"],
        "decodedHeader": [{"key": "alg", "value": "HS256"}],
        "decodedPayload": [
            {"key": "iat", "value": 1516239022},
            {"key": "admin", "value": True},
            {"key": "roles", "value": ["a", "b"]},
            {"key": "ctx", "value": {"tenant": 1}},
        ],
    }
    result = normalize(json.dumps(payload), AnalysisKind.TOKEN)
    assert result.verdict is TokenVerdict.EXPIRED
    values = {claim.key: claim.value for claim in result.decoded_payload}
    assert values == {"iat": 1516239022, "admin": True, "roles": ["a", "b"], "ctx": {"tenant": 1}}
    assert result.decoded_header[0].value == "HS256"


def test_url_certificate_is_optional():
    base = {"overallVerdict": "Safe", "analysisSummary": "Fine."}
    assert normalize(json.dumps(base), AnalysisKind.URL).certificate_analysis is None
    with_cert = dict(base, certificateAnalysis={"issuer": "Let's Encrypt", "validFrom": "2024-01-01"})
    cert = normalize(json.dumps(with_cert), AnalysisKind.URL).certificate_analysis
    assert cert.issuer == "Let's Encrypt"
    assert cert.valid_from == "2024-01-01"
    assert cert.valid_to == ""


def test_raw_email_records():
    payload = {
        "overallVerdict": "Spam",
        "analysisSummary": "Bulk marketing.",
        "links": [
            {"url": "https://bit.ly/x", "verdict": "Dangerous", "summary": "Shortener"},
            {"url": "https://example.com", "verdict": "Safe", "summary": "Brand site"},
            {"summary": "no url"},
        ],
        "attachments": [{"filename": "invoice.pdf.exe", "summary": "Double extension"}],
    }
    result = normalize(json.dumps(payload), AnalysisKind.RAW_EMAIL)
    assert result.verdict is RawEmailVerdict.SPAM
    assert [link.verdict for link in result.links] == [LinkVerdict.SUSPICIOUS, LinkVerdict.SAFE]
    assert result.attachments[0].risk is AttachmentRisk.HIGH
    assert result.header_analysis.sender == "N/A"
    assert result.header_analysis.summary == "Header analysis was not provided."


def test_grounding_sources_filtered_and_titled():
    citations = [
        RawCitation(uri="", title="Empty"),
        RawCitation(uri=None, title="Missing"),
        RawCitation(uri="https://a.example/page", title=None),
        {"web": {"uri": "https://b.example", "title": "B"}},
    ]
    payload = {"legitimacy": "Legitimate", "reputationSummary": "Fine."}
    result = normalize(
        json.dumps(payload),
        AnalysisKind.DOMAIN,
        citations=citations,
        subject=validate_address("user@example.com"),
    )
    assert result.sources == [
        GroundingSource(uri="https://a.example/page", title="Source from example.com"),
        GroundingSource(uri="https://b.example", title="B"),
    ]


def test_grounding_sources_survive_fallback():
    citations = [RawCitation(uri="https://c.example", title="C")]
    result = normalize("garbled", AnalysisKind.URL, citations=citations, subject=validate_url("https://x.example/a"))
    assert result.verdict is URLVerdict.UNKNOWN
    assert [source.uri for source in result.sources] == ["https://c.example"]


def test_ungrounded_kinds_ignore_citations():
    citations = [RawCitation(uri="https://c.example", title="C")]
    result = normalize('{"overallVerdict": "Expired", "analysisSummary": "x"}', AnalysisKind.TOKEN, citations=citations)
    assert "sources" not in result.to_wire()
