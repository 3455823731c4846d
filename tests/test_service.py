import asyncio
import json

import pytest

from seclens.core.errors import BackendUnavailableError, InputRejectedError
from seclens.domain.verdicts import AnalysisKind, LegitimacyStatus, URLVerdict
from seclens.orchestrator.service import UNAVAILABLE_MESSAGES, AnalysisService, create_service
from seclens.providers import GeminiInvoker, OllamaInvoker
from seclens.tools import validation


def test_rejected_input_never_reaches_backend(fake_invoker):
    invoker = fake_invoker("{}")
    service = AnalysisService(invoker)
    with pytest.raises(InputRejectedError) as excinfo:
        asyncio.run(service.analyze(AnalysisKind.TOKEN, "https://example.com/callback"))
    assert excinfo.value.reason == validation.TOKEN_IS_URL
    assert invoker.requests == []


def test_analyze_normalizes_backend_text(fake_invoker):
    payload = {"overallVerdict": "Malicious", "analysisSummary": "Known phishing kit.", "redFlags": ["Fake login"]}
    invoker = fake_invoker(f"```json\n{json.dumps(payload)}\n```")
    result = asyncio.run(AnalysisService(invoker).analyze(AnalysisKind.URL, "https://paypa1.example/login"))
    assert result.verdict is URLVerdict.MALICIOUS
    assert result.red_flags == ["Fake login"]
    assert invoker.requests[0].enable_grounding


def test_prepare_keeps_subject_for_normalization(fake_invoker):
    payload = {
        "legitimacy": "Suspicious",
        "reputationSummary": "Unpublished address.",
        "specificEmailAnalysis": {"email": "x", "isVerified": False, "summary": "Not found."},
    }
    service = AnalysisService(fake_invoker(json.dumps(payload)))
    prepared = service.prepare("domain", " Billing@Example.com ")
    assert prepared.subject.local_part == "billing"
    result = asyncio.run(service.execute(prepared))
    assert result.legitimacy is LegitimacyStatus.SUSPICIOUS
    assert result.specific_email_analysis.email == "billing@example.com"


@pytest.mark.parametrize("kind", list(AnalysisKind))
def test_backend_failure_becomes_user_message(fake_invoker, kind):
    service = AnalysisService(fake_invoker(error=BackendUnavailableError("connection refused")))
    raw = {
        AnalysisKind.DOMAIN: "example.com",
        AnalysisKind.SCREENSHOT: "data:image/png;base64,aGVsbG8=",
        AnalysisKind.URL: "https://example.com",
        AnalysisKind.TOKEN: "a.b.c",
        AnalysisKind.SECRETS: "x",
        AnalysisKind.RAW_EMAIL: "From: a@example.com",
    }[kind]
    with pytest.raises(BackendUnavailableError) as excinfo:
        asyncio.run(service.analyze(kind, raw))
    assert str(excinfo.value) == UNAVAILABLE_MESSAGES[kind]
    assert "The API may be unavailable" in str(excinfo.value)


def test_malformed_backend_text_is_not_an_error(fake_invoker):
    result = asyncio.run(AnalysisService(fake_invoker("Sorry, I cannot comply.")).analyze("secrets", "pw=1"))
    assert "Sorry, I cannot comply." in result.summary


def test_create_service_uses_profile(monkeypatch):
    service, runtime = create_service()
    assert isinstance(service.invoker, GeminiInvoker)
    assert runtime["provider"] == "gemini"
    assert runtime["api_key_configured"] is False
    assert "ollama" in runtime["profile_choices"]

    service, runtime = create_service(profile_override="ollama", model_override="qwen2.5:7b")
    assert isinstance(service.invoker, OllamaInvoker)
    assert service.invoker.model == "qwen2.5:7b"
    assert runtime["model"] == "qwen2.5:7b"
