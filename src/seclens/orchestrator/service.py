"""Analysis service: validate, build, invoke, normalize."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from seclens.agents.builders import build_request
from seclens.agents.contracts import AnalysisRequest
from seclens.config.settings import load_config
from seclens.core.errors import BackendUnavailableError, InputRejectedError
from seclens.domain.results import AnalysisResult
from seclens.domain.verdicts import AnalysisKind
from seclens.orchestrator.normalizer import normalize
from seclens.providers import build_invoker
from seclens.providers.base import Invoker
from seclens.tools.validation import InputValidation, validate_input

logger = logging.getLogger(__name__)

_RETRY_HINT = "The API may be unavailable. Please try again later."

UNAVAILABLE_MESSAGES = {
    AnalysisKind.DOMAIN: f"Failed to analyze input. {_RETRY_HINT}",
    AnalysisKind.SCREENSHOT: f"Failed to analyze screenshot. {_RETRY_HINT}",
    AnalysisKind.URL: f"Failed to analyze URL. {_RETRY_HINT}",
    AnalysisKind.TOKEN: f"Failed to analyze token. {_RETRY_HINT}",
    AnalysisKind.SECRETS: f"Failed to scan for secrets. {_RETRY_HINT}",
    AnalysisKind.RAW_EMAIL: f"Failed to analyze email source. {_RETRY_HINT}",
}


@dataclass(frozen=True)
class PreparedAnalysis:
    kind: AnalysisKind
    request: AnalysisRequest
    subject: InputValidation


class AnalysisService:
    """Runs one analysis per call against an injected backend invoker."""

    def __init__(self, invoker: Invoker) -> None:
        self.invoker = invoker

    def prepare(self, kind: AnalysisKind | str, raw: str) -> PreparedAnalysis:
        """Validate and build the backend request; no I/O happens here."""

        resolved = AnalysisKind(kind)
        subject = validate_input(resolved, raw)
        if not subject.ok:
            logger.info("%s input rejected: %s", resolved.value, subject.reason)
            raise InputRejectedError(subject.reason)
        return PreparedAnalysis(kind=resolved, request=build_request(resolved, subject), subject=subject)

    async def execute(self, prepared: PreparedAnalysis) -> AnalysisResult:
        kind = prepared.kind
        logger.info("invoking %s backend for %s analysis", getattr(self.invoker, "name", "backend"), kind.value)
        try:
            response = await self.invoker.invoke(prepared.request)
        except BackendUnavailableError as exc:
            logger.warning("%s analysis failed: %s", kind.value, exc)
            raise BackendUnavailableError(UNAVAILABLE_MESSAGES[kind]) from exc
        result = normalize(response.text, kind, citations=response.citations, subject=prepared.subject)
        logger.debug("%s analysis finished with verdict %s", kind.value, result.verdict.value)
        return result

    async def analyze(self, kind: AnalysisKind | str, raw: str) -> AnalysisResult:
        return await self.execute(self.prepare(kind, raw))


def create_service(
    *,
    profile_override: str | None = None,
    model_override: str | None = None,
) -> tuple[AnalysisService, dict[str, object]]:
    cfg, yaml_cfg = load_config(profile_override=profile_override)
    if model_override:
        cfg = cfg.model_copy(update={"model": model_override})
    profiles = yaml_cfg.get("profiles")
    profile_map = profiles if isinstance(profiles, dict) else {}
    service = AnalysisService(build_invoker(cfg))
    runtime = {
        "profile": cfg.profile,
        "profile_choices": [str(item) for item in profile_map.keys() if str(item).strip()],
        "provider": cfg.provider,
        "model": cfg.model,
        "model_choices": cfg.model_choices,
        "api_base": cfg.api_base,
        "api_key_configured": bool(cfg.api_key),
        "temperature": cfg.temperature,
        "timeout_s": cfg.timeout_s,
        "max_retries": cfg.max_retries,
        "log_level": cfg.log_level,
        "gradio_share": cfg.gradio_share,
    }
    return service, runtime
