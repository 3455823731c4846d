"""Build backend requests from validated input."""

from __future__ import annotations

from seclens.agents.contracts import AnalysisRequest
from seclens.agents.prompts import (
    DOMAIN_PROMPT,
    RAW_EMAIL_PROMPT,
    SCREENSHOT_PROMPT,
    SECRETS_PROMPT,
    SPECIFIC_EMAIL_BLOCK,
    SPECIFIC_EMAIL_SCHEMA,
    TOKEN_PROMPT,
    URL_PROMPT,
)
from seclens.domain.verdicts import AnalysisKind
from seclens.tools.validation import InputValidation


def build_domain_request(validation: InputValidation) -> AnalysisRequest:
    subject = validation.value
    domain = validation.domain or subject
    has_local_part = bool(validation.local_part)
    prompt = DOMAIN_PROMPT.substitute(
        subject=subject,
        domain=domain,
        specific_block=SPECIFIC_EMAIL_BLOCK.substitute(subject=subject) if has_local_part else "",
        specific_schema=SPECIFIC_EMAIL_SCHEMA.substitute(subject=subject) if has_local_part else "",
    )
    return AnalysisRequest(kind=AnalysisKind.DOMAIN, prompt=prompt, enable_grounding=True)


def build_screenshot_request(validation: InputValidation) -> AnalysisRequest:
    return AnalysisRequest(
        kind=AnalysisKind.SCREENSHOT,
        prompt=SCREENSHOT_PROMPT,
        image=validation.image,
    )


def build_url_request(validation: InputValidation) -> AnalysisRequest:
    return AnalysisRequest(
        kind=AnalysisKind.URL,
        prompt=URL_PROMPT.substitute(url=validation.value),
        enable_grounding=True,
    )


def build_token_request(validation: InputValidation) -> AnalysisRequest:
    return AnalysisRequest(kind=AnalysisKind.TOKEN, prompt=TOKEN_PROMPT.substitute(token=validation.value))


def build_secrets_request(validation: InputValidation) -> AnalysisRequest:
    return AnalysisRequest(kind=AnalysisKind.SECRETS, prompt=SECRETS_PROMPT.substitute(text=validation.value))


def build_raw_email_request(validation: InputValidation) -> AnalysisRequest:
    return AnalysisRequest(
        kind=AnalysisKind.RAW_EMAIL,
        prompt=RAW_EMAIL_PROMPT.substitute(source=validation.value),
    )


_BUILDERS = {
    AnalysisKind.DOMAIN: build_domain_request,
    AnalysisKind.SCREENSHOT: build_screenshot_request,
    AnalysisKind.URL: build_url_request,
    AnalysisKind.TOKEN: build_token_request,
    AnalysisKind.SECRETS: build_secrets_request,
    AnalysisKind.RAW_EMAIL: build_raw_email_request,
}


def build_request(kind: AnalysisKind, validation: InputValidation) -> AnalysisRequest:
    if not validation.ok:
        raise ValueError(f"cannot build a {kind} request from rejected input")
    return _BUILDERS[AnalysisKind(kind)](validation)
