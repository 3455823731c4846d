"""Per-tool syntactic pre-checks on raw user input."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
import mimetypes
from pathlib import Path
from urllib.parse import urlparse
import re

from seclens.agents.contracts import ImagePart
from seclens.domain.verdicts import AnalysisKind

EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")
DOMAIN_PATTERN = re.compile(
    r"^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z0-9][a-z0-9-]{0,61}[a-z0-9]$"
)
DATA_URL_PATTERN = re.compile(r"^data:([^;,]+);base64,(.*)$", re.DOTALL)

EMPTY_ADDRESS = "Please enter a domain name or email address."
INVALID_ADDRESS = (
    "Please enter a valid domain (e.g., example.com) or email address (e.g., user@example.com)."
)
EMPTY_URL = "Please enter a URL to analyze."
INVALID_URL = "Please enter a valid URL (e.g., https://example.com)."
EMPTY_TOKEN = "Please enter a token to analyze."
TOKEN_IS_URL = "This appears to be a URL. Please use the 'URL Analyzer' tab for a proper analysis."
EMPTY_SECRET_TEXT = "Please enter some text to scan."
EMPTY_RAW_EMAIL = "Please paste the raw email source to analyze."
EMPTY_IMAGE = "No image to analyze. Please paste an image first."
INVALID_IMAGE = "Invalid image data URL format."
INVALID_IMAGE_TYPE = "Invalid file type. Please select an image file (e.g., PNG, JPG, WEBP)."


@dataclass(frozen=True)
class InputValidation:
    ok: bool
    value: str = ""
    reason: str = ""
    local_part: str | None = None
    domain: str | None = None
    image: ImagePart | None = None

    @classmethod
    def reject(cls, reason: str) -> "InputValidation":
        return cls(ok=False, reason=reason)


def validate_address(raw: str) -> InputValidation:
    value = (raw or "").strip().lower()
    if not value:
        return InputValidation.reject(EMPTY_ADDRESS)
    if EMAIL_PATTERN.match(value):
        local_part, _, domain = value.rpartition("@")
        return InputValidation(ok=True, value=value, local_part=local_part, domain=domain)
    if DOMAIN_PATTERN.match(value):
        return InputValidation(ok=True, value=value, domain=value)
    return InputValidation.reject(INVALID_ADDRESS)


def _is_absolute_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def validate_url(raw: str) -> InputValidation:
    value = (raw or "").strip()
    if not value:
        return InputValidation.reject(EMPTY_URL)
    if not _is_absolute_url(value):
        return InputValidation.reject(INVALID_URL)
    return InputValidation(ok=True, value=value, domain=url_host(value))


def url_host(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def validate_token(raw: str) -> InputValidation:
    value = (raw or "").strip()
    if not value:
        return InputValidation.reject(EMPTY_TOKEN)
    if _is_absolute_url(value) and urlparse(value).scheme.lower() in {"http", "https"}:
        return InputValidation.reject(TOKEN_IS_URL)
    return InputValidation(ok=True, value=value)


def validate_secret_text(raw: str) -> InputValidation:
    value = (raw or "").strip()
    if not value:
        return InputValidation.reject(EMPTY_SECRET_TEXT)
    return InputValidation(ok=True, value=value)


def validate_raw_email(raw: str) -> InputValidation:
    value = (raw or "").strip()
    if not value:
        return InputValidation.reject(EMPTY_RAW_EMAIL)
    return InputValidation(ok=True, value=value)


def parse_image_data_url(data_url: str) -> ImagePart | None:
    """Split a `data:<mediatype>;base64,<payload>` string into an image part."""

    match = DATA_URL_PATTERN.match((data_url or "").strip())
    if not match:
        return None
    mime_type = match.group(1).strip().lower()
    if not mime_type.startswith("image/"):
        return None
    try:
        data = base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError):
        return None
    if not data:
        return None
    return ImagePart(mime_type=mime_type, data=data)


def image_file_to_data_url(path: str | Path) -> str:
    """Encode an image file as a data URL, guessing the media type from its name."""

    p = Path(path)
    mime_type = mimetypes.guess_type(p.name)[0] or "application/octet-stream"
    payload = base64.b64encode(p.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def validate_screenshot(raw: str) -> InputValidation:
    value = (raw or "").strip()
    if not value:
        return InputValidation.reject(EMPTY_IMAGE)
    match = DATA_URL_PATTERN.match(value)
    if match and not match.group(1).strip().lower().startswith("image/"):
        return InputValidation.reject(INVALID_IMAGE_TYPE)
    image = parse_image_data_url(value)
    if image is None:
        return InputValidation.reject(INVALID_IMAGE)
    return InputValidation(ok=True, value=image.mime_type, image=image)


_VALIDATORS = {
    AnalysisKind.DOMAIN: validate_address,
    AnalysisKind.SCREENSHOT: validate_screenshot,
    AnalysisKind.URL: validate_url,
    AnalysisKind.TOKEN: validate_token,
    AnalysisKind.SECRETS: validate_secret_text,
    AnalysisKind.RAW_EMAIL: validate_raw_email,
}


def validate_input(kind: AnalysisKind, raw: str) -> InputValidation:
    return _VALIDATORS[AnalysisKind(kind)](raw)
