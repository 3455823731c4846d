"""Closed verdict enumerations.

Member values are the exact strings the backend is asked to emit.
"""

from __future__ import annotations

from enum import Enum


class AnalysisKind(str, Enum):
    DOMAIN = "domain"
    SCREENSHOT = "screenshot"
    URL = "url"
    TOKEN = "token"
    SECRETS = "secrets"
    RAW_EMAIL = "raw_email"


class LegitimacyStatus(str, Enum):
    LEGITIMATE = "Legitimate"
    SUSPICIOUS = "Suspicious"
    POTENTIALLY_MALICIOUS = "Potentially Malicious"
    UNKNOWN = "Unknown"


class ScreenshotVerdict(str, Enum):
    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"
    MALICIOUS = "Malicious"
    UNKNOWN = "Unknown"


class URLVerdict(str, Enum):
    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"
    MALICIOUS = "Malicious"
    UNKNOWN = "Unknown"


class TokenVerdict(str, Enum):
    VALID_SAFE = "Valid & Safe"
    VALID_RISKY = "Valid & Potentially Risky"
    INVALID_MALFORMED = "Invalid / Malformed"
    EXPIRED = "Expired"


class SecretVerdict(str, Enum):
    NO_SECRETS = "No Secrets Found"
    SECRETS_FOUND = "Secrets Found"
    INCOMPLETE = "Analysis Incomplete"


class RawEmailVerdict(str, Enum):
    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"
    MALICIOUS = "Malicious"
    SPAM = "Spam"
    UNKNOWN = "Unknown"


class SecretRisk(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class LinkVerdict(str, Enum):
    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"


class AttachmentRisk(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NONE = "None"
