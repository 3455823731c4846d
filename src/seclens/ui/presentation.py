"""Verdict presentation table.

Every member of every verdict enumeration has an entry. There is no default
style: a missing entry is a bug and `style_for` raises `KeyError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from seclens.domain.verdicts import (
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


@dataclass(frozen=True)
class VerdictStyle:
    icon: str
    color: str
    label: str


SAFE = VerdictStyle("✅", "green", "Appears Safe")
SUSPICIOUS = VerdictStyle("⚠️", "yellow", "Suspicious")
MALICIOUS = VerdictStyle("🛑", "red", "Potentially Malicious")
UNKNOWN = VerdictStyle("❔", "gray", "Verdict Unknown")

# Keyed by enum type first: members of different enums share values ("Safe").
VERDICT_STYLES: dict[type[Enum], dict[Enum, VerdictStyle]] = {
    LegitimacyStatus: {
        LegitimacyStatus.LEGITIMATE: VerdictStyle("✅", "green", "Appears Legitimate"),
        LegitimacyStatus.SUSPICIOUS: SUSPICIOUS,
        LegitimacyStatus.POTENTIALLY_MALICIOUS: MALICIOUS,
        LegitimacyStatus.UNKNOWN: VerdictStyle("❔", "gray", "Legitimacy Unknown"),
    },
    ScreenshotVerdict: {
        ScreenshotVerdict.SAFE: SAFE,
        ScreenshotVerdict.SUSPICIOUS: SUSPICIOUS,
        ScreenshotVerdict.MALICIOUS: MALICIOUS,
        ScreenshotVerdict.UNKNOWN: UNKNOWN,
    },
    URLVerdict: {
        URLVerdict.SAFE: SAFE,
        URLVerdict.SUSPICIOUS: SUSPICIOUS,
        URLVerdict.MALICIOUS: MALICIOUS,
        URLVerdict.UNKNOWN: UNKNOWN,
    },
    TokenVerdict: {
        TokenVerdict.VALID_SAFE: VerdictStyle("✅", "green", "Valid & Appears Safe"),
        TokenVerdict.VALID_RISKY: VerdictStyle("⚠️", "yellow", "Valid & Potentially Risky"),
        TokenVerdict.EXPIRED: VerdictStyle("⌛", "orange", "Token is Expired"),
        TokenVerdict.INVALID_MALFORMED: VerdictStyle("🛑", "red", "Invalid or Malformed Token"),
    },
    SecretVerdict: {
        SecretVerdict.NO_SECRETS: VerdictStyle("✅", "green", "No Secrets Found"),
        SecretVerdict.SECRETS_FOUND: VerdictStyle("🛑", "red", "Secrets Found"),
        SecretVerdict.INCOMPLETE: VerdictStyle("❔", "gray", "Analysis Incomplete"),
    },
    RawEmailVerdict: {
        RawEmailVerdict.SAFE: SAFE,
        RawEmailVerdict.SUSPICIOUS: SUSPICIOUS,
        RawEmailVerdict.MALICIOUS: MALICIOUS,
        RawEmailVerdict.SPAM: VerdictStyle("🚫", "orange", "Likely Spam"),
        RawEmailVerdict.UNKNOWN: UNKNOWN,
    },
    SecretRisk: {
        SecretRisk.CRITICAL: VerdictStyle("🛑", "red", "Critical"),
        SecretRisk.HIGH: VerdictStyle("⚠️", "orange", "High"),
        SecretRisk.MEDIUM: VerdictStyle("⚠️", "yellow", "Medium"),
        SecretRisk.LOW: VerdictStyle("ℹ️", "blue", "Low"),
    },
    LinkVerdict: {
        LinkVerdict.SAFE: VerdictStyle("✅", "green", "Safe"),
        LinkVerdict.SUSPICIOUS: VerdictStyle("⚠️", "yellow", "Suspicious"),
    },
    AttachmentRisk: {
        AttachmentRisk.HIGH: VerdictStyle("⚠️", "red", "High Risk"),
        AttachmentRisk.MEDIUM: VerdictStyle("⚠️", "yellow", "Medium Risk"),
        AttachmentRisk.LOW: VerdictStyle("ℹ️", "blue", "Low Risk"),
        AttachmentRisk.NONE: VerdictStyle("✅", "green", "No Risk"),
    },
}


def style_for(verdict: Enum) -> VerdictStyle:
    return VERDICT_STYLES[type(verdict)][verdict]
