"""Typed result model for every analysis tool."""

from seclens.domain.results import (
    AnalysisResult,
    AttachmentAnalysis,
    CertificateAnalysis,
    DomainAnalysisResult,
    FoundSecret,
    GrammaticalAnalysis,
    GroundingSource,
    HeaderAnalysis,
    LinkAnalysis,
    RawEmailAnalysisResult,
    ScreenshotAnalysisResult,
    SecretAnalysisResult,
    SpecificEmailAnalysis,
    TokenAnalysisResult,
    TokenClaim,
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

__all__ = [
    "AnalysisKind",
    "AnalysisResult",
    "AttachmentAnalysis",
    "AttachmentRisk",
    "CertificateAnalysis",
    "DomainAnalysisResult",
    "FoundSecret",
    "GrammaticalAnalysis",
    "GroundingSource",
    "HeaderAnalysis",
    "LegitimacyStatus",
    "LinkAnalysis",
    "LinkVerdict",
    "RawEmailAnalysisResult",
    "RawEmailVerdict",
    "ScreenshotAnalysisResult",
    "ScreenshotVerdict",
    "SecretAnalysisResult",
    "SecretRisk",
    "SecretVerdict",
    "SpecificEmailAnalysis",
    "TokenAnalysisResult",
    "TokenClaim",
    "TokenVerdict",
    "URLAnalysisResult",
    "URLVerdict",
]
