"""Result contracts for every analysis kind.

Attributes are snake_case; the camelCase aliases are the field names the
backend is asked to emit and the names used when results are serialized.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

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


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GroundingSource(_Record):
    uri: str = Field(min_length=1)
    title: str = Field(min_length=1)


class SpecificEmailAnalysis(_Record):
    email: str
    is_verified: bool = Field(default=False, alias="isVerified")
    summary: str = ""
    found_suggestion: str | None = Field(default=None, alias="foundSuggestion")


class GrammaticalAnalysis(_Record):
    summary: str = ""
    errors: list[str] = Field(default_factory=list)


class CertificateAnalysis(_Record):
    issuer: str = ""
    subject: str = ""
    valid_from: str = Field(default="", alias="validFrom")
    valid_to: str = Field(default="", alias="validTo")
    protocol: str = ""
    summary: str = ""


class TokenClaim(_Record):
    key: str
    value: Any = None


class FoundSecret(_Record):
    line: int | None = Field(default=None, ge=1)
    type: str = ""
    snippet: str = ""
    risk: SecretRisk = SecretRisk.CRITICAL
    suggestion: str = ""


class HeaderAnalysis(_Record):
    sender: str = Field(default="N/A", alias="from")
    subject: str = "N/A"
    dkim: str = "N/A"
    spf: str = "N/A"
    dmarc: str = "N/A"
    summary: str = ""


class LinkAnalysis(_Record):
    url: str
    verdict: LinkVerdict = LinkVerdict.SUSPICIOUS
    summary: str = ""


class AttachmentAnalysis(_Record):
    filename: str
    risk: AttachmentRisk = AttachmentRisk.HIGH
    summary: str = ""


class AnalysisResult(_Record):
    """Shared shape: one verdict, one summary, findings that are never null."""

    @property
    @abstractmethod
    def verdict(self) -> Any: ...

    @property
    @abstractmethod
    def summary(self) -> str: ...

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class DomainAnalysisResult(AnalysisResult):
    legitimacy: LegitimacyStatus
    reputation_summary: str = Field(alias="reputationSummary")
    common_aliases: list[str] = Field(default_factory=list, alias="commonAliases")
    observed_formats: list[str] = Field(default_factory=list, alias="observedFormats")
    other_discovered_emails: list[str] = Field(default_factory=list, alias="otherDiscoveredEmails")
    sources_summary: str | None = Field(default=None, alias="sourcesSummary")
    specific_email_analysis: SpecificEmailAnalysis | None = Field(default=None, alias="specificEmailAnalysis")
    sources: list[GroundingSource] = Field(default_factory=list)

    @property
    def verdict(self) -> LegitimacyStatus:
        return self.legitimacy

    @property
    def summary(self) -> str:
        return self.reputation_summary


class ScreenshotAnalysisResult(AnalysisResult):
    overall_verdict: ScreenshotVerdict = Field(alias="overallVerdict")
    analysis_summary: str = Field(alias="analysisSummary")
    red_flags: list[str] = Field(default_factory=list, alias="redFlags")
    grammatical_analysis: GrammaticalAnalysis | None = Field(default=None, alias="grammaticalAnalysis")

    @property
    def verdict(self) -> ScreenshotVerdict:
        return self.overall_verdict

    @property
    def summary(self) -> str:
        return self.analysis_summary


class URLAnalysisResult(AnalysisResult):
    overall_verdict: URLVerdict = Field(alias="overallVerdict")
    analysis_summary: str = Field(alias="analysisSummary")
    red_flags: list[str] = Field(default_factory=list, alias="redFlags")
    certificate_analysis: CertificateAnalysis | None = Field(default=None, alias="certificateAnalysis")
    sources: list[GroundingSource] = Field(default_factory=list)

    @property
    def verdict(self) -> URLVerdict:
        return self.overall_verdict

    @property
    def summary(self) -> str:
        return self.analysis_summary


class TokenAnalysisResult(AnalysisResult):
    overall_verdict: TokenVerdict = Field(alias="overallVerdict")
    analysis_summary: str = Field(alias="analysisSummary")
    security_risks: list[str] = Field(default_factory=list, alias="securityRisks")
    decoded_header: list[TokenClaim] = Field(default_factory=list, alias="decodedHeader")
    decoded_payload: list[TokenClaim] = Field(default_factory=list, alias="decodedPayload")

    @property
    def verdict(self) -> TokenVerdict:
        return self.overall_verdict

    @property
    def summary(self) -> str:
        return self.analysis_summary


class SecretAnalysisResult(AnalysisResult):
    overall_verdict: SecretVerdict = Field(alias="overallVerdict")
    analysis_summary: str = Field(alias="analysisSummary")
    found_secrets: list[FoundSecret] = Field(default_factory=list, alias="foundSecrets")

    @property
    def verdict(self) -> SecretVerdict:
        return self.overall_verdict

    @property
    def summary(self) -> str:
        return self.analysis_summary


class RawEmailAnalysisResult(AnalysisResult):
    overall_verdict: RawEmailVerdict = Field(alias="overallVerdict")
    analysis_summary: str = Field(alias="analysisSummary")
    red_flags: list[str] = Field(default_factory=list, alias="redFlags")
    header_analysis: HeaderAnalysis = Field(default_factory=HeaderAnalysis, alias="headerAnalysis")
    links: list[LinkAnalysis] = Field(default_factory=list)
    attachments: list[AttachmentAnalysis] = Field(default_factory=list)

    @property
    def verdict(self) -> RawEmailVerdict:
        return self.overall_verdict

    @property
    def summary(self) -> str:
        return self.analysis_summary
