"""Structured contracts for backend I/O."""

from __future__ import annotations

import base64

from pydantic import BaseModel, ConfigDict, Field

from seclens.domain.verdicts import AnalysisKind


class ImagePart(BaseModel):
    """Binary image attachment sent alongside a prompt."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: bytes

    def b64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class AnalysisRequest(BaseModel):
    """One backend call: instructions, optional image, optional web grounding."""

    model_config = ConfigDict(frozen=True)

    kind: AnalysisKind
    prompt: str
    enable_grounding: bool = False
    image: ImagePart | None = None


class RawCitation(BaseModel):
    uri: str | None = None
    title: str | None = None


class BackendResponse(BaseModel):
    text: str = ""
    citations: list[RawCitation] = Field(default_factory=list)
