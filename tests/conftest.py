from __future__ import annotations

import os

import pytest

from seclens.agents.contracts import BackendResponse, RawCitation

_ISOLATED_ENV = ("GEMINI_API_KEY", "API_KEY")


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("SECLENS_") or name in _ISOLATED_ENV:
            monkeypatch.delenv(name, raising=False)


class FakeInvoker:
    name = "fake"

    def __init__(
        self,
        text: str = "",
        citations: list[RawCitation] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.text = text
        self.citations = citations or []
        self.error = error
        self.requests = []

    async def invoke(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return BackendResponse(text=self.text, citations=self.citations)


@pytest.fixture
def fake_invoker():
    def _make(text: str = "", **kwargs) -> FakeInvoker:
        return FakeInvoker(text, **kwargs)

    return _make
