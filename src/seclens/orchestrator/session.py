"""Per-tool request state with stale-completion protection."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from seclens.core.errors import BackendUnavailableError, InputRejectedError
from seclens.domain.results import AnalysisResult
from seclens.domain.verdicts import AnalysisKind
from seclens.orchestrator.service import AnalysisService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolState:
    result: AnalysisResult | None = None
    error: str | None = None
    busy: bool = False
    request_id: int = 0


class ToolSession:
    """One tool's displayed state.

    Every submission that passes validation gets the next request id. Only the
    completion carrying the latest id may update `state`; older completions are
    dropped, so a slow stale response never overwrites a fresher one.
    """

    def __init__(self, service: AnalysisService, kind: AnalysisKind | str) -> None:
        self.service = service
        self.kind = AnalysisKind(kind)
        self.state = ToolState()
        self._latest_id = 0

    def _is_latest(self, request_id: int) -> bool:
        return request_id == self._latest_id

    async def submit(self, raw: str) -> ToolState:
        try:
            prepared = self.service.prepare(self.kind, raw)
        except InputRejectedError as exc:
            self.state = replace(self.state, error=exc.reason)
            return self.state

        self._latest_id += 1
        request_id = self._latest_id
        self.state = ToolState(busy=True, request_id=request_id)

        result: AnalysisResult | None = None
        error: str | None = None
        try:
            result = await self.service.execute(prepared)
        except BackendUnavailableError as exc:
            error = str(exc)
        finally:
            if self._is_latest(request_id):
                self.state = ToolState(result=result, error=error, busy=False, request_id=request_id)
            else:
                logger.info(
                    "discarding stale %s completion %d (latest is %d)",
                    self.kind.value,
                    request_id,
                    self._latest_id,
                )
        return self.state
