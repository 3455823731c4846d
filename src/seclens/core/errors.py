"""Exception types surfaced to callers of the analysis service."""


class SeclensError(Exception):
    """Base exception for seclens."""


class InputRejectedError(SeclensError):
    """Raised when user input fails the per-tool pre-checks."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class BackendUnavailableError(SeclensError):
    """Raised when the analysis backend cannot be reached or answers with an error."""
