"""KITE client errors.

Every failed call surfaces as exactly one of two kinds:

- KiteApiError: the orchestrator answered with a failure, either through the
  HTTP status or an explicit ``success: false`` envelope.
- KiteNetworkError: the orchestrator was not reached or did not answer in time.

Callers branch on the kind first, then on ``status_code`` ranges.
"""

from typing import Any, Optional


class KiteError(Exception):
    """Base class for classifiable client failures."""

    status_code: Optional[int] = None
    raw: Any = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class KiteApiError(KiteError):
    """Raised when the KITE API returns an error (4xx/5xx or success: false).

    Attributes:
        status_code: HTTP status, or the status declared by the envelope
        message: Error message from the API or a safe fallback
        code: Optional machine-readable error code
        raw: Parsed envelope or raw response text, kept verbatim for debugging
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        raw: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.raw = raw

    @property
    def is_client_error(self) -> bool:
        """Whether this is a client error (4xx)."""
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        """Whether this is a server error (5xx)."""
        return self.status_code >= 500

    @property
    def is_auth_error(self) -> bool:
        """Whether this is an auth error (401/403)."""
        return self.status_code in (401, 403)

    @property
    def is_not_found(self) -> bool:
        """Whether the requested resource does not exist (404)."""
        return self.status_code == 404

    def __repr__(self) -> str:
        return f"KiteApiError(status_code={self.status_code}, message={self.message!r})"


class KiteNetworkError(KiteError):
    """Raised when the request fails before reaching the API (network, timeout, etc.)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def __repr__(self) -> str:
        return f"KiteNetworkError(message={self.message!r})"
