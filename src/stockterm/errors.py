"""Error types for the quote/bar fetch layer."""

from __future__ import annotations

from enum import Enum


class FetchErrorCode(Enum):
    """Error classification codes."""

    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    PROVIDER_ERROR = "provider_error"
    PARSE_FAILED = "parse_failed"
    NO_DATA = "no_data"


class FetchError(Exception):
    """Fetch-layer exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller should retry with another provider.
    """

    def __init__(
        self,
        message: str,
        code: FetchErrorCode = FetchErrorCode.PROVIDER_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable
