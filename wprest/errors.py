"""Error types for the WordPress REST API client."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """What went wrong with a request."""

    NOT_MODIFIED = "not_modified"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NONCE_REUSED = "nonce_reused"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    UNSUPPORTED_MEDIA = "unsupported_media"
    RATE_LIMITED = "rate_limited"
    ITEM_EXISTS = "item_exists"
    SERVER_ERROR = "server_error"
    BAD_GATEWAY = "bad_gateway"
    UNKNOWN_STATUS = "unknown_status"
    CONNECTION_RESET = "connection_reset"
    TRANSPORT = "transport"
    CONFIGURATION = "configuration"


class RetryDisposition(str, Enum):
    """How the retry loop treats an error."""

    FATAL = "fatal"
    RETRYABLE = "retryable"
    RATE_LIMITED = "rate_limited"


class WordpressApiError(Exception):
    """Error from the WordPress REST API, the transport or client-side validation."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        disposition: RetryDisposition = RetryDisposition.FATAL,
        status_code: int = 0,
        method: Optional[str] = None,
        url: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.disposition = disposition
        self.status_code = status_code
        self.method = method
        self.url = url
        self.code = code
        self.details = details
        self.retry_after = retry_after
        self.attempts = 1

    @property
    def retryable(self) -> bool:
        return self.disposition is not RetryDisposition.FATAL

    def escalate(self, attempts: int) -> "WordpressApiError":
        """Return a fatal copy of this error after retries ran out.

        Kind and message are kept so the caller sees the last transient
        failure, not a generic "gave up" error.
        """
        escalated = WordpressApiError(
            self.kind,
            self.message,
            disposition=RetryDisposition.FATAL,
            status_code=self.status_code,
            method=self.method,
            url=self.url,
            code=self.code,
            details=self.details,
        )
        escalated.attempts = attempts
        escalated.__cause__ = self.__cause__
        return escalated

    def __repr__(self) -> str:
        return (
            f"WordpressApiError(kind={self.kind.value!r}, message={self.message!r}, "
            f"status_code={self.status_code}, disposition={self.disposition.value!r})"
        )


class ConfigurationError(WordpressApiError):
    """Raised when a client is configured without a usable endpoint or credentials."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.CONFIGURATION, message)
