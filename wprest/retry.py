"""Bounded retry loop with exponential backoff for transient failures."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from wprest.config import ClientConfig
from wprest.errors import ErrorKind, RetryDisposition, WordpressApiError

logger = logging.getLogger(__name__)

# Transport failures where the connection dropped mid-transfer; sending again
# is safe to try.
CONNECTION_RESET_ERRORS: tuple[type[httpx.TransportError], ...] = (
    httpx.ReadError,
    httpx.RemoteProtocolError,
)


@dataclass
class RetryPolicy:
    """Configuration for bounded retry with exponential backoff."""

    max_retries: int = 5
    base_delay: float = 0.5  # seconds
    max_delay: float = 10.0  # seconds

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: float) -> "RetryPolicy":
        return cls(max_retries=config.max_retry_attempts, **kwargs)

    def get_delay(self, attempt: int, retry_after: Optional[float] = None) -> float:
        """Calculate delay before the given retry (0-indexed).

        A server supplied ``Retry-After`` replaces the backoff, still capped
        at ``max_delay``.
        """
        if retry_after is not None:
            return min(retry_after, self.max_delay)
        delay = self.base_delay * (2**attempt)
        return min(delay, self.max_delay)


@dataclass
class Attempt:
    """Outcome of one send: exactly one of ``response`` and ``error`` is set."""

    response: Optional[httpx.Response] = None
    error: Optional[WordpressApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def transport_error(
    exc: httpx.TransportError, request: httpx.Request
) -> WordpressApiError:
    """Wrap an httpx transport failure, retryable only for dropped connections."""
    if isinstance(exc, CONNECTION_RESET_ERRORS):
        kind, disposition = ErrorKind.CONNECTION_RESET, RetryDisposition.RETRYABLE
        message = f"Connection reset while requesting {request.url}: {exc}"
    else:
        kind, disposition = ErrorKind.TRANSPORT, RetryDisposition.FATAL
        message = f"Transport error requesting {request.url}: {exc}"
    error = WordpressApiError(
        kind,
        message,
        disposition=disposition,
        method=request.method,
        url=str(request.url),
    )
    error.__cause__ = exc
    return error


def run_with_retry(
    attempt: Callable[[], Attempt],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> httpx.Response:
    """Call ``attempt`` until it succeeds, fails fatally, or retries run out.

    Args:
        attempt: Sends the request once and reports the outcome.
        policy: Retry policy configuration.
        sleep: Called with the delay before each retry.

    Returns:
        The successful response.

    Raises:
        WordpressApiError: The fatal error, or the last transient error
            escalated to fatal once ``policy.max_retries`` is exceeded.
    """
    retries = 0
    while True:
        outcome = attempt()
        if outcome.ok:
            return outcome.response

        error = outcome.error
        if error.disposition is RetryDisposition.FATAL:
            raise error

        retries += 1
        if retries > policy.max_retries:
            logger.warning(
                "Giving up on %s %s after %d attempts: %s",
                error.method,
                error.url,
                retries,
                error.message,
            )
            raise error.escalate(retries)

        delay = policy.get_delay(retries - 1, error.retry_after)
        logger.warning(
            "Retrying %s %s (%s, retry %d/%d) in %.2fs",
            error.method,
            error.url,
            error.kind.value,
            retries,
            policy.max_retries,
            delay,
        )
        if delay > 0:
            sleep(delay)
