"""Map HTTP responses to error kinds and retry dispositions."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from wprest.errors import ErrorKind, RetryDisposition, WordpressApiError

logger = logging.getLogger(__name__)

NONCE_ALREADY_USED = "json_oauth1_nonce_already_used"
TERM_EXISTS = "term_exists"


@dataclass(frozen=True)
class Classification:
    kind: ErrorKind
    disposition: RetryDisposition
    message: str

    @property
    def retryable(self) -> bool:
        return self.disposition is not RetryDisposition.FATAL


def _fatal(kind: ErrorKind, message: str) -> Classification:
    return Classification(kind, RetryDisposition.FATAL, message)


def classify(
    status_code: int,
    body: Optional[Any] = None,
    *,
    method: str = "",
    url: str = "",
) -> Optional[Classification]:
    """Classify a response status plus its decoded error body.

    Returns ``None`` for 2xx responses. ``body`` is only consulted for 401
    and 500, where the WordPress error ``code`` selects a sub-case.
    """
    if 200 <= status_code < 300:
        return None

    code = body.get("code") if isinstance(body, dict) else None
    remote_message = body.get("message") if isinstance(body, dict) else None

    if status_code == 304:
        return _fatal(ErrorKind.NOT_MODIFIED, "Not Modified.")
    if status_code == 400:
        return _fatal(ErrorKind.BAD_REQUEST, f"Bad Request: request {url} was invalid.")
    if status_code == 401:
        if code == NONCE_ALREADY_USED:
            message = remote_message or json.dumps(body)
            return Classification(
                ErrorKind.NONCE_REUSED, RetryDisposition.RETRYABLE, f"{message} {url}"
            )
        return _fatal(
            ErrorKind.UNAUTHORIZED,
            f"Unauthorized: user does not have permission to access {url}",
        )
    if status_code == 403:
        return _fatal(
            ErrorKind.FORBIDDEN, f"Forbidden: request not authenticated accessing {url}"
        )
    if status_code == 404:
        return _fatal(ErrorKind.NOT_FOUND, f"No data found: route {url} does not exist.")
    if status_code == 405:
        return _fatal(
            ErrorKind.METHOD_NOT_ALLOWED,
            f"Method Not Allowed: incorrect HTTP method {method} provided.",
        )
    if status_code == 415:
        return _fatal(
            ErrorKind.UNSUPPORTED_MEDIA,
            f"Unsupported Media Type (incorrect HTTP method {method} provided).",
        )
    if status_code == 429:
        return Classification(
            ErrorKind.RATE_LIMITED,
            RetryDisposition.RATE_LIMITED,
            "Too many requests: client is rate limited.",
        )
    if status_code == 500:
        if code == TERM_EXISTS:
            return _fatal(ErrorKind.ITEM_EXISTS, remote_message or "Internal server error.")
        return _fatal(ErrorKind.SERVER_ERROR, "Internal server error.")
    if status_code == 502:
        return Classification(
            ErrorKind.BAD_GATEWAY,
            RetryDisposition.RETRYABLE,
            "Bad Gateway error: server has an issue.",
        )
    return _fatal(ErrorKind.UNKNOWN_STATUS, f"Unknown code {status_code} for URL {url}")


def decode_error_body(response: httpx.Response) -> Optional[Any]:
    """Decoded JSON body, or ``None`` when the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug("Non-JSON error body from %s", response.request.url)
        return None


def _retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None


def error_for_response(response: httpx.Response) -> Optional[WordpressApiError]:
    """Classify ``response`` and build the matching error, or ``None`` on success."""
    request = response.request
    body = None if response.is_success else decode_error_body(response)
    classification = classify(
        response.status_code, body, method=request.method, url=str(request.url)
    )
    if classification is None:
        return None
    logger.debug(
        "%s %s -> %s (%s)",
        request.method,
        request.url,
        response.status_code,
        classification.kind.value,
    )
    return WordpressApiError(
        classification.kind,
        classification.message,
        disposition=classification.disposition,
        status_code=response.status_code,
        method=request.method,
        url=str(request.url),
        code=body.get("code") if isinstance(body, dict) else None,
        details=body,
        retry_after=_retry_after(response)
        if classification.disposition is RetryDisposition.RATE_LIMITED
        else None,
    )
