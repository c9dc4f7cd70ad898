"""WordPress REST API client for reading and writing resources."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterator, Mapping, Optional

import httpx

from wprest.auth import Authenticator, build_authenticator
from wprest.classifier import error_for_response
from wprest.config import AuthMode, ClientConfig
from wprest.models import ApiResult, PageInfo
from wprest.request import (
    Context,
    ContextLike,
    Operation,
    build_request,
    read_params,
    write_params,
)
from wprest.retry import Attempt, RetryPolicy, run_with_retry, transport_error

logger = logging.getLogger(__name__)


class WordpressClient:
    """Client for a WordPress REST API (``/wp-json``) endpoint.

    Every operation blocks until it succeeds or fails and returns an
    :class:`ApiResult`. The last successful result is also kept on the
    client, so run one operation at a time per instance.

    Usage:
        config = ClientConfig(endpoint="https://example.org/wp-json", username="u", password="p")
        with WordpressClient(config) as client:
            posts = client.read("wp/v2/posts", page=2)
            print(posts.page_info.total_pages, posts.as_dict())
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        http_client: Optional[httpx.Client] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._config = config
        self._authenticator: Authenticator = build_authenticator(config)
        self._retry_policy = retry_policy or RetryPolicy.from_config(config)
        self._sleep = sleep or time.sleep
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=config.timeout, follow_redirects=True
        )
        self._last_result: Optional[ApiResult] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @property
    def auth_mode(self) -> AuthMode:
        return self._authenticator.mode

    def __enter__(self) -> "WordpressClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._owns_client:
            self._client.close()

    # -----------------------------------------------------------------
    # Internal HTTP helpers
    # -----------------------------------------------------------------

    def _send_once(self, request: httpx.Request) -> Attempt:
        signed = self._authenticator.sign(request)
        logger.debug("%s %s", signed.method, signed.url)
        try:
            response = self._client.send(signed)
        except httpx.TransportError as exc:
            return Attempt(error=transport_error(exc, signed))
        error = error_for_response(response)
        if error is not None:
            return Attempt(error=error)
        return Attempt(response=response)

    def _execute(
        self, operation: Operation, path: str, params: Mapping[str, Any]
    ) -> ApiResult:
        request = build_request(self._client, self.endpoint, operation, path, params)
        response = run_with_retry(
            lambda: self._send_once(request), self._retry_policy, sleep=self._sleep
        )
        result = ApiResult.from_response(response)
        self._last_result = result
        return result

    # -----------------------------------------------------------------
    # Resource operations
    # -----------------------------------------------------------------

    def read(
        self,
        path: str,
        context: ContextLike = Context.VIEW,
        page: Optional[int] = None,
        page_length: int = 10,
    ) -> ApiResult:
        """GET a resource or one page of a collection.

        Args:
            path: Resource path relative to the endpoint, or a full URL under it.
            context: ``view`` or ``edit``.
            page: Page number; omitted from the query when ``None``.
            page_length: Sent as ``per_page``.
        """
        return self._execute(
            Operation.READ, path, read_params(context, page, page_length)
        )

    def create(
        self,
        path: str,
        context: ContextLike = Context.VIEW,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ApiResult:
        """POST ``data`` to a collection. ``context`` overrides any key in ``data``."""
        return self._execute(Operation.CREATE, path, write_params(context, data))

    def update(
        self,
        path: str,
        context: ContextLike = Context.VIEW,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ApiResult:
        """PUT ``data`` to a resource."""
        return self._execute(Operation.UPDATE, path, write_params(context, data))

    def delete(
        self,
        path: str,
        context: ContextLike = Context.VIEW,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ApiResult:
        """DELETE a resource, e.g. ``data={"force": True}`` to skip the trash."""
        return self._execute(Operation.DELETE, path, write_params(context, data))

    def iter_pages(
        self,
        path: str,
        context: ContextLike = Context.VIEW,
        page_length: int = 10,
        *,
        start_page: int = 1,
        max_pages: Optional[int] = None,
    ) -> Iterator[ApiResult]:
        """Read a collection page by page.

        Stops after the last page reported by ``X-WP-TotalPages`` (or after
        the first page when the header is missing), on an empty page, or
        after ``max_pages`` pages.
        """
        page = start_page
        fetched = 0
        while max_pages is None or fetched < max_pages:
            result = self.read(path, context, page=page, page_length=page_length)
            fetched += 1
            if not result.as_dict():
                return
            yield result
            total_pages = result.page_info.total_pages
            if total_pages is None or page >= total_pages:
                return
            page += 1

    # -----------------------------------------------------------------
    # Last result accessors
    # -----------------------------------------------------------------

    @property
    def last_result(self) -> Optional[ApiResult]:
        """Result of the last successful call; failed calls leave it unchanged."""
        return self._last_result

    @property
    def page_info(self) -> PageInfo:
        if self._last_result is None:
            return PageInfo()
        return self._last_result.page_info

    def as_dict(self) -> Any:
        if self._last_result is None:
            return None
        return self._last_result.as_dict()

    def as_object(self) -> Any:
        if self._last_result is None:
            return None
        return self._last_result.as_object()

    def as_raw(self) -> Optional[bytes]:
        if self._last_result is None:
            return None
        return self._last_result.as_raw()
