"""Building outbound requests for the CRUD operations."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Union

import httpx


class Operation(str, Enum):
    READ = "GET"
    CREATE = "POST"
    UPDATE = "PUT"
    DELETE = "DELETE"

    @property
    def method(self) -> str:
        return self.value


class Context(str, Enum):
    """Field visibility requested from the API."""

    VIEW = "view"
    EDIT = "edit"


ContextLike = Union[Context, str]


def _context_value(context: ContextLike) -> str:
    # Unknown values are left for the API to reject.
    return context.value if isinstance(context, Context) else context


def normalize_path(endpoint: str, path: str) -> str:
    """Make ``path`` relative to ``endpoint``.

    Full resource URLs (e.g. the ``_links`` returned by the API) are accepted
    by stripping the endpoint prefix.
    """
    endpoint = endpoint.rstrip("/")
    if path == endpoint:
        path = ""
    elif path.startswith(endpoint + "/"):
        path = path[len(endpoint) + 1:]
    return path.lstrip("/")


def read_params(
    context: ContextLike = Context.VIEW,
    page: Optional[int] = None,
    page_length: int = 10,
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "context": _context_value(context),
        "per_page": page_length,
    }
    # The API treats a missing page differently from page=1.
    if page is not None:
        params["page"] = page
    return params


def write_params(
    context: ContextLike = Context.VIEW,
    data: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    params = dict(data or {})
    params["context"] = _context_value(context)
    return params


def build_request(
    http_client: httpx.Client,
    endpoint: str,
    operation: Operation,
    path: str,
    params: Mapping[str, Any],
) -> httpx.Request:
    """Build (but do not send) the request for ``operation`` on ``path``.

    Reads carry ``params`` in the query string, writes as a JSON body.
    """
    url = f"{endpoint.rstrip('/')}/{normalize_path(endpoint, path)}"
    if operation is Operation.READ:
        return http_client.build_request(operation.method, url, params=dict(params))
    return http_client.build_request(operation.method, url, json=dict(params))
