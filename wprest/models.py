"""Pydantic v2 models for WordPress REST API results."""

from __future__ import annotations

import json
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field

TOTAL_HEADER = "X-WP-Total"
TOTAL_PAGES_HEADER = "X-WP-TotalPages"
ALLOW_HEADER = "Allow"


def _int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class PageInfo(BaseModel):
    """Pagination metadata sent with collection responses."""

    total_records: Optional[int] = None
    total_pages: Optional[int] = None
    allow_methods: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "PageInfo":
        allow = headers.get(ALLOW_HEADER) or ""
        return cls(
            total_records=_int_header(headers, TOTAL_HEADER),
            total_pages=_int_header(headers, TOTAL_PAGES_HEADER),
            allow_methods=[m.strip().upper() for m in allow.split(",") if m.strip()],
        )


class ApiResult(BaseModel):
    """Body, headers and paging info of a successful call."""

    status_code: int
    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    content: bytes = b""
    page_info: PageInfo = Field(default_factory=PageInfo)

    model_config = {"frozen": True}

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiResult":
        # httpx.Headers is case-insensitive, a plain dict is not.
        headers = response.headers
        return cls(
            status_code=response.status_code,
            method=response.request.method,
            url=str(response.request.url),
            headers=dict(headers.items()),
            content=response.content,
            page_info=PageInfo.from_headers(headers),
        )

    def as_dict(self) -> Any:
        """Decoded JSON body with plain dicts and lists, or ``None`` if empty."""
        if not self.content:
            return None
        return json.loads(self.content)

    def as_object(self) -> Any:
        """Decoded JSON body with objects as attribute namespaces."""
        if not self.content:
            return None
        return json.loads(self.content, object_hook=lambda d: SimpleNamespace(**d))

    def as_raw(self) -> bytes:
        return self.content
