"""Shared pytest fixtures for wprest tests."""

import httpx

from wprest.client import WordpressClient
from wprest.config import ClientConfig
from wprest.retry import RetryPolicy

ENDPOINT = "https://x.test/wp-json"

BASIC = {"username": "admin", "password": "secret"}
TOKEN = {
    "client_key": "ck_123",
    "client_secret": "cs_456",
    "access_token": "at_789",
    "access_token_secret": "ats_000",
}


def make_config(**kwargs) -> ClientConfig:
    values = {"endpoint": ENDPOINT, **BASIC}
    values.update(kwargs)
    return ClientConfig(**values)


def make_response(status_code: int, body=None, headers=None) -> httpx.Response:
    """Create an httpx.Response from status and body dict."""
    if body is None:
        return httpx.Response(status_code=status_code, headers=headers)
    return httpx.Response(status_code=status_code, json=body, headers=headers)


def make_client(handler, config=None, **kwargs) -> WordpressClient:
    """Create a WordpressClient on an httpx MockTransport, with no retry delay."""
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    kwargs.setdefault("retry_policy", RetryPolicy(max_retries=5, base_delay=0.0))
    return WordpressClient(config or make_config(), http_client=http_client, **kwargs)


class Recorder:
    """MockTransport handler that replays responses and records requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            item = self.responses.pop(0)
        else:
            item = self.responses[0]
        if isinstance(item, Exception):
            raise item
        # Fresh copy so a repeated response is never sent twice.
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)
