"""Request signing for the two supported authentication modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

import httpx
from authlib.integrations.httpx_client import OAuth1Auth

from wprest.config import AuthMode, ClientConfig


def _apply(auth: httpx.Auth, request: httpx.Request) -> httpx.Request:
    flow = auth.sync_auth_flow(request)
    try:
        return next(flow)
    finally:
        flow.close()


@dataclass(frozen=True)
class TokenAuthenticator:
    """OAuth1 signed requests (WordPress OAuth1 plugin).

    Every call to :meth:`sign` gets a new nonce and timestamp, so a request
    rejected for nonce reuse can simply be signed and sent again.
    """

    client_key: str
    client_secret: str = field(repr=False)
    access_token: str = field(repr=False)
    access_token_secret: Optional[str] = field(default=None, repr=False)
    _auth: OAuth1Auth = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_auth",
            OAuth1Auth(
                self.client_key,
                client_secret=self.client_secret,
                token=self.access_token,
                token_secret=self.access_token_secret,
            ),
        )

    @property
    def mode(self) -> AuthMode:
        return AuthMode.TOKEN

    def sign(self, request: httpx.Request) -> httpx.Request:
        # authlib rebuilds non form-encoded requests with an empty body, so
        # sign a copy and carry over only the Authorization header.
        unsigned = httpx.Request(
            request.method,
            request.url,
            headers=request.headers.copy(),
            content=request.read(),
        )
        signed = _apply(self._auth, unsigned)
        request.headers["Authorization"] = signed.headers["Authorization"]
        return request


@dataclass(frozen=True)
class BasicAuthenticator:
    """Static ``Authorization: Basic`` header. Not meant for production sites."""

    username: str
    password: str = field(repr=False)

    @property
    def mode(self) -> AuthMode:
        return AuthMode.BASIC

    def sign(self, request: httpx.Request) -> httpx.Request:
        return _apply(httpx.BasicAuth(self.username, self.password), request)


Authenticator = Union[TokenAuthenticator, BasicAuthenticator]


def build_authenticator(config: ClientConfig) -> Authenticator:
    """Pick the authenticator for ``config.auth_mode``."""
    if config.auth_mode is AuthMode.TOKEN:
        return TokenAuthenticator(
            client_key=config.client_key,
            client_secret=config.client_secret.get_secret_value(),
            access_token=config.access_token.get_secret_value(),
            access_token_secret=config.access_token_secret.get_secret_value()
            if config.access_token_secret is not None
            else None,
        )
    return BasicAuthenticator(
        username=config.username, password=config.password.get_secret_value()
    )
