"""Client configuration and authentication mode selection."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wprest.errors import ConfigurationError


class AuthMode(str, Enum):
    TOKEN = "token"
    BASIC = "basic"


def _secret(value: Optional[SecretStr]) -> str:
    return value.get_secret_value() if value is not None else ""


class ClientConfig(BaseModel):
    """Immutable settings for a :class:`~wprest.client.WordpressClient`.

    Either ``client_key``, ``client_secret`` and ``access_token`` (OAuth1) or
    ``username`` and ``password`` (Basic auth, development only) must be set.
    When both sets are complete OAuth1 is used.
    """

    endpoint: str = ""
    client_key: Optional[str] = None
    client_secret: Optional[SecretStr] = None
    access_token: Optional[SecretStr] = None
    access_token_secret: Optional[SecretStr] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    max_retry_attempts: int = Field(default=5, ge=0)
    timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}

    @field_validator("endpoint")
    @classmethod
    def _strip_endpoint(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @model_validator(mode="after")
    def _check_credentials(self) -> "ClientConfig":
        if not self.endpoint:
            raise ConfigurationError("Specify valid endpoint.")
        if self._has_token_credentials() or self._has_basic_credentials():
            return self
        raise ConfigurationError(
            "Either specify client_key, client_secret & access_token for OAuth1 "
            "or username and password for basic auth."
        )

    def _has_token_credentials(self) -> bool:
        return bool(
            self.client_key
            and _secret(self.client_secret)
            and _secret(self.access_token)
        )

    def _has_basic_credentials(self) -> bool:
        return bool(self.username and _secret(self.password))

    @property
    def auth_mode(self) -> AuthMode:
        if self._has_token_credentials():
            return AuthMode.TOKEN
        return AuthMode.BASIC

    @classmethod
    def from_env(cls, prefix: str = "WP_API_") -> "ClientConfig":
        """Build a config from ``{prefix}ENDPOINT``, ``{prefix}USERNAME`` etc.

        Unset or empty variables fall back to the field defaults.
        """
        settings = ClientSettings(_env_prefix=prefix)
        return cls.model_validate(settings.model_dump(exclude_none=True))


class ClientSettings(BaseSettings):
    """Raw client settings read from the environment.

    Validation happens in :class:`ClientConfig`; this class only collects
    what is set.
    """

    model_config = SettingsConfigDict(
        env_prefix="WP_API_",
        env_ignore_empty=True,
        extra="ignore",
    )

    endpoint: str = ""
    client_key: Optional[str] = None
    client_secret: Optional[SecretStr] = None
    access_token: Optional[SecretStr] = None
    access_token_secret: Optional[SecretStr] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    max_retry_attempts: Optional[int] = None
    timeout: Optional[float] = None
