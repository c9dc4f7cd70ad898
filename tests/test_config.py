"""Configuration validation tests."""

import pytest
from pydantic import ValidationError

from wprest.config import AuthMode, ClientConfig
from wprest.errors import ConfigurationError, ErrorKind

from tests.conftest import BASIC, ENDPOINT, TOKEN


class TestAuthModeSelection:
    def test_token_credentials_select_token_mode(self):
        config = ClientConfig(endpoint=ENDPOINT, **TOKEN)
        assert config.auth_mode is AuthMode.TOKEN

    def test_basic_credentials_select_basic_mode(self):
        config = ClientConfig(endpoint=ENDPOINT, **BASIC)
        assert config.auth_mode is AuthMode.BASIC

    def test_token_wins_when_both_are_complete(self):
        config = ClientConfig(endpoint=ENDPOINT, **TOKEN, **BASIC)
        assert config.auth_mode is AuthMode.TOKEN

    def test_incomplete_token_falls_back_to_basic(self):
        config = ClientConfig(
            endpoint=ENDPOINT, client_key="ck", client_secret="cs", **BASIC
        )
        assert config.auth_mode is AuthMode.BASIC

    def test_token_secret_is_optional(self):
        config = ClientConfig(
            endpoint=ENDPOINT, client_key="ck", client_secret="cs", access_token="at"
        )
        assert config.auth_mode is AuthMode.TOKEN
        assert config.access_token_secret is None


class TestValidation:
    def test_missing_credentials_raise(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig(endpoint=ENDPOINT)
        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert "username and password" in exc_info.value.message

    def test_incomplete_token_without_basic_raises(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(endpoint=ENDPOINT, client_key="ck", access_token="at")

    def test_password_without_username_raises(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(endpoint=ENDPOINT, password="secret")

    def test_empty_endpoint_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig(endpoint="  ", **BASIC)
        assert exc_info.value.message == "Specify valid endpoint."

    def test_omitted_endpoint_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig(username="admin", password="secret")
        assert exc_info.value.message == "Specify valid endpoint."

    def test_negative_retry_attempts_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(endpoint=ENDPOINT, max_retry_attempts=-1, **BASIC)

    def test_defaults(self):
        config = ClientConfig(endpoint=ENDPOINT + "/", **BASIC)
        assert config.endpoint == ENDPOINT
        assert config.max_retry_attempts == 5
        assert config.timeout == 30.0

    def test_config_is_immutable(self):
        config = ClientConfig(endpoint=ENDPOINT, **BASIC)
        with pytest.raises(ValidationError):
            config.username = "other"


class TestSecrets:
    def test_repr_hides_credentials(self):
        config = ClientConfig(endpoint=ENDPOINT, username="admin", password="hunter2")
        assert "hunter2" not in repr(config)
        assert config.password.get_secret_value() == "hunter2"

    def test_repr_hides_token_credentials(self):
        config = ClientConfig(endpoint=ENDPOINT, **TOKEN)
        text = repr(config)
        for name in ("client_secret", "access_token", "access_token_secret"):
            assert TOKEN[name] not in text

    def test_empty_password_counts_as_missing(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(endpoint=ENDPOINT, username="admin", password="")


class TestFromEnv:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "ENDPOINT",
            "CLIENT_KEY",
            "CLIENT_SECRET",
            "ACCESS_TOKEN",
            "ACCESS_TOKEN_SECRET",
            "USERNAME",
            "PASSWORD",
            "MAX_RETRY_ATTEMPTS",
            "TIMEOUT",
        ):
            monkeypatch.delenv(f"WP_API_{name}", raising=False)
            monkeypatch.delenv(f"BLOG_{name}", raising=False)

    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("WP_API_ENDPOINT", ENDPOINT)
        monkeypatch.setenv("WP_API_USERNAME", "admin")
        monkeypatch.setenv("WP_API_PASSWORD", "secret")
        monkeypatch.setenv("WP_API_MAX_RETRY_ATTEMPTS", "2")

        config = ClientConfig.from_env()

        assert config.endpoint == ENDPOINT
        assert config.auth_mode is AuthMode.BASIC
        assert config.password.get_secret_value() == "secret"
        assert config.max_retry_attempts == 2
        assert config.timeout == 30.0

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("BLOG_ENDPOINT", ENDPOINT)
        monkeypatch.setenv("BLOG_CLIENT_KEY", "ck")
        monkeypatch.setenv("BLOG_CLIENT_SECRET", "cs")
        monkeypatch.setenv("BLOG_ACCESS_TOKEN", "at")

        config = ClientConfig.from_env(prefix="BLOG_")

        assert config.auth_mode is AuthMode.TOKEN
        assert config.access_token.get_secret_value() == "at"

    def test_empty_variables_use_defaults(self, monkeypatch):
        monkeypatch.setenv("WP_API_ENDPOINT", ENDPOINT)
        monkeypatch.setenv("WP_API_USERNAME", "admin")
        monkeypatch.setenv("WP_API_PASSWORD", "secret")
        monkeypatch.setenv("WP_API_MAX_RETRY_ATTEMPTS", "")

        assert ClientConfig.from_env().max_retry_attempts == 5

    def test_missing_endpoint_raises(self, monkeypatch):
        monkeypatch.setenv("WP_API_USERNAME", "u")
        monkeypatch.setenv("WP_API_PASSWORD", "p")

        with pytest.raises(ConfigurationError) as exc_info:
            ClientConfig.from_env()

        assert exc_info.value.message == "Specify valid endpoint."
