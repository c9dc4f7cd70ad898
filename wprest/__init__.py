"""wprest -- authenticated client for the WordPress REST API."""

import logging

from wprest.client import WordpressClient
from wprest.config import AuthMode, ClientConfig
from wprest.errors import (
    ConfigurationError,
    ErrorKind,
    RetryDisposition,
    WordpressApiError,
)
from wprest.models import ApiResult, PageInfo
from wprest.request import Context, Operation
from wprest.retry import RetryPolicy

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "WordpressClient",
    "ClientConfig",
    "AuthMode",
    "WordpressApiError",
    "ConfigurationError",
    "ErrorKind",
    "RetryDisposition",
    "ApiResult",
    "PageInfo",
    "Context",
    "Operation",
    "RetryPolicy",
]
