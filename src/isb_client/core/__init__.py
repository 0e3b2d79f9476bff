"""Core client components."""

from isb_client.core.config import ClientConfig, get_config, reset_config
from isb_client.core.exceptions import (
    ISBError,
    APIRequestError,
    APIResponseError,
    JSONDecodingError,
)
from isb_client.core.logging import get_logger, setup_logging

__all__ = [
    "ClientConfig",
    "get_config",
    "reset_config",
    "ISBError",
    "APIRequestError",
    "APIResponseError",
    "JSONDecodingError",
    "get_logger",
    "setup_logging",
]
