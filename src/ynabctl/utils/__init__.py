"""Utility modules."""
from .logger import get_logger, setup_logging, set_budget_context
from .exceptions import (
    YnabctlError,
    ConfigError,
    UsageError,
    NetworkError,
    UnexpectedResponseError,
    APIError,
    DecodeError
)

__all__ = [
    "get_logger",
    "setup_logging",
    "set_budget_context",
    "YnabctlError",
    "ConfigError",
    "UsageError",
    "NetworkError",
    "UnexpectedResponseError",
    "APIError",
    "DecodeError"
]
