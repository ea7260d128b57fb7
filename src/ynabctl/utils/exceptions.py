"""Custom exception classes for ynabctl."""
from typing import Optional


class YnabctlError(Exception):
    """Base exception for ynabctl."""
    pass


class ConfigError(YnabctlError):
    """Configuration-related errors."""
    pass


class UsageError(YnabctlError):
    """Missing or invalid command-line input."""
    pass


class NetworkError(YnabctlError):
    """Transport-level failures (connect, DNS, timeout)."""
    pass


class UnexpectedResponseError(NetworkError):
    """Error status whose body is not a YNAB error envelope."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error: {body} (status {status_code})")


class APIError(YnabctlError):
    """Structured error returned by the YNAB API."""

    def __init__(self, id: str, name: str, detail: str, status_code: Optional[int] = None):
        self.id = id
        self.name = name
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{name}: {detail}")


class DecodeError(YnabctlError):
    """Successful response that does not match the expected envelope."""
    pass
