from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


class FdkError(Exception):
    """Base error for ec-fdk failures."""


class MissingConfigurationError(FdkError, ValueError):
    def __init__(self, field: str):
        super().__init__(f"expected {field} to be set!")
        self.field = field


class UnknownSubdomainError(FdkError, ValueError):
    pass


class UnknownEnvironmentError(FdkError, ValueError):
    pass


class ApiError(FdkError):
    """The remote API answered with a non-2xx JSON error body."""

    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        response_json: Optional[Dict[str, Any]] = None,
    ):
        body = response_json or {}
        self.title = body.get("title")
        self.detail = body.get("detail")
        self.verbose = body.get("verbose")
        super().__init__(f"{self.title}\n{self.detail}\n{self.verbose}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_json = response_json


class TransportError(FdkError):
    """Non-JSON error response or network level failure."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(TransportError):
    pass


class NoStorageAdapterError(FdkError):
    pass


class UnknownActionError(FdkError, LookupError):
    def __init__(self, action: str, valid: Iterable[str]):
        self.action = action
        self.valid = sorted(valid)
        super().__init__(
            f'"{action}" does not exist! try one of {", ".join(self.valid)}'
        )


__all__ = [
    "FdkError",
    "MissingConfigurationError",
    "UnknownSubdomainError",
    "UnknownEnvironmentError",
    "ApiError",
    "TransportError",
    "ResponseParseError",
    "NoStorageAdapterError",
    "UnknownActionError",
]
