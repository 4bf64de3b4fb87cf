"""Exception hierarchy for railgun-client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .models import ResponseInfo

REQUEST_FAILED = "request failed"
DECODE_FAILED = "response decode failed"


class RailgunError(RuntimeError):
    """Base class for every error raised by this package."""


class RequestError(RailgunError):
    """Raised when the request executor fails to complete a call."""

    def __init__(self, method: str, path: str, detail: str) -> None:
        super().__init__(f"{REQUEST_FAILED}: {method} {path}: {detail}")
        self.method = method
        self.path = path


class DecodeError(RailgunError):
    """Raised when a response body does not decode into the expected shape."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"{DECODE_FAILED}: {detail}")
        self.detail = detail


class APIResponseError(RailgunError):
    """Raised by the aiohttp executor for HTTP error statuses."""

    def __init__(
        self,
        status: int,
        detail: str,
        errors: Optional[Sequence["ResponseInfo"]] = None,
    ) -> None:
        self.status = status
        self.detail = detail
        self.errors = list(errors or [])
        if self.errors:
            summary = "; ".join(f"{item.code}: {item.message}" for item in self.errors)
        else:
            summary = detail.strip()
        super().__init__(f"API returned status {status}: {summary}")


class ConfigError(RailgunError):
    """Raised when configuration values cannot be parsed."""
