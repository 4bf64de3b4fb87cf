"""Protocol definitions for request executors."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class RequestExecutor(Protocol):
    """Minimal contract for components that perform API requests."""

    async def make_request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """Send a single request and return the raw response body.

        Args:
            method: HTTP method, e.g. ``"GET"``.
            path: API path relative to the base URL, including any query string.
            body: JSON-serialisable request body, or None for no body.

        Raises:
            Exception: Any transport, authentication or status failure.
        """
        ...
