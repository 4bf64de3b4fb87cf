"""aiohttp-backed request executor for the Cloudflare API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

import aiohttp

from .. import constants
from ..config import ApiConfig
from ..errors import APIResponseError
from ..models import parse_error_details

LOGGER = logging.getLogger(__name__)


class SessionRequestExecutor:
    """Send API requests through an :class:`aiohttp.ClientSession`.

    Credentials are not negotiated here: whatever ``headers`` are supplied
    (typically from :meth:`ApiConfig.auth_headers`) are attached to every
    request. Responses with a status of 400 or above raise
    :class:`APIResponseError`; any other body is returned untouched.
    """

    def __init__(
        self,
        base_url: str = constants.DEFAULT_API_BASE_URL,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = constants.DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Accept": "application/json",
            "User-Agent": constants.USER_AGENT,
        }
        if headers:
            self._headers.update(headers)
        self._timeout = timeout if timeout else None

        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "SessionRequestExecutor":
        return cls(
            config.base_url,
            session=session,
            headers=config.auth_headers(),
            timeout=config.timeout_seconds,
        )

    async def __aenter__(self) -> "SessionRequestExecutor":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.aclose()

    async def make_request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """Perform one request and return the raw response body.

        Raises:
            asyncio.TimeoutError: If the request exceeds the configured timeout.
            aiohttp.ClientError: If the transport fails.
            APIResponseError: If the API answers with an error status.
        """

        session = await self._ensure_session()
        url = f"{self._base_url}{path}"
        payload = dict(body) if body is not None else None

        try:
            async with asyncio.timeout(self._timeout):
                async with session.request(
                    method, url, json=payload, headers=self._headers
                ) as response:
                    data = await response.read()
                    if response.status >= 400:
                        detail = data.decode("utf-8", errors="replace")
                        raise APIResponseError(
                            response.status, detail, parse_error_details(data)
                        )
                    return data
        except asyncio.TimeoutError:
            LOGGER.warning(
                "Cloudflare API request timed out (%s %s, timeout=%s)",
                method,
                path,
                "none" if self._timeout is None else f"{self._timeout:.1f}s",
            )
            raise

    async def aclose(self) -> None:
        """Close the session if this executor created it."""

        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=None)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session
