"""Typed client for the Railgun endpoints of the Cloudflare v4 API."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, TypeVar
from urllib.parse import quote, urlencode

from .core import RequestExecutor
from .errors import RequestError
from .models import (
    Organization,
    Railgun,
    RailgunDiagnosis,
    RailgunListOptions,
    Zone,
    ZoneRailgun,
    decode_envelope,
    parse_list_of,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class RailgunClient:
    """Railgun management on top of an injected request executor.

    Every method performs exactly one request. Executor failures surface as
    :class:`~railgun_client.errors.RequestError` and undecodable responses as
    :class:`~railgun_client.errors.DecodeError`; nothing is retried.

    Organization-scoped operations accept an optional :class:`Organization`.
    When it carries a non-empty id the request path is prefixed with
    ``/organizations/{id}``. ``organization`` passed to the constructor is used
    whenever a call does not supply its own.

    Identifiers are percent-encoded as single path segments (``quote(id,
    safe="")``) rather than concatenated raw. Ordinary hex ids are sent
    unchanged; an id containing ``/``, ``?`` or spaces is escaped instead of
    altering the request path.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        *,
        organization: Optional[Organization] = None,
    ) -> None:
        self._executor = executor
        self._organization = organization

    # ------------------------------------------------------------------
    # Railguns
    # ------------------------------------------------------------------
    async def create_railgun(
        self, name: str, org: Optional[Organization] = None
    ) -> Railgun:
        """Create a new Railgun.

        POST /railguns
        """

        path = self._scoped_path(org, "railguns")
        raw = await self._request("POST", path, {"name": name})
        return _decode(raw, Railgun.from_payload)

    async def list_railguns(
        self,
        options: Optional[RailgunListOptions] = None,
        org: Optional[Organization] = None,
    ) -> List[Railgun]:
        """List the Railguns of the account.

        GET /railguns
        """

        path = self._scoped_path(org, "railguns")
        query = {}
        if options is not None and options.direction:
            query["direction"] = options.direction
        if query:
            path = f"{path}?{urlencode(query)}"

        raw = await self._request("GET", path)
        return _decode(raw, parse_list_of(Railgun.from_payload))

    async def railgun_details(
        self, railgun_id: str, org: Optional[Organization] = None
    ) -> Railgun:
        """GET /railguns/{id}"""

        path = self._scoped_path(org, "railguns", railgun_id)
        raw = await self._request("GET", path)
        return _decode(raw, Railgun.from_payload)

    async def railgun_zones(
        self, railgun_id: str, org: Optional[Organization] = None
    ) -> List[Zone]:
        """Return the zones currently using a Railgun.

        GET /railguns/{id}/zones
        """

        path = self._scoped_path(org, "railguns", railgun_id, "zones")
        raw = await self._request("GET", path)
        return _decode(raw, parse_list_of(Zone.from_payload))

    async def enable_railgun(
        self, railgun_id: str, org: Optional[Organization] = None
    ) -> Railgun:
        """Enable a Railgun for all zones connected to it."""

        return await self._set_railgun_enabled(railgun_id, org, True)

    async def disable_railgun(
        self, railgun_id: str, org: Optional[Organization] = None
    ) -> Railgun:
        """Disable a Railgun for all zones connected to it."""

        return await self._set_railgun_enabled(railgun_id, org, False)

    async def delete_railgun(
        self, railgun_id: str, org: Optional[Organization] = None
    ) -> None:
        """Disable and delete a Railgun.

        DELETE /railguns/{id}. The response body is not inspected.
        """

        path = self._scoped_path(org, "railguns", railgun_id)
        await self._request("DELETE", path)

    # ------------------------------------------------------------------
    # Railguns for a zone
    # ------------------------------------------------------------------
    async def zone_railguns(self, zone_id: str) -> List[ZoneRailgun]:
        """Return the Railguns available to a zone.

        GET /zones/{zone_id}/railguns
        """

        path = _join("zones", zone_id, "railguns")
        raw = await self._request("GET", path)
        return _decode(raw, parse_list_of(ZoneRailgun.from_payload))

    async def zone_railgun_details(
        self, zone_id: str, railgun_id: str
    ) -> ZoneRailgun:
        """GET /zones/{zone_id}/railguns/{id}"""

        path = _join("zones", zone_id, "railguns", railgun_id)
        raw = await self._request("GET", path)
        return _decode(raw, ZoneRailgun.from_payload)

    async def test_railgun_connection(
        self, zone_id: str, railgun_id: str
    ) -> RailgunDiagnosis:
        """Test the Railgun connection of a zone.

        GET /zones/{zone_id}/railguns/{id}/diagnose
        """

        path = _join("zones", zone_id, "railguns", railgun_id, "diagnose")
        raw = await self._request("GET", path)
        return _decode(raw, RailgunDiagnosis.from_payload)

    async def connect_zone_railgun(
        self, zone_id: str, railgun_id: str
    ) -> ZoneRailgun:
        """Connect a Railgun to a zone."""

        return await self._set_zone_railgun_connected(zone_id, railgun_id, True)

    async def disconnect_zone_railgun(
        self, zone_id: str, railgun_id: str
    ) -> ZoneRailgun:
        """Disconnect a Railgun from a zone."""

        return await self._set_zone_railgun_connected(zone_id, railgun_id, False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    async def _set_railgun_enabled(
        self, railgun_id: str, org: Optional[Organization], enabled: bool
    ) -> Railgun:
        # PATCH /railguns/{id}
        path = self._scoped_path(org, "railguns", railgun_id)
        raw = await self._request("PATCH", path, {"enabled": enabled})
        return _decode(raw, Railgun.from_payload)

    async def _set_zone_railgun_connected(
        self, zone_id: str, railgun_id: str, connected: bool
    ) -> ZoneRailgun:
        # PATCH /zones/{zone_id}/railguns/{id}
        path = _join("zones", zone_id, "railguns", railgun_id)
        raw = await self._request("PATCH", path, {"connected": connected})
        return _decode(raw, ZoneRailgun.from_payload)

    def _scoped_path(self, org: Optional[Organization], *segments: str) -> str:
        organization = org if org is not None else self._organization
        path = _join(*segments)
        if organization is not None and organization.id:
            path = _join("organizations", organization.id) + path
        return path

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        LOGGER.debug("Railgun API request: %s %s", method, path)
        try:
            return await self._executor.make_request(method, path, body)
        except Exception as exc:
            raise RequestError(method, path, str(exc) or type(exc).__name__) from exc


def _join(*segments: str) -> str:
    return "".join("/" + quote(segment, safe="") for segment in segments)


def _decode(raw: bytes, parse_result: Callable[[object], T]) -> T:
    return decode_envelope(raw, parse_result).result
