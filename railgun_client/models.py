"""Railgun API records and response envelope decoding.

Records are decoded from the JSON payloads returned by the Cloudflare v4 API.
Missing keys (or explicit ``null``) fall back to zero values; a key holding a
value of the wrong JSON type raises :class:`~railgun_client.errors.DecodeError`
so that a call never returns a partially populated record.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar, Union

from .errors import DecodeError

T = TypeVar("T")

# datetime.fromisoformat accepts at most microsecond precision.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")
_RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})\Z"
)


@dataclass(slots=True)
class ResponseInfo:
    """Entry of the envelope ``errors`` or ``messages`` lists."""

    code: int = 0
    message: str = ""

    @classmethod
    def from_payload(cls, payload: object) -> "ResponseInfo":
        node = _expect_object(payload, "response info")
        return cls(code=_int(node, "code"), message=_str(node, "message"))

    def as_dict(self) -> Dict[str, object]:
        return {"code": self.code, "message": self.message}


@dataclass(slots=True)
class Envelope(Generic[T]):
    """Outer object wrapping every API response."""

    success: bool
    errors: List[ResponseInfo]
    messages: List[ResponseInfo]
    result: T


@dataclass(slots=True)
class Organization:
    """Account grouping scope; only ``id`` is used to build request paths."""

    id: str = ""
    name: str = ""
    status: str = ""

    @classmethod
    def from_payload(cls, payload: object) -> "Organization":
        node = _expect_object(payload, "organization")
        return cls(
            id=_str(node, "id"),
            name=_str(node, "name"),
            status=_str(node, "status"),
        )


@dataclass(slots=True)
class RailgunUpgradeInfo:
    latest_version: str = ""
    download_link: str = ""

    @classmethod
    def from_payload(cls, payload: object) -> "RailgunUpgradeInfo":
        node = _expect_object(payload, "upgrade_info")
        return cls(
            latest_version=_str(node, "latest_version"),
            download_link=_str(node, "download_link"),
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "latest_version": self.latest_version,
            "download_link": self.download_link,
        }


@dataclass(slots=True)
class Railgun:
    """A Railgun as reported by the API."""

    id: str = ""
    name: str = ""
    status: str = ""
    enabled: bool = False
    zones_connected: int = 0
    build: str = ""
    version: str = ""
    revision: str = ""
    activation_key: str = ""
    activated_on: str = ""
    created_on: Optional[datetime] = None
    modified_on: Optional[datetime] = None
    upgrade_info: RailgunUpgradeInfo = field(default_factory=RailgunUpgradeInfo)

    @classmethod
    def from_payload(cls, payload: object) -> "Railgun":
        node = _expect_object(payload, "railgun")
        return cls(
            id=_str(node, "id"),
            name=_str(node, "name"),
            status=_str(node, "status"),
            enabled=_bool(node, "enabled"),
            zones_connected=_int(node, "zones_connected"),
            build=_str(node, "build"),
            version=_str(node, "version"),
            revision=_str(node, "revision"),
            activation_key=_str(node, "activation_key"),
            activated_on=_str(node, "activated_on"),
            created_on=_time(node, "created_on"),
            modified_on=_time(node, "modified_on"),
            upgrade_info=RailgunUpgradeInfo.from_payload(node.get("upgrade_info")),
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "enabled": self.enabled,
            "zones_connected": self.zones_connected,
            "build": self.build,
            "version": self.version,
            "revision": self.revision,
            "activation_key": self.activation_key,
            "activated_on": self.activated_on,
            "created_on": _format_time(self.created_on),
            "modified_on": _format_time(self.modified_on),
            "upgrade_info": self.upgrade_info.as_dict(),
        }


@dataclass(slots=True)
class RailgunListOptions:
    """Parameters for listing Railguns.

    ``direction`` is passed through as-is (``asc`` or ``desc``); an empty value
    leaves ordering to the API.
    """

    direction: str = ""


@dataclass(slots=True)
class ZoneRailgun:
    """Status of a Railgun on a zone."""

    id: str = ""
    name: str = ""
    enabled: bool = False
    connected: bool = False

    @classmethod
    def from_payload(cls, payload: object) -> "ZoneRailgun":
        node = _expect_object(payload, "zone railgun")
        return cls(
            id=_str(node, "id"),
            name=_str(node, "name"),
            enabled=_bool(node, "enabled"),
            connected=_bool(node, "connected"),
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "enabled": self.enabled,
            "connected": self.connected,
        }


# Wire names of the diagnosis fields, keyed by attribute name.
_DIAGNOSIS_FIELDS = {
    "method": "method",
    "host_name": "host_name",
    "railgun": "railgun",
    "url": "url",
    "response_status": "response_status",
    "protocol": "protocol",
    "elapsed_time": "elapsed_time",
    "body_size": "body_size",
    "body_hash": "body_hash",
    "missing_headers": "missing_headers",
    "cloudflare": "cloudflare",
    "cf_ray": "cf-ray",
    "cf_wan_error": "cf-wan-error",
    "cf_cache_status": "cf-cache-status",
}


@dataclass(frozen=True, slots=True)
class RailgunDiagnosis:
    """Result of a single Railgun connection test for a zone."""

    method: str = ""
    host_name: str = ""
    http_status: int = 0
    railgun: str = ""
    url: str = ""
    response_status: str = ""
    protocol: str = ""
    elapsed_time: str = ""
    body_size: str = ""
    body_hash: str = ""
    missing_headers: str = ""
    connection_close: bool = False
    cloudflare: str = ""
    cf_ray: str = ""
    # Not yet described by the public API documentation.
    cf_wan_error: str = ""
    cf_cache_status: str = ""

    @classmethod
    def from_payload(cls, payload: object) -> "RailgunDiagnosis":
        node = _expect_object(payload, "railgun diagnosis")
        values: Dict[str, Any] = {
            attr: _str(node, key) for attr, key in _DIAGNOSIS_FIELDS.items()
        }
        values["http_status"] = _int(node, "http_status")
        values["connection_close"] = _bool(node, "connection_close")
        return cls(**values)

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            key: getattr(self, attr) for attr, key in _DIAGNOSIS_FIELDS.items()
        }
        payload["http_status"] = self.http_status
        payload["connection_close"] = self.connection_close
        return payload


@dataclass(slots=True)
class Zone:
    """Subset of a zone record returned by the zones-using-a-Railgun endpoint."""

    id: str = ""
    name: str = ""
    status: str = ""
    paused: bool = False
    type: str = ""
    development_mode: int = 0
    name_servers: List[str] = field(default_factory=list)
    original_name_servers: List[str] = field(default_factory=list)
    created_on: Optional[datetime] = None
    modified_on: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: object) -> "Zone":
        node = _expect_object(payload, "zone")
        return cls(
            id=_str(node, "id"),
            name=_str(node, "name"),
            status=_str(node, "status"),
            paused=_bool(node, "paused"),
            type=_str(node, "type"),
            development_mode=_int(node, "development_mode"),
            name_servers=_str_list(node, "name_servers"),
            original_name_servers=_str_list(node, "original_name_servers"),
            created_on=_time(node, "created_on"),
            modified_on=_time(node, "modified_on"),
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "paused": self.paused,
            "type": self.type,
            "development_mode": self.development_mode,
            "name_servers": list(self.name_servers),
            "original_name_servers": list(self.original_name_servers),
            "created_on": _format_time(self.created_on),
            "modified_on": _format_time(self.modified_on),
        }


def decode_envelope(
    raw: Union[bytes, str], parse_result: Callable[[object], T]
) -> Envelope[T]:
    """Decode a response body and parse its ``result`` with ``parse_result``.

    Raises:
        DecodeError: If the body is not JSON, is not an object, or the result
            does not have the shape ``parse_result`` expects.
    """

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError(f"expected envelope object, got {_type_name(payload)}")

    return Envelope(
        success=_bool(payload, "success"),
        errors=parse_list_of(ResponseInfo.from_payload)(payload.get("errors")),
        messages=parse_list_of(ResponseInfo.from_payload)(payload.get("messages")),
        result=parse_result(payload.get("result")),
    )


def parse_list_of(parse_item: Callable[[object], T]) -> Callable[[object], List[T]]:
    """Build a result parser for a JSON array of ``parse_item`` payloads."""

    def parse(value: object) -> List[T]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DecodeError(f"expected array, got {_type_name(value)}")
        return [parse_item(item) for item in value]

    return parse


def parse_error_details(raw: Union[bytes, str]) -> List[ResponseInfo]:
    """Best-effort extraction of envelope ``errors`` from an error response."""

    try:
        return decode_envelope(raw, lambda _result: None).errors
    except DecodeError:
        return []


def _expect_object(value: object, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise DecodeError(f"expected {what} object, got {_type_name(value)}")
    return value


def _str(node: Mapping[str, Any], key: str) -> str:
    value = node.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"field {key!r} must be a string, got {_type_name(value)}")
    return value


def _bool(node: Mapping[str, Any], key: str) -> bool:
    value = node.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"field {key!r} must be a boolean, got {_type_name(value)}")
    return value


def _int(node: Mapping[str, Any], key: str) -> int:
    value = node.get(key)
    if value is None:
        return 0
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"field {key!r} must be an integer, got {_type_name(value)}")
    return value


def _str_list(node: Mapping[str, Any], key: str) -> List[str]:
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise DecodeError(f"field {key!r} must be an array of strings")
    return list(value)


def _time(node: Mapping[str, Any], key: str) -> Optional[datetime]:
    if node.get(key) is None:
        return None
    value = _str(node, key)
    if not _RFC3339_RE.match(value):
        raise DecodeError(f"field {key!r} is not an RFC 3339 timestamp: {value!r}")
    try:
        return datetime.fromisoformat(_FRACTION_RE.sub(r"\1", value))
    except ValueError as exc:
        raise DecodeError(f"field {key!r} is not an RFC 3339 timestamp: {value!r}") from exc


def _format_time(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__
