"""Typed client for Cloudflare Railgun management."""

from .client import RailgunClient
from .errors import (
    APIResponseError,
    ConfigError,
    DecodeError,
    RailgunError,
    RequestError,
)
from .models import (
    Envelope,
    Organization,
    Railgun,
    RailgunDiagnosis,
    RailgunListOptions,
    RailgunUpgradeInfo,
    ResponseInfo,
    Zone,
    ZoneRailgun,
)

__all__ = [
    "APIResponseError",
    "ConfigError",
    "DecodeError",
    "Envelope",
    "Organization",
    "Railgun",
    "RailgunClient",
    "RailgunDiagnosis",
    "RailgunError",
    "RailgunListOptions",
    "RailgunUpgradeInfo",
    "RequestError",
    "ResponseInfo",
    "Zone",
    "ZoneRailgun",
]
