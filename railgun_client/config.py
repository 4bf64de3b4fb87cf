"""Configuration loader for railgun-client."""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from . import constants
from .errors import ConfigError
from .models import Organization


@dataclass(slots=True)
class ApiConfig:
    base_url: str = constants.DEFAULT_API_BASE_URL
    api_token: Optional[str] = None
    api_key: Optional[str] = None
    api_email: Optional[str] = None
    timeout_seconds: float = constants.DEFAULT_TIMEOUT_SECONDS
    organization_id: str = ""

    @property
    def organization(self) -> Optional[Organization]:
        if not self.organization_id:
            return None
        return Organization(id=self.organization_id)

    def auth_headers(self) -> Dict[str, str]:
        """Static request headers carrying the configured credentials."""

        if self.api_token:
            return {"Authorization": f"Bearer {self.api_token}"}
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["X-Auth-Key"] = self.api_key
        if self.api_email:
            headers["X-Auth-Email"] = self.api_email
        return headers


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class ClientConfig:
    api: ApiConfig
    logging: LoggingConfig
    raw: ConfigParser
    path: Path


def load_config(path: Optional[Path] = None) -> ClientConfig:
    """Load configuration from disk, applying defaults where necessary."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = ConfigParser()
    parser.read_dict(
        {
            "api": {
                "base_url": constants.DEFAULT_API_BASE_URL,
                "timeout_seconds": str(constants.DEFAULT_TIMEOUT_SECONDS),
                "organization_id": "",
            },
            "logging": {
                "level": "INFO",
                "path": "",
                "log_network": "false",
            },
        }
    )

    if config_path.exists():
        parser.read(config_path)

    try:
        timeout_seconds = parser.getfloat(
            "api", "timeout_seconds", fallback=constants.DEFAULT_TIMEOUT_SECONDS
        )
        log_network = parser.getboolean("logging", "log_network", fallback=False)
    except ValueError as exc:
        raise ConfigError(f"Invalid value in {config_path}: {exc}") from exc

    api = ApiConfig(
        base_url=parser.get("api", "base_url"),
        api_token=parser.get("api", "api_token", fallback=None) or None,
        api_key=parser.get("api", "api_key", fallback=None) or None,
        api_email=parser.get("api", "api_email", fallback=None) or None,
        timeout_seconds=max(0.0, timeout_seconds),
        organization_id=parser.get("api", "organization_id", fallback="").strip(),
    )

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_network=log_network,
    )

    return ClientConfig(
        api=api,
        logging=logging_config,
        raw=parser,
        path=config_path,
    )


def save_config(config: ClientConfig) -> None:
    """Persist the current configuration to disk."""

    config_path = config.path
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as stream:
        config.raw.write(stream)
