from pathlib import Path

import pytest

from railgun_client import constants
from railgun_client.config import load_config, save_config
from railgun_client.errors import ConfigError


def test_load_config_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "railgun-client.cfg"
    config = load_config(config_path)

    assert config.api.base_url == constants.DEFAULT_API_BASE_URL
    assert config.api.timeout_seconds == constants.DEFAULT_TIMEOUT_SECONDS
    assert config.api.organization_id == ""
    assert config.api.organization is None
    assert config.api.auth_headers() == {}
    assert config.logging.level == "INFO"
    assert config.logging.path is None
    assert config.logging.log_network is False
    assert config.path == config_path


def test_load_config_overrides_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "railgun-client.cfg"
    config_file.write_text(
        """
[api]
base_url = https://api.example.com/client/v4
api_key = deadbeef
api_email = ops@example.com
timeout_seconds = 5
organization_id = org-9

[logging]
level = DEBUG
path = ~/railgun.log
log_network = true
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.api.base_url == "https://api.example.com/client/v4"
    assert config.api.timeout_seconds == 5.0
    assert config.api.organization is not None
    assert config.api.organization.id == "org-9"
    assert config.api.auth_headers() == {
        "X-Auth-Key": "deadbeef",
        "X-Auth-Email": "ops@example.com",
    }
    assert config.logging.level == "DEBUG"
    assert config.logging.path == Path("~/railgun.log").expanduser()
    assert config.logging.log_network is True


def test_api_token_takes_precedence(tmp_path: Path) -> None:
    config_file = tmp_path / "railgun-client.cfg"
    config_file.write_text(
        "[api]\napi_token = tok\napi_key = key\napi_email = a@b.c\n",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.api.auth_headers() == {"Authorization": "Bearer tok"}


def test_load_config_rejects_invalid_timeout(tmp_path: Path) -> None:
    config_file = tmp_path / "railgun-client.cfg"
    config_file.write_text("[api]\ntimeout_seconds = soon\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="timeout_seconds|soon"):
        load_config(config_file)


def test_save_config_round_trips(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "railgun-client.cfg"
    config = load_config(config_path)
    config.raw.set("api", "organization_id", "org-3")

    save_config(config)

    assert load_config(config_path).api.organization_id == "org-3"
