"""Constants used across the railgun-client package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "railgun-client"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / DEFAULT_CONFIG_FILENAME

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_TIMEOUT_SECONDS = 30.0

USER_AGENT = f"{APP_NAME}/0.1.0"
