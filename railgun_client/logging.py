"""Log handler setup for the railgun_client logger hierarchy."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

PACKAGE_LOGGER = "railgun_client"
NETWORK_LOGGERS = ("aiohttp.client",)
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Handlers attached by the last configure_logging call, per logger name.
_installed: dict[str, List[logging.Handler]] = {}


def configure_logging(
    level: str = "INFO", *, log_path: Optional[Path] = None, log_network: bool = False
) -> None:
    """Attach console and optional file handlers to the package loggers.

    Only ``railgun_client.*`` (plus ``aiohttp.client`` when ``log_network`` is
    set) is touched; the root logger and its handlers are left alone. Calling
    this again replaces the handlers installed by the previous call.
    """

    reset_logging()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    resolved_level = logging.getLevelName(level.upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    names = [PACKAGE_LOGGER]
    if log_network:
        names.extend(NETWORK_LOGGERS)

    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(resolved_level)
        for handler in handlers:
            logger.addHandler(handler)
        _installed[name] = list(handlers)


def reset_logging() -> None:
    """Detach and close every handler installed by :func:`configure_logging`."""

    closed: set[int] = set()
    for name, handlers in _installed.items():
        logger = logging.getLogger(name)
        logger.setLevel(logging.NOTSET)
        for handler in handlers:
            logger.removeHandler(handler)
            if id(handler) not in closed:
                handler.close()
                closed.add(id(handler))
    _installed.clear()
