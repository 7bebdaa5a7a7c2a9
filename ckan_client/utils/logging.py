"""Root logger setup for the command line entry point.

The level is taken from the first source that names a valid one:

    1. the ``level`` argument (``--log-level`` on the CLI);
    2. ``CKAN_CLIENT_LOG_LEVEL``;
    3. ``CKAN_CLIENT_DEBUG`` set to a truthy value, which means DEBUG;
    4. WARNING.

At DEBUG the ``urllib3`` logger is opened too so connection handling shows up
next to the client's own request lines.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "CKAN_CLIENT_LOG_LEVEL"
DEBUG_ENV = "CKAN_CLIENT_DEBUG"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_TRUTHY = {"1", "true", "yes", "on"}


def parse_level(value: Union[int, str, None]) -> Optional[int]:
    """Return the numeric level for ``value`` or ``None`` when unrecognised."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def _env_level() -> Optional[int]:
    level = parse_level(os.getenv(LOG_LEVEL_ENV))
    if level is not None:
        return level
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(level: Union[int, str, None] = None) -> int:
    """Configure the root logger and return the effective level."""
    effective = parse_level(level)
    if effective is None:
        effective = _env_level()
    if effective is None:
        effective = logging.WARNING

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    if effective <= logging.DEBUG:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
    return effective


__all__ = ["DEBUG_ENV", "LOG_LEVEL_ENV", "configure_root", "parse_level"]
