"""Root logging setup for the viewer.

The level comes from ``SettingsConfig.log_level`` / ``debug`` (and so from the
``ROCKETVIZ_LOG_LEVEL`` / ``ROCKETVIZ_DEBUG`` overrides read by
``SettingsVM.from_env``); this module only turns it into handler config.
"""

from __future__ import annotations

import logging
from typing import Union

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"

# Chatty libraries that stay at WARNING unless the viewer itself is at DEBUG.
_QUIET_LOGGERS = ("urllib3", "requests")


def parse_level(value: Union[int, str]) -> int:
    """Return the numeric level for a level name or number.

    Raises:
        ValueError: For booleans, empty text, or an unknown level name.
    """
    if isinstance(value, bool):
        raise ValueError("log level must be a name or a number.")
    if isinstance(value, int):
        return value
    text = str(value).strip().upper()
    if not text:
        raise ValueError("log level must not be empty.")
    try:
        return int(text)
    except ValueError:
        pass
    level = logging.getLevelName(text)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def configure_root(level: int = logging.INFO) -> int:
    """Install the compact root handler once and apply ``level``."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(level)
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    return level
