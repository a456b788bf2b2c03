"""Root logger setup for the ``chartwheel`` command and embedding callers.

The CLI calls :func:`configure_logging` once per invocation, before any
snapshot is read, so skipped config values and undrawable aspect endpoints
are reported on stderr.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

__all__ = ["LOG_LEVEL_ENV", "configure_logging", "coerce_level"]

LOG_LEVEL_ENV = "LOG_LEVEL"

_FALLBACK_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _parse_level(value: str | int | None) -> Optional[int]:
    if value is None or isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else None


def coerce_level(value: str | int | None) -> int:
    """Map a level name (any case) or number to a level, else ``WARNING``."""

    level = _parse_level(value)
    return _FALLBACK_LEVEL if level is None else level


def configure_logging(
    *,
    level: str | int | None = None,
    default: str | int | None = None,
    **kwargs: Any,
) -> int:
    """Point the root logger at stderr for one chartwheel run.

    The first usable level wins: ``level`` (the ``--log-level`` flag), then
    ``$LOG_LEVEL``, then ``default`` (the settings file's ``logging_level``),
    then ``WARNING``. Unparseable values are skipped rather than rejected.
    Extra keyword arguments go to :func:`logging.basicConfig`; ``force``
    defaults to true so each invocation replaces earlier handlers.

    Returns the level applied to the root logger.
    """

    effective = _FALLBACK_LEVEL
    for candidate in (level, os.environ.get(LOG_LEVEL_ENV), default):
        parsed = _parse_level(candidate)
        if parsed is not None:
            effective = parsed
            break

    kwargs.setdefault("format", _DEFAULT_FORMAT)
    kwargs.setdefault("datefmt", _DEFAULT_DATEFMT)
    kwargs.setdefault("force", True)
    logging.basicConfig(level=effective, **kwargs)
    return effective
