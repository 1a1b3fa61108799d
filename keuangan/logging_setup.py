"""Logging for the ``keuangan`` package.

The level comes from ``Settings.log_level`` (``KEUANGAN_LOG_LEVEL``), so this
module never reads the environment itself. ``app.main`` calls
``configure_logging`` once; every other module only asks ``get_logger`` for a
child of the ``keuangan`` logger.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Tuple, Union

PKG_LOGGER = "keuangan"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def resolve_level(level: Optional[Union[int, str]]) -> Tuple[int, bool]:
    """Map ``level`` to a logging level.

    Returns ``(level, known)``. ``None`` means INFO; a name logging does not
    know also gives INFO, with ``known`` set to False.
    """
    if level is None:
        return logging.INFO, True
    if isinstance(level, int):
        return level, True
    name = str(level).strip().upper()
    if name.isdigit():
        return int(name), True
    numeric = getattr(logging, name, None)
    if isinstance(numeric, int) and not isinstance(numeric, bool):
        return numeric, True
    return logging.INFO, False


def configure_logging(
    level: Optional[Union[int, str]] = None,
    *,
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] = sys.stderr,
) -> int:
    """Attach one StreamHandler to the package logger; later calls are no-ops.

    Returns the effective level.
    """
    global _configured
    logger = logging.getLogger(PKG_LOGGER)
    if _configured:
        return logger.level

    numeric, known = resolve_level(level)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
    _configured = True

    if not known:
        logger.warning("unknown log level %r, using INFO", level)
    return numeric


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(PKG_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
