"""Logging for the ``statement_import`` package.

Library modules call ``get_logger("statement_import.<module>")`` and never
attach handlers. Until an entrypoint calls :func:`configure_logging`, the
package logger carries only a ``NullHandler``, so importing the pipeline from
another application stays silent.

:func:`configure_logging` installs one ``StreamHandler`` on the package logger.
The level comes from, in order: the ``level`` argument (the CLI's
``--log-level``), ``STATEMENT_IMPORT_LOG_LEVEL``, then ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "statement_import"
LEVEL_ENV_VAR = "STATEMENT_IMPORT_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Handler installed by configure_logging(); None until then.
_handler: logging.Handler | None = None


def resolve_level(level: int | str | None = None) -> int:
    """Turn ``level`` (or the env var when ``None``) into a numeric level.

    Accepts ints, numeric strings and level names in any case. Unknown names
    fall back to ``INFO``.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    stream: IO[str] | None = None,
    fmt: str = DEFAULT_FORMAT,
    force: bool = False,
) -> logging.Handler:
    """Attach the package's stream handler and return it.

    A second call is a no-op returning the installed handler, unless ``force``
    is set, in which case the previous handler is replaced. ``stream`` defaults
    to the ``sys.stderr`` current at call time.
    """

    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None and not force:
        return _handler

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler) or h is _handler:
            logger.removeHandler(h)

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _handler = handler
    return handler


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "PACKAGE_LOGGER",
    "LEVEL_ENV_VAR",
    "resolve_level",
    "configure_logging",
    "get_logger",
]
