"""Logging setup for the ``cadentis`` logger tree.

Output goes to standard error so that the command line tool can keep standard
output for the JSON response. Only the package logger is touched; the root
logger stays under the embedding application's control.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO, Union

LOG_LEVEL_ENV = "CADENTIS_LOG_LEVEL"
PACKAGE_LOGGER = "cadentis"
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class _CurrentStderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self) -> TextIO:
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


def parse_log_level(value: Union[str, int]) -> int:
    """Turn ``"debug"``, ``"WARNING"`` or ``"15"`` into a numeric level.

    Raises ``ValueError`` for names the logging module does not define, which
    also makes it usable as an ``argparse`` ``type``.
    """

    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {value!r}")
    return level


def _level_from_env() -> int:
    raw = os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return logging.INFO
    try:
        return parse_log_level(raw)
    except ValueError:
        return logging.INFO


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> logging.Handler:
    """Attach one formatted handler to the ``cadentis`` logger and return it.

    ``level`` wins over ``CADENTIS_LOG_LEVEL``; an unusable environment value
    falls back to ``INFO``. Later calls return the installed handler unchanged
    unless ``force`` is set, in which case it is replaced.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    installed = [handler for handler in logger.handlers if getattr(handler, "_cadentis", False)]
    if installed and not force:
        return installed[0]
    for handler in installed:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream) if stream is not None else _CurrentStderrHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._cadentis = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(parse_log_level(level) if level is not None else _level_from_env())
    return handler


__all__ = ["configure_logging", "parse_log_level", "LOG_LEVEL_ENV"]
