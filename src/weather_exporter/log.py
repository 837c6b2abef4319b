"""Logging setup shared by the CLI entry points."""

from __future__ import annotations

import logging
import sys

# logfmt-style key=value pairs, one record per line
LOG_FORMAT = 'time=%(asctime)s level=%(levelname)s logger=%(name)s msg="%(message)s"'


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stdout handler on the root logger.

    Safe to call more than once; later calls replace the handler and level.
    """
    logging.basicConfig(
        level=level.upper() if isinstance(level, str) else level,
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
