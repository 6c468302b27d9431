"""Logging setup for the cet commands.

Rich owns stdout for compiler output; this module only routes the package
loggers (request URLs, collected files, watch events) to stderr at the level
picked by ``-v``/``-q`` or ``[output] verbosity``.
"""

from __future__ import annotations

import logging
from typing import Literal

Verbosity = Literal["quiet", "normal", "verbose"]

_LEVEL_BY_VERBOSITY: dict[Verbosity, int] = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


def configure_logging(verbosity: Verbosity = "normal") -> None:
    """Configure root logging once per command invocation."""

    level = _LEVEL_BY_VERBOSITY.get(verbosity, logging.INFO)
    logging.basicConfig(
        level=level,
        format="[%(levelname).1s] %(message)s",
    )
    # watchdog emits a debug line per inotify event; keep it out of -v output.
    logging.getLogger("watchdog").setLevel(max(level, logging.INFO))
    logging.debug("Logging configured with level %s", logging.getLevelName(level))
