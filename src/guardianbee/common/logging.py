"""Root logger setup for the command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger through ``logging.basicConfig``.

    ``force=True`` replaces handlers installed earlier (tests, embedding apps).
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    # httpx logs every request at INFO; pacing makes that very chatty during syncs
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
