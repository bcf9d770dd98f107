"""Log handlers for the money transfer service."""

import logging
from pathlib import Path
from typing import Iterator, Optional

PACKAGE_LOGGER = "money_transfer_api"
# pymongo and httpx log every connection event at DEBUG/INFO.
QUIET_LOGGERS = ("pymongo", "httpx", "httpcore")

_FORMATTER = logging.Formatter("%(asctime)s %(levelname)-7s %(name)s | %(message)s", "%H:%M:%S")


def _handlers(logfile: Optional[str]) -> Iterator[logging.Handler]:
    yield logging.StreamHandler()
    if logfile:
        yield logging.FileHandler(Path(logfile).expanduser(), encoding="utf-8")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Attach handlers to the package logger and return it.

    Records from ``money_transfer_api.*`` go to stderr and, with
    ``logfile``, to that file as well.  They still propagate, so test
    capture keeps working.  Handlers are installed on the first call
    only; later calls just apply ``level``.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    numeric = getattr(logging, level.upper(), None)
    package.setLevel(numeric if isinstance(numeric, int) else logging.INFO)
    if not package.handlers:
        for handler in _handlers(logfile):
            handler.setFormatter(_FORMATTER)
            package.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return package
