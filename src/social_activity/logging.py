"""Process-wide logging setup for the CLI."""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "social_activity"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that are noisy at INFO during a feed build.
_QUIET_LOGGERS = ("urllib3", "requests")


def configure_logging(debug: bool = False) -> None:
    """Log package events at INFO (DEBUG with ``debug``) and keep HTTP internals at WARNING."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
