"""
Process-wide logging setup (stdlib `logging`).

Modules log through `logging.getLogger(__name__)` with `key=value` messages.
"""

from __future__ import annotations

import logging

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_NAME = "news-api"


def configure_logging(level: str | None = None) -> None:
    """
    Attach one stream handler to the root logger. Safe to call more than once.
    """
    root = logging.getLogger()
    root.setLevel((level or config.log_level()).upper())
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return None

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
