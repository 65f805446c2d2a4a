"""
Logging for the sample DAO app.

Repository failures are reported here instead of being raised, so every
module takes its logger from `get_logger(__name__)`; the root handler is
installed once, at the level set by SAMPLE_LOG_LEVEL.
"""

import logging
import sys

from config import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger, configuring the root logger on first use."""
    _configure_root()
    return logging.getLogger(name)
