from __future__ import annotations

"""Central logging configuration for devdoc.

Host applications import and call :func:`setup_logging` at start-up; the
library itself never configures logging on import.

Environment:

``DEVDOC_LOG_DIR``
    Directory receiving ``devdoc.log`` (default ``logs``).
``DEVDOC_DEBUG_MODULES``
    Comma separated logger names switched to DEBUG.
"""

import logging
import logging.config
import os
from typing import Any, Dict

from devdoc.config import ConfigManager

__all__ = ["setup_logging"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Everything dictConfig raises for a malformed configuration
_CONFIG_ERRORS = (ValueError, TypeError, AttributeError, ImportError, OSError)


def setup_logging() -> None:
    """Configure logging from ``logging.yml``, or console-only on failure."""
    log_dir = os.environ.get("DEVDOC_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)

    config = ConfigManager().get_logging_config()
    if not isinstance(config, dict) or not config.get("version"):
        _setup_minimal_logging("logging.yml has no 'version'")
    else:
        try:
            logging.config.dictConfig(_point_file_handler(config, log_dir))
        except _CONFIG_ERRORS as exc:
            _setup_minimal_logging(str(exc))
        else:
            logging.getLogger(__name__).info("Logging configured from logging.yml (log dir: %s)", log_dir)

    _apply_debug_overrides()


def _point_file_handler(config: Dict[str, Any], log_dir: str) -> Dict[str, Any]:
    """Return a copy of ``config`` whose ``file`` handler writes into ``log_dir``.

    The configuration cached by :class:`ConfigManager` is left untouched.
    """
    handlers = config.get("handlers")
    if not isinstance(handlers, dict) or not isinstance(handlers.get("file"), dict):
        return config
    file_handler = {**handlers["file"], "filename": os.path.join(log_dir, "devdoc.log")}
    return {**config, "handlers": {**handlers, "file": file_handler}}


def _setup_minimal_logging(reason: str) -> None:
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'simple': {'format': LOG_FORMAT}},
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {'level': 'INFO', 'handlers': ['console']},
    })
    logging.getLogger(__name__).error("Console-only logging, could not apply logging.yml: %s", reason)


def _apply_debug_overrides() -> None:
    names = [m.strip() for m in os.environ.get('DEVDOC_DEBUG_MODULES', '').split(',') if m.strip()]
    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        if not any(h.level <= logging.DEBUG for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
        logger.info("Debug override active for logger '%s'", name)
