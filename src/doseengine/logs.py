# src/doseengine/logs.py
import logging
from typing import Optional

import structlog

from . import config


def configure_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """
    Set up structlog for the engine and viewer.

    level : level name ("DEBUG", "INFO", ...), default from DOSEENGINE_LOG_LEVEL
    json  : render JSON lines instead of the console format, default from DOSEENGINE_LOG_JSON
    """
    level = (level or config.LOG_LEVEL).upper()
    json = config.LOG_JSON if json is None else json
    numeric = logging.getLevelName(level)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
