# -*- coding: utf-8 -*-
"""
Logging setup shared by every module.

Call `configure_logging()` once from the entry point, then grab loggers with
`get_logger(__name__)`. Loggers obtained before configuration still work;
structlog binds them lazily.
"""

import logging
import sys
from typing import Optional

import structlog


def configure_logging(level: str = "INFO", colors: Optional[bool] = None) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")

    if colors is None:
        colors = sys.stdout.isatty()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    return structlog.get_logger(name)
