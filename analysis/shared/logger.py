"""
Logging utilities for arbscan analysis agents.
"""

import logging
import sys
from typing import Any, ContextManager

import structlog
from structlog.types import Processor


def log_context(**context: Any) -> ContextManager:
    """Attach context (e.g. ``cycle=3``) to every event logged inside the block."""
    return structlog.contextvars.bound_contextvars(**context)


class ComponentLogger:
    """Pipeline component logger that stamps the component name on every event."""

    def __init__(self, component: str):
        self.component = component
        self.logger = structlog.get_logger(component, component=component)

    def info(self, message: str, **context: Any) -> None:
        self.logger.info(message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.logger.warning(message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.logger.error(message, **context)

    def debug(self, message: str, **context: Any) -> None:
        self.logger.debug(message, **context)

    def exception(self, message: str, **context: Any) -> None:
        """Log with the active exception's traceback."""
        self.logger.exception(message, **context)

    def bind(self, **context: Any) -> "ComponentLogger":
        """Create a new logger with additional bound context."""
        bound = ComponentLogger(self.component)
        bound.logger = self.logger.bind(**context)
        return bound


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
) -> None:
    """Configure structlog: console output in development, JSON lines in production."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Components create loggers at import time, before run() reconfigures
        cache_logger_on_first_use=False,
    )


# Configure on import with defaults
configure_logging()
