"""
structlog configuration shared by the API server, the dashboard CLI and scripts.
"""

from __future__ import annotations

from typing import Literal, Optional, TextIO

import structlog


def configure_logging(
    level: str = "info",
    fmt: Literal["json", "text"] = "json",
    stream: Optional[TextIO] = None,
) -> None:
    """Configure structlog with the specified level and format.

    ``stream`` defaults to the current stdout. The CLI passes stderr so that
    its report output stays clean.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level.lower()),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
    )
