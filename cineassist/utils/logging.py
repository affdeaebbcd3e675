"""Structured logging setup using structlog.

Console output while developing, one JSON object per line in production.
The renderer is picked from ``APP_ENV`` unless ``json_output`` forces it.
Standard-library loggers (uvicorn, httpx, openai) are routed through the
same processor chain, and the chattiest of them are capped at WARNING so
one TMDB request per cascade stage does not flood the log.
"""

import logging
import os
import sys
from typing import TextIO

import structlog

# Libraries that log every outgoing request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Force the JSON renderer regardless of ``APP_ENV``.
        stream: Where log lines go. Without one, ``sys.stdout`` is looked up
            whenever a logger is created, so a swapped stdout is honoured.
            The CLI passes stderr so command output stays clean.

    Returns:
        The root structlog logger.
    """
    level = logging.getLevelName(log_level.upper())
    target = stream if stream is not None else sys.stdout
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=target.isatty())
    )

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)
