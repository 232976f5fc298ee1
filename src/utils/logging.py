"""structlog setup shared by the API and the diagnostic scripts."""

from __future__ import annotations

import logging
import sys

import structlog

# Loggers that should go through the root handler instead of their own
_PROPAGATED = ("uvicorn", "uvicorn.access", "uvicorn.error")
# The driver logs every pool event at DEBUG/INFO
_DRIVER_LOGGER = "neo4j"


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Route structlog and stdlib records through one stdout handler.

    ``log_format`` is ``"json"`` for production or ``"console"`` for local runs.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_format),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level = getattr(logging, log_level.upper(), logging.INFO)
    root.setLevel(level)

    for name in _PROPAGATED:
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True

    logging.getLogger(_DRIVER_LOGGER).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
