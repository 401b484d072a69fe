"""Logging configuration using structlog.

Console output is colored for a terminal. When stdout is not a TTY (a
container or a serverless runtime) each event is written as one JSON line.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

from orders_api.config import settings


def _renderer(json_output: bool) -> Processor:
    if json_output:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(json_output: bool | None = None) -> None:
    """Configure structlog and route stdlib logging through it.

    Both structlog loggers and stdlib loggers (uvicorn, httpx) are rendered
    through the same ProcessorFormatter so every line shares one format.

    Args:
        json_output: Render JSON lines instead of console output. Defaults to
            the LOG_JSON setting, or to JSON whenever stdout is not a TTY.
    """
    if json_output is None:
        json_output = settings.log_json if settings.log_json is not None else not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    else:
        shared_processors.append(structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False))

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    final_processors: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_output:
        # Tracebacks go into the "exception" key instead of raw lines
        final_processors.append(structlog.processors.format_exc_info)
    final_processors.append(_renderer(json_output))

    formatter = structlog.stdlib.ProcessorFormatter(
        # Foreign pre-chain handles logs from non-structlog loggers
        foreign_pre_chain=shared_processors,
        processors=final_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # Request lines from httpx would duplicate our own store logging
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configured = False


def setup_logging() -> None:
    """Setup logging once. Safe to call multiple times."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True
