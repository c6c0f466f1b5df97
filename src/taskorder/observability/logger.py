"""structlog setup for the resolver.

Build and traversal events are emitted at DEBUG, run summaries at INFO.
Everything is written to stderr so stdout only ever holds the order.
"""

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import structlog

_log_context: ContextVar[dict[str, Any]] = ContextVar("taskorder_log_context", default={})

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class LogContext:
    """
    Bind key/value pairs to every event logged inside a `with` block.

    Usage:
        with LogContext(rule_file="tasks.txt", root=1):
            logger.info("Resolving")
    """

    def __init__(self, **fields: Any) -> None:
        self.fields = fields
        self.token = None

    def __enter__(self) -> "LogContext":
        merged = {**_log_context.get(), **self.fields}
        self.token = _log_context.set(merged)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.token:
            _log_context.reset(self.token)


def _context_processor(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Copy the active LogContext fields into the event."""
    fields = _log_context.get()
    if fields:
        event_dict.update(fields)
    return event_dict


def get_log_level(level: str) -> int:
    """Map a level name to its number, case-insensitively. Unknown names mean INFO."""
    return LOG_LEVELS.get(level.upper(), logging.INFO)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """
    Route structlog through stdlib logging.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_logs: Render events as JSON lines instead of the console format
        log_file: Also append events to this file, creating its directory
    """
    log_level = get_log_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(format="%(message)s", level=log_level, handlers=handlers, force=True)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _context_processor,
    ]
    processors.append(
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
