"""Structured console diagnostics for logdancer itself.

The package reports its own problems (for example a log file that cannot be
written) through structlog on top of the standard library logging module.
Handlers are attached to the "logdancer" logger only, so the host's logging
tree is left alone.
"""

import logging
import sys
import threading
from typing import Final

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from .config import DiagnosticsConfig

# Default processor configurations
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_TIMESTAMP_UTC = False
LOGGER_NAMESPACE = "logdancer"

_lock: Final = threading.Lock()
_configured = False


def create_shared_processors() -> list[Processor]:
    """Create the list of shared structlog processors.

    Returns:
        List of structlog processors for console output
    """
    return [
        # Context management
        structlog.contextvars.merge_contextvars,

        # Standard library integration
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),

        # Error handling and stack traces
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,

        # Timestamp handling
        structlog.processors.TimeStamper(
            fmt=DEFAULT_TIMESTAMP_FORMAT,
            utc=DEFAULT_TIMESTAMP_UTC
        ),
    ]


def create_console_handler(
        config: DiagnosticsConfig,
        shared_processors: list[Processor]
) -> logging.Handler:
    """Create and configure the diagnostics console handler.

    Writes to stderr so diagnostics never mix with the host's own output.

    Args:
        config:             Diagnostics configuration settings
        shared_processors:  List of shared structlog processors to use

    Returns:
        Configured StreamHandler instance
    """
    exception_formatter = (
        structlog.dev.rich_traceback if config.rich_tracebacks else structlog.dev.plain_traceback
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(
                colors=config.colors,
                exception_formatter=exception_formatter
            ),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def configure_diagnostics(config: DiagnosticsConfig | None = None) -> None:
    """Configure the "logdancer" logger and its console handler.

    structlog's global configuration is left to the host; diagnostics loggers
    are wrapped individually in get_logger(). Calling this again replaces the
    previous handler, so a later explicit configuration wins over the
    console-only fallback.

    Args:
        config: Diagnostics settings, defaults when omitted
    """
    global _configured

    config = config or DiagnosticsConfig()
    handler = create_console_handler(config, create_shared_processors())

    with _lock:
        logger = logging.getLogger(LOGGER_NAMESPACE)
        logger.handlers.clear()  # We only want our handler
        logger.addHandler(handler)
        logger.setLevel(config.level)
        logger.propagate = False
        _configured = True


def is_configured() -> bool:
    return _configured


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a diagnostics logger.

    Falls back to console-only defaults when diagnostics have not been
    configured yet.

    Args:
        name: Logger name below the "logdancer" namespace (typically __name__)

    Returns:
        BoundLogger writing through the "logdancer" console handler
    """
    if not _configured:
        configure_diagnostics()

    return structlog.wrap_logger(
        logging.getLogger(name or LOGGER_NAMESPACE),
        processors=[
            *create_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=BoundLogger,
    )
