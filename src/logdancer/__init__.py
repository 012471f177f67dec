"""Error event capture to a protected, append-only log file.

This package records errors raised inside a host process as single formatted
lines appended to ``<base-dir>/logdancer/app_errors.log``. The log directory
is protected with an access-restriction marker file for web servers that
honour ``.htaccess`` rules.

Key Features:
    - Fixed severity table with an "UNKNOWN ERROR TYPE" fallback
    - Set-based severity filtering with an early-return guard
    - Single-write ``O_APPEND`` appends, no partial lines
    - Idempotent directory bootstrap that never overwrites the marker file
    - Optional process-wide hooks for uncaught exceptions and warnings
    - TOML-based configuration with sensible defaults
    - Structured console diagnostics via structlog

Basic Usage:
    ```python
    from logdancer import ErrorEventLogger, Severity

    # Explicit injection: pass the logger to whatever reports errors
    logger = ErrorEventLogger.for_base_dir("storage")
    logger.protect_directory()
    logger.log(Severity.WARNING, "Undefined index", "/app/index.py", 42)

    # Builder with the process-wide handler installed
    from logdancer import configure_capture

    logger = (
        configure_capture("config/logdancer.toml")
        .with_base_dir("storage")
        .with_global_handler()
        .build()
    )

    # From a host settings store
    from logdancer import initialize

    logger = initialize({"logdancer_enable_global_error_handler": True}, "storage")
    ```

Log Format:
    ```text
    [2024-01-15 10:30:00] Type: WARNING - Message: Undefined index in /app/index.py on line 42
    ```

Configuration:
    ```toml
    [logdancer]
    enable_global_error_handler = true
    base_dir = "storage"            # relative to the config file
    file_name = "app_errors.log"
    encoding = "utf-8"
    reporting = ["ERROR", "WARNING"]  # omit to report every severity

    [logdancer.diagnostics]
    level = "WARNING"
    colors = true
    rich_tracebacks = true
    ```

Implementation Notes:
    - Log lines use local time
    - Write failures are reported through diagnostics and the event is dropped
    - With the global handler installed, the interpreter's default display is
      skipped only when the event was actually written
    - Only one logger can be installed process-wide at a time
"""

from .config import CaptureConfig, DiagnosticsConfig
from .errors import ConfigurationError, LogDancerError, LogWriteError
from .event import ErrorEvent
from .factory import configure_capture, initialize
from .hooks import install, installed_logger, report_error, uninstall
from .logger import ErrorEventLogger, log_event
from .reporting import ReportingFilter
from .severity import Severity, label_for
from .storage import ensure_protected_directory

__all__ = [
    "CaptureConfig",
    "ConfigurationError",
    "DiagnosticsConfig",
    "ErrorEvent",
    "ErrorEventLogger",
    "LogDancerError",
    "LogWriteError",
    "ReportingFilter",
    "Severity",
    "configure_capture",
    "ensure_protected_directory",
    "initialize",
    "install",
    "installed_logger",
    "label_for",
    "log_event",
    "report_error",
    "uninstall",
]
