"""The error event logger.

ErrorEventLogger is the object handed to whatever part of the host needs to
report errors. It filters by severity, renders each event to one line and
appends that line to the log file. The module-level log_event() offers the
same operation as a plain function.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .diagnostics import get_logger
from .event import ErrorEvent
from .reporting import ReportingFilter
from .severity import Severity
from .storage import LOG_FILE_NAME, append_line, default_log_dir, ensure_protected_directory


def log_event(
        event: ErrorEvent,
        log_file_path: str | Path,
        reporting: ReportingFilter | None = None,
        encoding: str = "utf-8"
) -> bool:
    """Append a formatted event to a log file.

    Args:
        event:          Event to record
        log_file_path:  Log file; created if missing
        reporting:      Enabled severities, every severity when omitted
        encoding:       Character encoding of the log file

    Returns:
        True if a line was written, False if the severity is not enabled

    Raises:
        LogWriteError: If the log file cannot be written
    """
    if reporting is not None and not reporting.is_enabled(event.severity):
        return False

    append_line(log_file_path, event.format_line(), encoding)
    return True


@dataclass
class ErrorEventLogger:
    """Injectable error logger bound to one log file.

    Attributes:
        log_file:   Path of the append-only log file
        reporting:  Severities that are written
        encoding:   Character encoding of the log file
    """

    log_file: Path
    reporting: ReportingFilter = field(default_factory=ReportingFilter)
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        self.log_file = Path(self.log_file)
        self._diagnostics = get_logger(__name__).bind(log_file=str(self.log_file))

    @classmethod
    def for_base_dir(
            cls,
            base_dir: str | Path,
            reporting: ReportingFilter | None = None,
            encoding: str = "utf-8",
            file_name: str = LOG_FILE_NAME
    ) -> "ErrorEventLogger":
        """Create a logger writing to <base_dir>/logdancer/<file_name>.

        Args:
            base_dir:   Base storage directory
            reporting:  Enabled severities, every severity when omitted
            encoding:   Character encoding of the log file
            file_name:  Log file name inside the log directory

        Returns:
            New ErrorEventLogger instance
        """
        return cls(
            log_file=default_log_dir(base_dir) / file_name,
            reporting=reporting or ReportingFilter(),
            encoding=encoding,
        )

    def is_enabled(self, severity: Severity | int) -> bool:
        """Check whether events of this severity are written."""
        return self.reporting.is_enabled(severity)

    def protect_directory(self) -> Path:
        """Bootstrap the protected directory holding the log file.

        Returns:
            Path to the marker file

        Raises:
            LogWriteError: If the directory or marker cannot be created
        """
        return ensure_protected_directory(self.log_file.parent)

    def log_event(self, event: ErrorEvent) -> bool:
        """Record an event.

        Args:
            event: Event to record

        Returns:
            True if a line was written, False if the severity is not enabled

        Raises:
            LogWriteError: If the log file cannot be written
        """
        return log_event(event, self.log_file, self.reporting, self.encoding)

    def log(
            self,
            severity: Severity | int,
            message: str,
            source_file: str,
            source_line: int,
            timestamp: datetime | None = None
    ) -> bool:
        """Build an event from its parts and record it.

        Raises:
            LogWriteError: If the log file cannot be written
        """
        event = ErrorEvent(
            severity=severity,
            message=message,
            source_file=source_file,
            source_line=source_line,
            timestamp=timestamp or datetime.now(),
        )
        return self.log_event(event)

    def handle(
            self,
            severity_code: Severity | int,
            message: str,
            file: str,
            line: int
    ) -> bool:
        """Host error callback.

        Never raises. A failed write, or any other failure while building or
        writing the line, is reported once through the diagnostics logger and
        the event is dropped.

        Args:
            severity_code:  Severity member or raw numeric code
            message:        Error message
            file:           File where the error was raised
            line:           Line number where the error was raised

        Returns:
            True only when the event was written, meaning the host's default
            handling may be suppressed
        """
        try:
            return self.log(severity_code, message, file, line)
        except Exception as e:
            self._diagnostics.warning(
                "Dropped error event",
                severity=severity_code,
                error_message=message,
                source=f"{file}:{line}",
                reason=str(e),
                error_type=type(e).__name__,
            )
            return False
