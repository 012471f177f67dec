"""Error event record and its single-line rendering."""

from dataclasses import dataclass, field
from datetime import datetime

from .severity import Severity, label_for

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LINE_TEMPLATE = "[{timestamp}] Type: {label} - Message: {message} in {file} on line {line}\n"


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """A single observed error.

    Events are created when an error is observed, rendered once and then
    discarded. The severity is kept exactly as received so that codes outside
    the known table still render with the unknown label.

    Attributes:
        severity:       Severity member or raw numeric severity code
        message:        Error message text
        source_file:    File where the error was raised
        source_line:    Line number where the error was raised
        timestamp:      Local time at which the error was observed
    """

    severity: Severity | int
    message: str
    source_file: str
    source_line: int
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def level(self) -> Severity:
        """Severity resolved against the known table."""
        return Severity.from_code(int(self.severity))

    @property
    def label(self) -> str:
        """Label written to the log for this event's severity."""
        return label_for(self.severity)

    def format_line(self) -> str:
        """Render the event as one newline-terminated log line.

        Returns:
            Formatted log line
        """
        return LINE_TEMPLATE.format(
            timestamp=self.timestamp.strftime(TIMESTAMP_FORMAT),
            label=self.label,
            message=self.message,
            file=self.source_file,
            line=int(self.source_line),
        )
