"""Severity level definitions and label lookup.

Numeric codes follow the classic host error-level constants so codes coming
from an external source (or a stored bitmask) can be looked up directly.
"""

from enum import IntEnum
from typing import Literal, get_args

UNKNOWN_LABEL = "UNKNOWN ERROR TYPE"

SeverityName = Literal[
    "ERROR",
    "WARNING",
    "PARSE_ERROR",
    "NOTICE",
    "CORE_ERROR",
    "CORE_WARNING",
    "COMPILE_ERROR",
    "COMPILE_WARNING",
    "USER_ERROR",
    "USER_WARNING",
    "USER_NOTICE",
    "STRICT_NOTICE",
    "RECOVERABLE_ERROR",
    "DEPRECATED",
    "USER_DEPRECATED",
    "UNKNOWN",
]
VALID_SEVERITY_NAMES = frozenset(get_args(SeverityName))


class Severity(IntEnum):
    """Closed set of error severities."""

    UNKNOWN = 0
    ERROR = 1
    WARNING = 2
    PARSE_ERROR = 4
    NOTICE = 8
    CORE_ERROR = 16
    CORE_WARNING = 32
    COMPILE_ERROR = 64
    COMPILE_WARNING = 128
    USER_ERROR = 256
    USER_WARNING = 512
    USER_NOTICE = 1024
    STRICT_NOTICE = 2048
    RECOVERABLE_ERROR = 4096
    DEPRECATED = 8192
    USER_DEPRECATED = 16384

    @classmethod
    def from_code(cls, code: int) -> "Severity":
        """Look up a severity by its numeric code.

        Args:
            code: Numeric severity code

        Returns:
            Matching Severity, or Severity.UNKNOWN for unrecognized codes
        """
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """Parse a severity name as written in configuration files.

        Args:
            name: Severity name, case-insensitive (e.g. "warning")

        Returns:
            Matching Severity

        Raises:
            ValueError: If the name is not a known severity
        """
        normalized = name.strip().upper()
        if normalized not in VALID_SEVERITY_NAMES:
            msg = (
                f"Invalid severity: {name!r}. "
                f"Must be one of: {', '.join(sorted(VALID_SEVERITY_NAMES))}"
            )
            raise ValueError(msg)
        return cls[normalized]

    @property
    def label(self) -> str:
        """Label written to the log, "UNKNOWN ERROR TYPE" for UNKNOWN."""
        return SEVERITY_LABELS.get(self, UNKNOWN_LABEL)


SEVERITY_LABELS: dict[Severity, str] = {
    Severity.ERROR: "ERROR",
    Severity.WARNING: "WARNING",
    Severity.PARSE_ERROR: "PARSING ERROR",
    Severity.NOTICE: "NOTICE",
    Severity.CORE_ERROR: "CORE ERROR",
    Severity.CORE_WARNING: "CORE WARNING",
    Severity.COMPILE_ERROR: "COMPILE ERROR",
    Severity.COMPILE_WARNING: "COMPILE WARNING",
    Severity.USER_ERROR: "USER ERROR",
    Severity.USER_WARNING: "USER WARNING",
    Severity.USER_NOTICE: "USER NOTICE",
    Severity.STRICT_NOTICE: "STRICT NOTICE",
    Severity.RECOVERABLE_ERROR: "RECOVERABLE ERROR",
    Severity.DEPRECATED: "DEPRECATED",
    Severity.USER_DEPRECATED: "USER DEPRECATED",
}

KNOWN_SEVERITIES = frozenset(SEVERITY_LABELS)


def label_for(severity: Severity | int) -> str:
    """Return the log label for a severity or raw severity code.

    Args:
        severity: Severity member or raw integer code

    Returns:
        The label from the fixed table, or "UNKNOWN ERROR TYPE"
    """
    return Severity.from_code(int(severity)).label
