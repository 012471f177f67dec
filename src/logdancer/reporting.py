"""Severity reporting filter.

This module decides which severities are "enabled" and therefore written to
the log. The set of enabled levels is external state supplied by the host;
the logger only performs a membership test against it.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .severity import KNOWN_SEVERITIES, Severity

KNOWN_MASK = sum(KNOWN_SEVERITIES)


@dataclass(frozen=True, slots=True)
class ReportingFilter:
    """Set of severities that should be logged.

    Raw codes that fall outside the known table are treated as
    Severity.UNKNOWN, so they are logged exactly when UNKNOWN is enabled.

    Attributes:
        levels: Enabled severities
    """

    levels: frozenset[Severity] = frozenset(Severity)

    def is_enabled(self, severity: Severity | int) -> bool:
        """Check whether a severity should be logged.

        Args:
            severity: Severity member or raw numeric code

        Returns:
            True if events of this severity are written, False otherwise
        """
        return Severity.from_code(int(severity)) in self.levels

    def with_level(self, *severities: Severity) -> "ReportingFilter":
        """Create a new filter with additional severities enabled.

        Args:
            severities: Severities to enable

        Returns:
            New ReportingFilter instance
        """
        return ReportingFilter(levels=self.levels | frozenset(severities))

    def without_level(self, *severities: Severity) -> "ReportingFilter":
        """Create a new filter with the given severities disabled.

        Args:
            severities: Severities to disable

        Returns:
            New ReportingFilter instance
        """
        return ReportingFilter(levels=self.levels - frozenset(severities))

    @classmethod
    def all(cls) -> "ReportingFilter":
        """Filter that reports every severity, including UNKNOWN."""
        return cls()

    @classmethod
    def none(cls) -> "ReportingFilter":
        """Filter that reports nothing."""
        return cls(levels=frozenset())

    @classmethod
    def only(cls, *severities: Severity) -> "ReportingFilter":
        """Filter that reports exactly the given severities."""
        return cls(levels=frozenset(severities))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ReportingFilter":
        """Build a filter from severity names as written in configuration.

        Args:
            names: Severity names (case-insensitive)

        Returns:
            New ReportingFilter instance

        Raises:
            ValueError: If any name is not a known severity
        """
        return cls(levels=frozenset(Severity.from_name(name) for name in names))

    @classmethod
    def from_bitmask(cls, mask: int) -> "ReportingFilter":
        """Build a filter from an external bitmask of severity codes.

        Known severities are enabled by their own bit. UNKNOWN is enabled when
        the mask reports every known severity or sets bits outside the known
        table, so raw codes outside the table are still logged under a
        report-everything mask.

        Args:
            mask: Integer bitmask of enabled severity codes

        Returns:
            New ReportingFilter instance
        """
        levels = {s for s in KNOWN_SEVERITIES if mask & s}
        if mask & ~KNOWN_MASK or mask & KNOWN_MASK == KNOWN_MASK:
            levels.add(Severity.UNKNOWN)
        return cls(levels=frozenset(levels))
