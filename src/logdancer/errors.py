"""Exception types raised by logdancer."""


class LogDancerError(Exception):
    """Base class for all logdancer errors."""


class LogWriteError(LogDancerError, OSError):
    """Raised when the log directory, marker file or log file cannot be written."""


class ConfigurationError(LogDancerError, ValueError):
    """Raised when configuration values are missing or invalid."""
