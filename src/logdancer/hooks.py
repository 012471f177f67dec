"""Process-wide error hook registration.

This module is the single point where logdancer touches global interpreter
state. It routes uncaught exceptions (main thread and worker threads) and
displayed warnings to one injected ErrorEventLogger. When the logger confirms
a write the interpreter's default display is suppressed; otherwise the hook
that was installed before ours runs as usual.

Only one logger can be installed at a time.
"""

import sys
import threading
import traceback
import warnings
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Callable, Final

from .logger import ErrorEventLogger
from .severity import Severity

UNKNOWN_SOURCE = ("<unknown>", 0)


@dataclass(frozen=True)
class PreviousHooks:
    """Hooks that were active before installation.

    Attributes:
        excepthook:             Previous sys.excepthook
        threading_excepthook:   Previous threading.excepthook
        showwarning:            Previous warnings.showwarning
    """

    excepthook: Callable[..., Any]
    threading_excepthook: Callable[..., Any]
    showwarning: Callable[..., Any]


class HookState:
    """Manages the globally installed logger.

    Attributes:
        _logger:    Installed logger, None when not installed
        _previous:  Hooks to restore on uninstall
        _lock:      Threading lock for install/uninstall
        _local:     Per-thread re-entrancy flag
    """

    def __init__(self) -> None:
        """Initialize the hook state."""
        self._logger: ErrorEventLogger | None = None
        self._previous: PreviousHooks | None = None
        self._lock: Final = threading.Lock()
        self._local: Final = threading.local()

    @property
    def logger(self) -> ErrorEventLogger | None:
        """Installed logger, None when not installed."""
        return self._logger

    @property
    def previous(self) -> PreviousHooks | None:
        """Hooks to restore on uninstall, None when not installed."""
        return self._previous

    def is_installed(self) -> bool:
        return self._logger is not None

    def install(self, logger: ErrorEventLogger) -> None:
        """Install the hooks and route them to a logger.

        Args:
            logger: Logger receiving every captured error

        Raises:
            RuntimeError: If a logger is already installed
        """
        with self._lock:
            if self.is_installed():
                msg = (
                    "An error logger is already installed. "
                    "Call uninstall() before installing another one."
                )
                raise RuntimeError(msg)

            self._previous = PreviousHooks(
                excepthook=sys.excepthook,
                threading_excepthook=threading.excepthook,
                showwarning=warnings.showwarning,
            )
            self._logger = logger
            sys.excepthook = _excepthook
            threading.excepthook = _threading_excepthook
            warnings.showwarning = _showwarning

    def uninstall(self) -> None:
        """Restore the hooks that were active before install(). No-op if not installed."""
        with self._lock:
            if self._previous is None:
                return

            sys.excepthook = self._previous.excepthook
            threading.excepthook = self._previous.threading_excepthook
            warnings.showwarning = self._previous.showwarning
            self._previous = None
            self._logger = None

    def report(self, severity: Severity | int, message: str, file: str, line: int) -> bool:
        """Forward an error to the installed logger.

        Errors raised while a report is already in progress on the same
        thread are not logged again.

        Returns:
            True if the installed logger wrote the event
        """
        logger = self._logger
        if logger is None or getattr(self._local, "active", False):
            return False

        self._local.active = True
        try:
            return logger.handle(severity, message, file, line)
        finally:
            self._local.active = False


# Global hook state
_hook_state: Final = HookState()


def install(logger: ErrorEventLogger) -> None:
    """Install logdancer as the process-wide error handler.

    Args:
        logger: Logger receiving every captured error

    Raises:
        RuntimeError: If a logger is already installed
    """
    _hook_state.install(logger)


def uninstall() -> None:
    """Remove logdancer's hooks and restore the previous ones."""
    _hook_state.uninstall()


def installed_logger() -> ErrorEventLogger | None:
    """Return the process-wide logger, or None when none is installed."""
    return _hook_state.logger


def report_error(severity: Severity | int, message: str, file: str, line: int) -> bool:
    """Host callback: record an error through the installed logger.

    Args:
        severity:   Severity member or raw numeric code
        message:    Error message
        file:       File where the error was raised
        line:       Line number where the error was raised

    Returns:
        True if the event was written and default handling can be skipped
    """
    return _hook_state.report(severity, message, file, line)


def severity_for_exception(exc_type: type[BaseException]) -> Severity:
    """Map an exception type to a severity: syntax errors are parse errors."""
    if issubclass(exc_type, SyntaxError):
        return Severity.PARSE_ERROR
    return Severity.ERROR


def severity_for_warning(category: type[Warning]) -> Severity:
    """Map a warning category to a severity."""
    if issubclass(category, (DeprecationWarning, PendingDeprecationWarning)):
        return Severity.DEPRECATED
    if issubclass(category, FutureWarning):
        return Severity.USER_DEPRECATED
    if issubclass(category, SyntaxWarning):
        return Severity.COMPILE_WARNING
    if issubclass(category, UserWarning):
        return Severity.USER_WARNING
    return Severity.WARNING


def exception_source(
        exc: BaseException | None,
        tb: TracebackType | None
) -> tuple[str, int]:
    """Find the file and line where an exception was raised.

    Syntax errors carry their own location; everything else uses the
    innermost traceback frame.

    Returns:
        (file, line) tuple, ("<unknown>", 0) when no location is available
    """
    if isinstance(exc, SyntaxError) and exc.filename:
        return exc.filename, exc.lineno or 0

    frames = traceback.extract_tb(tb) if tb is not None else []
    if not frames:
        return UNKNOWN_SOURCE

    last = frames[-1]
    return last.filename, last.lineno or 0


def _exception_message(exc_type: type[BaseException], exc: BaseException | None) -> str:
    if isinstance(exc, SyntaxError) and exc.msg:
        text = exc.msg
    else:
        text = str(exc) if exc is not None else ""
    return f"Uncaught {exc_type.__name__}: {text}" if text else f"Uncaught {exc_type.__name__}"


def _excepthook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None
) -> None:
    previous = _hook_state.previous
    fallback = previous.excepthook if previous else sys.__excepthook__

    if issubclass(exc_type, KeyboardInterrupt):
        fallback(exc_type, exc, tb)
        return

    file, line = exception_source(exc, tb)
    if not report_error(severity_for_exception(exc_type), _exception_message(exc_type, exc), file, line):
        fallback(exc_type, exc, tb)


def _threading_excepthook(args: threading.ExceptHookArgs) -> None:
    previous = _hook_state.previous
    fallback = previous.threading_excepthook if previous else threading.__excepthook__

    # The default hook ignores SystemExit; keep that behaviour
    if issubclass(args.exc_type, SystemExit):
        fallback(args)
        return

    file, line = exception_source(args.exc_value, args.exc_traceback)
    message = _exception_message(args.exc_type, args.exc_value)
    if args.thread is not None:
        message = f"{message} (thread {args.thread.name})"

    if not report_error(severity_for_exception(args.exc_type), message, file, line):
        fallback(args)


def _showwarning(
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: Any = None,
        line: str | None = None
) -> None:
    if report_error(severity_for_warning(category), str(message), filename, lineno):
        return

    previous = _hook_state.previous
    if previous is not None:
        previous.showwarning(message, category, filename, lineno, file, line)
        return

    # Stale reference after uninstall; print the way the default hook does
    stream = file if file is not None else sys.stderr
    if stream is None:
        return
    try:
        stream.write(warnings.formatwarning(message, category, filename, lineno, line))
    except OSError:
        pass
