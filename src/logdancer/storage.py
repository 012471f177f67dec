"""On-disk storage for error logs.

This module owns the two filesystem operations of the package: bootstrapping
the protected log directory and appending rendered lines to the log file.
All filesystem failures surface as LogWriteError.
"""

import os
from pathlib import Path

from .errors import LogWriteError

LOG_DIR_NAME = "logdancer"
LOG_FILE_NAME = "app_errors.log"
MARKER_FILE_NAME = ".htaccess"
MARKER_CONTENT = "Order deny,allow\nDeny from all\n"

_APPEND_FLAGS = os.O_WRONLY | os.O_APPEND | os.O_CREAT | getattr(os, "O_BINARY", 0)


def default_log_dir(base_dir: str | Path) -> Path:
    """Return the conventional log directory below a base storage directory."""
    return Path(base_dir) / LOG_DIR_NAME


def ensure_protected_directory(
        path: str | Path,
        marker_content: str = MARKER_CONTENT
) -> Path:
    """Create the log directory and its access-restriction marker.

    Parents are created as needed. The marker file is created exclusively, so
    an existing marker is never overwritten, whatever its content. Calling
    this repeatedly leaves the directory in the same state as calling it once.

    Args:
        path:           Directory that holds the log file
        marker_content: Content written to a newly created marker file

    Returns:
        Path to the marker file

    Raises:
        LogWriteError: If the directory or marker cannot be created
    """
    directory = Path(path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except FileExistsError as e:
        msg = f"Log directory path exists and is not a directory: {directory}"
        raise LogWriteError(msg) from e
    except OSError as e:
        msg = f"Cannot create log directory {directory}: {e}"
        raise LogWriteError(msg) from e

    marker = directory / MARKER_FILE_NAME
    try:
        with marker.open("x", encoding="utf-8", newline="") as f:
            f.write(marker_content)
    except FileExistsError:
        pass
    except OSError as e:
        msg = f"Cannot create marker file {marker}: {e}"
        raise LogWriteError(msg) from e

    return marker


def append_line(path: str | Path, line: str, encoding: str = "utf-8") -> int:
    """Append one rendered line to a log file.

    The file is opened in append mode and the whole line is issued as a
    single write, so concurrent readers never observe a partial line and the
    OS assigns offsets for concurrent appenders. The file is created if it is
    missing; its parent directory is not. Characters the encoding cannot
    represent (including lone surrogates from undecodable file names) are
    written as backslash escapes.

    Args:
        path:       Log file path
        line:       Text to append, normally newline-terminated
        encoding:   Character encoding of the log file

    Returns:
        Number of bytes written

    Raises:
        LogWriteError: If the file cannot be opened or fully written
    """
    data = line.encode(encoding, errors="backslashreplace")
    try:
        fd = os.open(path, _APPEND_FLAGS, 0o644)
    except OSError as e:
        msg = f"Cannot open log file {path}: {e}"
        raise LogWriteError(msg) from e

    try:
        written = os.write(fd, data)
    except OSError as e:
        msg = f"Cannot write to log file {path}: {e}"
        raise LogWriteError(msg) from e
    finally:
        os.close(fd)

    if written != len(data):
        msg = f"Short write to log file {path}: {written} of {len(data)} bytes"
        raise LogWriteError(msg)
    return written
