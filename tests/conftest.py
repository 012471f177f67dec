"""Shared fixtures for logdancer tests."""

from datetime import datetime
from pathlib import Path

import pytest

from logdancer import ErrorEvent, Severity, hooks


@pytest.fixture(autouse=True)
def _restore_hooks(monkeypatch: pytest.MonkeyPatch):
    """Make sure no test leaves a process-wide logger installed."""
    yield
    hooks.uninstall()


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    return tmp_path / "app_errors.log"


@pytest.fixture
def warning_event() -> ErrorEvent:
    return ErrorEvent(
        severity=Severity.WARNING,
        message="Undefined index",
        source_file="/app/index.php",
        source_line=42,
        timestamp=datetime(2024, 1, 15, 10, 30, 0),
    )
