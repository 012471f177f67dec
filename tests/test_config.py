from pathlib import Path

import pytest

from logdancer import CaptureConfig, ConfigurationError, DiagnosticsConfig, ReportingFilter, Severity
from logdancer.config import coerce_flag, read_enable_flag


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "logdancer.toml"
    path.write_text(text)
    return path


def test_defaults(tmp_path):
    config = CaptureConfig.create_default(tmp_path)

    assert config.enabled is False
    assert config.log_dir == tmp_path / "logdancer"
    assert config.log_file == tmp_path / "logdancer" / "app_errors.log"
    assert config.reporting == ReportingFilter.all()
    assert config.diagnostics == DiagnosticsConfig()


def test_from_toml(tmp_path):
    path = _write(tmp_path, """
[logdancer]
enable_global_error_handler = true
base_dir = "storage"
file_name = "php_errors.log"
reporting = ["error", "WARNING"]

[logdancer.diagnostics]
level = "debug"
colors = false
""")

    config = CaptureConfig.from_toml(path)

    assert config.enabled is True
    assert config.base_dir == tmp_path / "storage"
    assert config.log_file == tmp_path / "storage" / "logdancer" / "php_errors.log"
    assert config.reporting.levels == {Severity.ERROR, Severity.WARNING}
    assert config.diagnostics == DiagnosticsConfig(level="DEBUG", colors=False, rich_tracebacks=True)


def test_from_toml_keeps_absolute_base_dir(tmp_path):
    base = tmp_path / "absolute"
    path = _write(tmp_path, f'[logdancer]\nbase_dir = "{base.as_posix()}"\n')
    assert CaptureConfig.from_toml(path).base_dir == base


def test_missing_section_raises(tmp_path):
    path = _write(tmp_path, "[other]\nkey = 1\n")
    with pytest.raises(ConfigurationError, match="Missing required configuration key"):
        CaptureConfig.from_toml(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        CaptureConfig.from_toml(tmp_path / "nope.toml")


def test_malformed_toml_raises(tmp_path):
    path = _write(tmp_path, "[logdancer\n")
    with pytest.raises(ConfigurationError, match="Failed to parse TOML"):
        CaptureConfig.from_toml(path)


@pytest.mark.parametrize(
    "body",
    [
        'reporting = ["ERROR", "LOUD"]',
        'reporting = "ERROR"',
        'file_name = "../escape.log"',
        'encoding = "no-such-codec"',
        'enable_global_error_handler = "maybe"',
        'reporting = [1, 2]',
        'reporting = 5',
        'diagnostics = 5',
        'base_dir = 5',
        '[logdancer.diagnostics]\nlevel = "VERBOSE"',
    ],
)
def test_invalid_values_raise(tmp_path, body):
    path = _write(tmp_path, f"[logdancer]\n{body}\n")
    with pytest.raises(ConfigurationError):
        CaptureConfig.from_toml(path)


def test_with_methods_return_new_instances(tmp_path):
    config = CaptureConfig.create_default(tmp_path)
    updated = config.with_enabled().with_reporting(ReportingFilter.none())

    assert config.enabled is False
    assert updated.enabled is True
    assert updated.reporting == ReportingFilter.none()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), (False, False), (1, True), (0, False), ("yes", True), ("0", False), ("", False)],
)
def test_coerce_flag(value, expected):
    assert coerce_flag(value) is expected


def test_read_enable_flag():
    assert read_enable_flag({}) is False
    assert read_enable_flag({"logdancer_enable_global_error_handler": None}, default=True) is True
    assert read_enable_flag({"logdancer_enable_global_error_handler": "true"}) is True


def test_non_table_section_raises(tmp_path):
    path = _write(tmp_path, "logdancer = 5\n")
    with pytest.raises(ConfigurationError, match="must be a table"):
        CaptureConfig.from_toml(path)
