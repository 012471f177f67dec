"""Configuration handling for error capture.

This module provides the configuration classes and TOML parsing for logdancer.
It defines where the log file lives, which severities are reported, whether
the global error handler is installed, and how the package's own diagnostics
are rendered.
"""

import codecs
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal, get_args

import tomllib

from .errors import ConfigurationError
from .reporting import ReportingFilter
from .storage import LOG_FILE_NAME, default_log_dir

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_LEVELS = frozenset(get_args(LogLevel))

DEFAULT_BASE_DIR = Path("storage")
SETTINGS_KEY = "logdancer_enable_global_error_handler"

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class DiagnosticsConfig:
    """Configuration for logdancer's own console diagnostics.

    Attributes:
        level:              Logging level for diagnostics (default: WARNING)
        colors:             Enable colored output (requires 'colorama' on Windows)
        rich_tracebacks:    Enable rich traceback formatting (requires 'rich')
    """

    level: LogLevel = "WARNING"
    colors: bool = True
    rich_tracebacks: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values after initialization.

        Raises:
            ConfigurationError: If the logging level is invalid
        """
        if self.level in VALID_LOG_LEVELS:
            return
        msg = (
            f"Invalid logging level: {self.level!r}. "
            f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """Complete error capture configuration.

    Attributes:
        base_dir:       Base storage directory; logs go to <base_dir>/logdancer
        enabled:        Install the global error handler (default: False)
        file_name:      Name of the log file inside the log directory
        encoding:       Character encoding for the log file (default: utf-8)
        reporting:      Severities that are written to the log
        diagnostics:    Settings for the package's own console diagnostics
    """

    base_dir: Path
    enabled: bool = False
    file_name: str = LOG_FILE_NAME
    encoding: str = "utf-8"
    reporting: ReportingFilter = field(default_factory=ReportingFilter)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)

    def __post_init__(self) -> None:
        """Validate configuration values after initialization.

        Raises:
            ConfigurationError: If the file name or encoding is invalid
        """
        if not self.file_name or Path(self.file_name).name != self.file_name:
            msg = f"file_name must be a plain file name, got {self.file_name!r}"
            raise ConfigurationError(msg)

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            msg = f"Unknown encoding: {self.encoding!r}"
            raise ConfigurationError(msg) from e

    @property
    def log_dir(self) -> Path:
        return default_log_dir(self.base_dir)

    @property
    def log_file(self) -> Path:
        return self.log_dir / self.file_name

    def with_base_dir(self, base_dir: Path) -> "CaptureConfig":
        """Create a new instance with an updated base storage directory."""
        return replace(self, base_dir=base_dir)

    def with_reporting(self, reporting: ReportingFilter) -> "CaptureConfig":
        """Create a new instance with a different reporting filter."""
        return replace(self, reporting=reporting)

    def with_enabled(self, enabled: bool = True) -> "CaptureConfig":
        """Create a new instance with the global handler flag set."""
        return replace(self, enabled=enabled)

    @classmethod
    def from_toml(cls, config_path: Path) -> "CaptureConfig":
        """Create a CaptureConfig instance from a TOML configuration file.

        Relative base directories are resolved against the directory of the
        configuration file.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Configured CaptureConfig instance

        Raises:
            ConfigurationError: If required keys are missing or values are invalid
        """
        try:
            config_data = cls._load_toml(config_path)
            return cls._parse_config(config_data, config_path.parent)

        except KeyError as e:
            msg = f"Missing required configuration key: {e.args[0]}"
            raise ConfigurationError(msg) from e

        except ConfigurationError:
            raise

        except (AttributeError, TypeError, ValueError) as e:
            msg = f"Invalid value in configuration file: {e!s}"
            raise ConfigurationError(msg) from e

    @classmethod
    def _load_toml(cls, config_path: Path) -> dict:
        """Load and parse the TOML configuration file.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError:  If the configuration file doesn't exist
            ConfigurationError: If the TOML file is malformed
        """
        try:
            with config_path.open("rb") as f:
                return tomllib.load(f)

        except FileNotFoundError as e:
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg) from e

        except tomllib.TOMLDecodeError as e:
            msg = f"Failed to parse TOML file {config_path}"
            raise ConfigurationError(msg) from e

    @classmethod
    def _parse_config(cls, config_data: dict, config_dir: Path) -> "CaptureConfig":
        """Parse the configuration dictionary into a CaptureConfig instance.

        Args:
            config_data:    Dictionary containing the configuration data
            config_dir:     Directory used to resolve a relative base_dir

        Returns:
            Configured CaptureConfig instance
        """
        section = _require_table(config_data["logdancer"], "logdancer")

        base_dir = Path(section.get("base_dir", DEFAULT_BASE_DIR))
        if not base_dir.is_absolute():
            base_dir = config_dir / base_dir

        return cls(
            base_dir=base_dir,
            enabled=coerce_flag(section.get("enable_global_error_handler", False)),
            file_name=str(section.get("file_name", LOG_FILE_NAME)),
            encoding=str(section.get("encoding", "utf-8")),
            reporting=cls._create_reporting(section.get("reporting")),
            diagnostics=cls._create_diagnostics_config(
                _require_table(section.get("diagnostics", {}), "logdancer.diagnostics")
            ),
        )

    @staticmethod
    def _create_reporting(names: list[str] | None) -> ReportingFilter:
        """Create a ReportingFilter from a list of severity names.

        Args:
            names: Severity names, or None to enable every severity

        Returns:
            Configured ReportingFilter instance
        """
        if names is None:
            return ReportingFilter.all()

        if isinstance(names, str) or not all(isinstance(name, str) for name in names):
            msg = "reporting must be a list of severity names"
            raise TypeError(msg)

        return ReportingFilter.from_names(names)

    @staticmethod
    def _create_diagnostics_config(diagnostics: dict) -> DiagnosticsConfig:
        """Create a DiagnosticsConfig from the configuration dictionary.

        Args:
            diagnostics: Dictionary containing diagnostics configuration

        Returns:
            Configured DiagnosticsConfig instance
        """
        return DiagnosticsConfig(
            level=str(diagnostics.get("level", "WARNING")).upper(),
            colors=bool(diagnostics.get("colors", True)),
            rich_tracebacks=bool(diagnostics.get("rich_tracebacks", True)),
        )

    @classmethod
    def create_default(cls, base_dir: Path = DEFAULT_BASE_DIR) -> "CaptureConfig":
        """Create a default CaptureConfig instance.

        Creates a configuration with sensible defaults:
        - every severity reported
        - global error handler disabled
        - WARNING level diagnostics with colors and rich tracebacks

        Args:
            base_dir: Base storage directory for the log directory

        Returns:
            CaptureConfig instance with default settings
        """
        return cls(base_dir=Path(base_dir))


def coerce_flag(value: Any) -> bool:
    """Interpret a persisted on/off setting.

    Host settings stores often keep booleans as strings or integers.

    Args:
        value: Stored value

    Returns:
        The boolean meaning of the value

    Raises:
        ValueError: If the value cannot be read as a boolean
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        return value != 0

    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False

    msg = f"Cannot interpret {value!r} as an on/off setting"
    raise ValueError(msg)


def read_enable_flag(settings: Mapping[str, Any], default: bool = False) -> bool:
    """Read the "enable global error capture" flag from a host settings store.

    Args:
        settings:   Host key/value settings
        default:    Value used when the key is absent or None

    Returns:
        True if the global error handler should be installed
    """
    value = settings.get(SETTINGS_KEY)
    if value is None:
        return default
    return coerce_flag(value)


def _require_table(value: Any, name: str) -> dict:
    """Check that a configuration value is a TOML table.

    Raises:
        TypeError: If the value is not a table
    """
    if not isinstance(value, dict):
        msg = f"[{name}] must be a table, got {type(value).__name__}"
        raise TypeError(msg)
    return value
