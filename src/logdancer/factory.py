"""Factory module for setting up error capture.

This module provides the main entry points: a fluent builder around
CaptureConfig and initialize(), which reads the host's "enable global error
capture" setting once and sets everything up accordingly.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from . import hooks
from .config import CaptureConfig, DiagnosticsConfig, read_enable_flag
from .diagnostics import configure_diagnostics, get_logger
from .logger import ErrorEventLogger
from .reporting import ReportingFilter
from .severity import Severity


@dataclass
class CaptureBuilder:
    """Builder for error capture.

    Provides a fluent interface over an immutable CaptureConfig.

    Attributes:
        _config: Configuration from TOML or defaults
    """

    _config: CaptureConfig

    @property
    def config(self) -> CaptureConfig:
        return self._config

    def with_base_dir(self, path: str | Path) -> "CaptureBuilder":
        """Set the base storage directory.

        Relative paths are resolved from the current working directory when
        files are written.

        Args:
            path: Base storage directory; logs go to <path>/logdancer

        Returns:
            Self for method chaining
        """
        self._config = self._config.with_base_dir(Path(path))
        return self

    def with_reporting(self, reporting: ReportingFilter) -> "CaptureBuilder":
        """Replace the set of reported severities.

        Returns:
            Self for method chaining
        """
        self._config = self._config.with_reporting(reporting)
        return self

    def without_level(self, *severities: Severity) -> "CaptureBuilder":
        """Stop reporting the given severities.

        Returns:
            Self for method chaining
        """
        self._config = self._config.with_reporting(
            self._config.reporting.without_level(*severities)
        )
        return self

    def with_global_handler(self, enabled: bool = True) -> "CaptureBuilder":
        """Install (or not) the process-wide error handler on build().

        Returns:
            Self for method chaining
        """
        self._config = self._config.with_enabled(enabled)
        return self

    def with_diagnostics(self, diagnostics: DiagnosticsConfig) -> "CaptureBuilder":
        """Set the console diagnostics configuration.

        Returns:
            Self for method chaining
        """
        self._config = replace(self._config, diagnostics=diagnostics)
        return self

    def build(self) -> ErrorEventLogger:
        """Build the logger and apply the configuration.

        The build process:
        1. Configures console diagnostics
        2. Creates the ErrorEventLogger
        3. Creates the protected log directory and its marker file
        4. Installs the process-wide hooks if the global handler is enabled

        Returns:
            The configured ErrorEventLogger

        Raises:
            LogWriteError:  If the log directory cannot be created
            RuntimeError:   If the global handler is enabled and another
                            logger is already installed
        """
        config = self._config
        configure_diagnostics(config.diagnostics)

        logger = ErrorEventLogger(
            log_file=config.log_file,
            reporting=config.reporting,
            encoding=config.encoding,
        )
        logger.protect_directory()

        if config.enabled:
            hooks.install(logger)

        get_logger(__name__).debug(
            "Error capture configured",
            log_file=str(config.log_file),
            global_handler=config.enabled,
        )
        return logger


def configure_capture(config_path: str | Path | None = None) -> CaptureBuilder:
    """Start configuring error capture.

    If no configuration path is provided, default settings are used.

    Args:
        config_path: Optional path to a TOML config file

    Returns:
        CaptureBuilder instance for method chaining
    """
    config = (
        CaptureConfig.from_toml(Path(config_path))
        if config_path is not None
        else CaptureConfig.create_default()
    )

    return CaptureBuilder(config)


def initialize(
        settings: Mapping[str, Any],
        base_dir: str | Path,
        config_path: str | Path | None = None
) -> ErrorEventLogger:
    """Set up error capture from a host settings store.

    The "enable global error capture" flag is read from settings once; the
    protected log directory is created either way.

    Args:
        settings:       Host key/value settings
        base_dir:       Base storage directory
        config_path:    Optional TOML file with further settings

    Returns:
        The configured ErrorEventLogger
    """
    return (
        configure_capture(config_path)
        .with_base_dir(base_dir)
        .with_global_handler(read_enable_flag(settings))
        .build()
    )
