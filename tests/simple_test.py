"""Example usage of logdancer error capture."""

import sys
import tempfile
import warnings
from pathlib import Path

from logdancer import ErrorEventLogger, Severity, configure_capture, uninstall


def demonstrate_capture_features(logger: ErrorEventLogger) -> None:
    """Demonstrate explicit and hook-based error capture.

    Args:
        logger: Configured error logger
    """
    # Explicit reporting through the injected logger
    logger.log(Severity.WARNING, "Undefined index", "/app/index.php", 42)

    # Unknown codes are still recorded
    logger.handle(3, "Odd severity code", "/app/legacy.php", 7)

    # Warnings go through the installed hook
    warnings.warn("Old API in use", DeprecationWarning, stacklevel=1)

    # Uncaught exceptions too
    try:
        result = 1 / 0
        print(result)  # This won't execute
    except ZeroDivisionError:
        sys.excepthook(*sys.exc_info())


def main() -> None:
    """Main entry point demonstrating different configuration options."""
    with tempfile.TemporaryDirectory() as base_dir:
        # 1. Configure from the bundled TOML file, overriding the storage location
        print("\n=== Using Config File ===")
        config_path = Path(__file__).parent.parent / "config" / "logdancer.toml"
        logger = configure_capture(config_path).with_base_dir(base_dir).build()
        demonstrate_capture_features(logger)

        # 2. Try to install a second process-wide logger (should fail)
        print("=== Attempting to Reinstall ===")
        try:
            configure_capture().with_base_dir(base_dir).with_global_handler().build()
            print("ERROR: Should not reach this line!")
        except RuntimeError as e:
            print(f"Expected error: {e}")

        # 3. Show what was captured
        print("\n=== Captured Log ===")
        print(logger.log_file.read_text(encoding="utf-8"))
        uninstall()


if __name__ == "__main__":
    main()
