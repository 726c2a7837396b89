"""Shared building blocks: logging, progress sinks and the error taxonomy."""

from chromedriver_installer.core.errors import ErrorCategory, InstallerError
from chromedriver_installer.core.logging import configure_logging, get_logger
from chromedriver_installer.core.progress import (
    CallbackProgress,
    NullProgress,
    ProgressReporter,
    RecordingProgress,
    StreamProgress,
)

__all__ = [
    "ErrorCategory",
    "InstallerError",
    "configure_logging",
    "get_logger",
    "ProgressReporter",
    "NullProgress",
    "StreamProgress",
    "CallbackProgress",
    "RecordingProgress",
]
