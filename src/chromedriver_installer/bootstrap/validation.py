"""Binary validation for the browser the driver is matched against."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Union

from chromedriver_installer.core.errors import InvalidBinaryError
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)


class ToolStatus(str, Enum):
    """Status of a binary on disk."""

    PRESENT = "present"
    MISSING = "missing"
    NOT_EXECUTABLE = "not_executable"


def normalize_binary_path(binary: str) -> str:
    """Turn shell-escaped spaces ("\\ ") into literal spaces."""
    return binary.replace("\\ ", " ")


def binary_status(path: Union[str, Path]) -> ToolStatus:
    """Check whether a binary exists and is executable.

    Args:
        path: Path to the binary.

    Returns:
        ToolStatus for the binary.
    """
    path = Path(path)
    if not path.is_file():
        return ToolStatus.MISSING

    if not os.access(path, os.X_OK):
        return ToolStatus.NOT_EXECUTABLE

    return ToolStatus.PRESENT


def validate_binary(binary: Any) -> str:
    """Validate a browser binary path.

    Args:
        binary: Path string, possibly with escaped spaces.

    Returns:
        The binary exactly as given.

    Raises:
        InvalidBinaryError: If binary is not a string or does not point to an
            executable file once escaped spaces are normalized.
    """
    if not isinstance(binary, str) or not binary:
        raise InvalidBinaryError("Invalid Chrome binary: not executable or not existing.")

    status = binary_status(normalize_binary_path(binary))
    if status != ToolStatus.PRESENT:
        LOGGER.debug(f"Browser binary {binary}: {status.value}")
        raise InvalidBinaryError(
            f"Invalid Chrome binary {binary}: not executable or not existing."
        )

    return binary
