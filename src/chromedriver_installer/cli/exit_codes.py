"""Process exit codes for the chromedriver-installer CLI."""

from __future__ import annotations

from chromedriver_installer.core.errors import ErrorCategory, InstallerError

EXIT_SUCCESS = 0
EXIT_INSTALL_FAILURE = 1
EXIT_NETWORK_FAILURE = 2
EXIT_INVALID_USAGE = 3
EXIT_DETECTION_FAILURE = 4

_CATEGORY_EXIT_CODES = {
    ErrorCategory.CONFIGURATION: EXIT_INVALID_USAGE,
    ErrorCategory.DETECTION: EXIT_DETECTION_FAILURE,
    ErrorCategory.NETWORK: EXIT_NETWORK_FAILURE,
    ErrorCategory.CATALOG: EXIT_INSTALL_FAILURE,
    ErrorCategory.FILESYSTEM: EXIT_INSTALL_FAILURE,
}


def exit_code_for(error: InstallerError) -> int:
    """Map an installer error to the process exit code."""
    return _CATEGORY_EXIT_CODES.get(error.category, EXIT_INSTALL_FAILURE)
