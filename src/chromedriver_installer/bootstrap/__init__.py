"""
Bootstrap module for Chromedriver installation.

This module handles:
- Platform detection (OS + architecture → catalog platform identifier)
- Installer home and archive cache management (~/.chromedriver-installer/)
- Browser binary validation
- Certificate-verified downloads
"""

from chromedriver_installer.bootstrap.platform import (
    Platform,
    PlatformFamily,
    detect_platform,
    resolve_platform,
    validate_platform,
)
from chromedriver_installer.bootstrap.paths import (
    InstallerPaths,
    get_installer_home,
    resolve_destination,
)
from chromedriver_installer.bootstrap.validation import ToolStatus, validate_binary

__all__ = [
    "Platform",
    "PlatformFamily",
    "detect_platform",
    "resolve_platform",
    "validate_platform",
    "InstallerPaths",
    "get_installer_home",
    "resolve_destination",
    "ToolStatus",
    "validate_binary",
]
