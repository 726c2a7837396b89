"""Error taxonomy for the Chromedriver installer.

Every failure raised by the installer carries a stable numeric ``code`` and a
``category`` so callers can tell a network problem (retry) from a
platform/version combination that is simply not published (pick another
version) without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """Broad family an installer error belongs to."""

    CONFIGURATION = "configuration"
    DETECTION = "detection"
    NETWORK = "network"
    CATALOG = "catalog"
    FILESYSTEM = "filesystem"


class InstallerError(Exception):
    """Base class for all installer failures.

    Attributes:
        code: Stable numeric error code.
        category: Error family, see ErrorCategory.
    """

    code: int = 0
    category: ErrorCategory = ErrorCategory.CONFIGURATION

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def __str__(self) -> str:
        return self.message


# Configuration/input errors


class InvalidBinaryError(InstallerError, ValueError):
    code = 2


class InvalidPlatformError(InstallerError, ValueError):
    code = 3


class InvalidVersionFormatError(InstallerError, ValueError):
    code = 6


class DestinationNotDirectoryError(InstallerError, ValueError):
    code = 7


# Detection errors


class VersionDetectionError(InstallerError, RuntimeError):
    code = 5
    category = ErrorCategory.DETECTION


class BrowserNotFoundError(InstallerError, RuntimeError):
    code = 8
    category = ErrorCategory.DETECTION


class UnsupportedPlatformError(InstallerError, RuntimeError):
    code = 16
    category = ErrorCategory.DETECTION


# Remote errors


class DownloadError(InstallerError, RuntimeError):
    code = 10
    category = ErrorCategory.NETWORK


class CatalogFetchError(InstallerError, RuntimeError):
    code = 11
    category = ErrorCategory.NETWORK


class CatalogDecodeError(InstallerError, RuntimeError):
    code = 12
    category = ErrorCategory.CATALOG


class DownloadNotFoundError(InstallerError, RuntimeError):
    code = 13
    category = ErrorCategory.CATALOG


# Filesystem mutation errors


class ArchiveRemovalError(InstallerError, RuntimeError):
    code = 4
    category = ErrorCategory.FILESYSTEM


class CacheDirectoryError(InstallerError, RuntimeError):
    code = 9
    category = ErrorCategory.FILESYSTEM


class BinaryRemovalError(InstallerError, RuntimeError):
    code = 14
    category = ErrorCategory.FILESYSTEM


class ExtractionError(InstallerError, RuntimeError):
    code = 15
    category = ErrorCategory.FILESYSTEM


class ChmodError(InstallerError, RuntimeError):
    code = 17
    category = ErrorCategory.FILESYSTEM


__all__ = [
    "ErrorCategory",
    "InstallerError",
    "InvalidBinaryError",
    "InvalidPlatformError",
    "InvalidVersionFormatError",
    "DestinationNotDirectoryError",
    "VersionDetectionError",
    "BrowserNotFoundError",
    "UnsupportedPlatformError",
    "DownloadError",
    "CatalogFetchError",
    "CatalogDecodeError",
    "DownloadNotFoundError",
    "ArchiveRemovalError",
    "CacheDirectoryError",
    "BinaryRemovalError",
    "ExtractionError",
    "ChmodError",
]
