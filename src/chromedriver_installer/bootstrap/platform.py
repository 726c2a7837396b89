"""Platform detection for Chromedriver downloads.

Maps the host OS and architecture to one of the platform identifiers used by
the Chrome for Testing catalog. All per-platform behavior (executable name,
browser lookup and version check strategy) hangs off the trait table below.
"""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from chromedriver_installer.core.errors import (
    InvalidPlatformError,
    UnsupportedPlatformError,
)


class PlatformFamily(str, Enum):
    """Operating system family a platform belongs to."""

    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"


class Platform(str, Enum):
    """Platform identifiers published in the Chrome for Testing catalog."""

    LINUX64 = "linux64"
    MAC_X64 = "mac-x64"
    MAC_ARM64 = "mac-arm64"
    WIN32 = "win32"
    WIN64 = "win64"

    def __str__(self) -> str:
        return self.value

    @property
    def traits(self) -> "PlatformTraits":
        return _TRAITS[self]

    @property
    def family(self) -> PlatformFamily:
        return self.traits.family

    @property
    def executable_name(self) -> str:
        """Name of the Chromedriver executable inside the archive."""
        return self.traits.executable_name

    @property
    def is_windows(self) -> bool:
        return self.family is PlatformFamily.WINDOWS


@dataclass(frozen=True)
class PlatformTraits:
    """Per-platform behavior.

    Attributes:
        family: OS family, selects the browser locate and version check strategy.
        executable_name: Chromedriver file name on this platform.
    """

    family: PlatformFamily
    executable_name: str


_TRAITS: Dict[Platform, PlatformTraits] = {
    Platform.LINUX64: PlatformTraits(PlatformFamily.LINUX, "chromedriver"),
    Platform.MAC_X64: PlatformTraits(PlatformFamily.MAC, "chromedriver"),
    Platform.MAC_ARM64: PlatformTraits(PlatformFamily.MAC, "chromedriver"),
    Platform.WIN32: PlatformTraits(PlatformFamily.WINDOWS, "chromedriver.exe"),
    Platform.WIN64: PlatformTraits(PlatformFamily.WINDOWS, "chromedriver.exe"),
}

SUPPORTED_PLATFORMS = frozenset(p.value for p in Platform)

# platform.system() reports "Windows"; uname-style tools report "Windows NT".
_WINDOWS_SYSTEMS = frozenset({"windows", "windows nt"})


def detect_platform(
    system: Optional[str] = None,
    machine: Optional[str] = None,
) -> Platform:
    """Detect the platform of the current host.

    Args:
        system: OS name, defaults to platform.system().
        machine: Architecture, defaults to platform.machine().

    Returns:
        Detected Platform.

    Raises:
        UnsupportedPlatformError: If the OS is not Linux, macOS or Windows.
    """
    system = _platform.system() if system is None else system
    machine = _platform.machine() if machine is None else machine

    if system == "Darwin":
        return Platform.MAC_ARM64 if machine == "arm64" else Platform.MAC_X64

    if system == "Linux":
        return Platform.LINUX64

    if system.lower() in _WINDOWS_SYSTEMS:
        return Platform.WIN64 if "64" in machine else Platform.WIN32

    raise UnsupportedPlatformError(
        f"Failed to detect platform: unsupported operating system {system!r}."
    )


def validate_platform(value: Any) -> Platform:
    """Validate an explicitly supplied platform identifier.

    Args:
        value: Platform string or Platform member.

    Returns:
        The matching Platform.

    Raises:
        InvalidPlatformError: If value is not one of the supported identifiers.
    """
    if isinstance(value, Platform):
        return value
    if isinstance(value, str) and value in SUPPORTED_PLATFORMS:
        return Platform(value)
    raise InvalidPlatformError(
        "Invalid platform, supported platforms are: "
        f"{', '.join(p.value for p in Platform)}."
    )


def resolve_platform(value: Optional[Any] = None) -> Platform:
    """Return the explicit platform if given, else the detected one."""
    if value is None:
        return detect_platform()
    return validate_platform(value)
