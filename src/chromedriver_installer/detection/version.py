"""Installed browser version detection and milestone resolution."""

from __future__ import annotations

import re
import subprocess
from typing import Any, Callable, List

from chromedriver_installer.bootstrap.platform import Platform, PlatformFamily
from chromedriver_installer.bootstrap.validation import normalize_binary_path
from chromedriver_installer.core.errors import (
    InvalidVersionFormatError,
    VersionDetectionError,
)
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

# Registry value Chrome keeps its installed version in.
WINDOWS_VERSION_QUERY = [
    "reg",
    "query",
    r"HKEY_CURRENT_USER\Software\Google\Chrome\BLBeacon",
    "/v",
    "version",
]

FULL_VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+\.\d+")
MILESTONE_PATTERN = re.compile(r"(?P<major>\d+)(?:\.\d+\.\d+\.\d+)*")

Runner = Callable[..., Any]


def version_command(platform: Platform, binary: str) -> List[str]:
    """Command whose stdout contains the installed browser version."""
    if platform.family is PlatformFamily.WINDOWS:
        return list(WINDOWS_VERSION_QUERY)
    return [normalize_binary_path(binary), "--version"]


def read_installed_version(
    platform: Platform,
    binary: str,
    runner: Runner = subprocess.run,
    timeout: int = 30,
) -> str:
    """Read the installed browser version.

    Args:
        platform: Target platform.
        binary: Browser executable (ignored on Windows, where the registry is read).
        runner: subprocess.run compatible callable.
        timeout: Seconds to wait for the version command.

    Returns:
        Version string in X.Y.Z.W form.

    Raises:
        VersionDetectionError: If the version command fails or prints nothing.
        InvalidVersionFormatError: If the output has no X.Y.Z.W version.
    """
    cmd = version_command(platform, binary)
    LOGGER.debug(f"Probing browser version: {cmd}")

    try:
        result = runner(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise VersionDetectionError(
            f"Could not detect Chrome version from {binary}: {e}"
        ) from e

    output = result.stdout or ""
    if not output.strip():
        raise VersionDetectionError(f"Could not detect Chrome version from {binary}")

    match = FULL_VERSION_PATTERN.search(output)
    if match is None:
        raise InvalidVersionFormatError(
            f"Could not detect Chrome version from {binary}: "
            f"unexpected output {output.strip()!r}"
        )

    return match.group(0).strip()


def resolve_milestone(version: Any) -> str:
    """Extract the milestone (major version) from a version string.

    Accepts a bare milestone ("120") or a dotted version ("120.0.6099.129").

    Raises:
        InvalidVersionFormatError: If version is not in one of those forms.
    """
    match = MILESTONE_PATTERN.fullmatch(version) if isinstance(version, str) else None
    if match is None:
        raise InvalidVersionFormatError(
            f"Invalid Chrome version {version!r}: must be in the form X.Y.Z.W."
        )
    return match.group("major")

