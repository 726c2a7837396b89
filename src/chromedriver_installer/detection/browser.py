"""Locate the installed Chrome/Chromium executable."""

from __future__ import annotations

import os
import shutil
from pathlib import PureWindowsPath
from typing import Callable, Dict, List, Mapping, Optional

from chromedriver_installer.bootstrap.platform import Platform, PlatformFamily
from chromedriver_installer.core.errors import BrowserNotFoundError
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

# Executables searched on PATH, in order
LINUX_BROWSER_NAMES = ("chromium", "google-chrome")

MAC_BROWSER_PATH = "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"

# Install roots searched on Windows, in order
WINDOWS_INSTALL_ROOT_VARS = ("ProgramFiles", "ProgramFiles(x86)", "LOCALAPPDATA")
WINDOWS_CHROME_RELATIVE_PATH = r"Google\Chrome\Application\chrome.exe"

Which = Callable[[str], Optional[str]]
IsFile = Callable[[str], bool]


def _locate_linux(environ: Mapping[str, str], which: Which, is_file: IsFile) -> str:
    for name in LINUX_BROWSER_NAMES:
        path = which(name)
        if path:
            LOGGER.debug(f"Found {name} at {path}")
            return path
    raise BrowserNotFoundError(
        f"Could not find a Chrome binary on PATH (tried {', '.join(LINUX_BROWSER_NAMES)})."
    )


def _locate_mac(environ: Mapping[str, str], which: Which, is_file: IsFile) -> str:
    # Existence is checked by binary validation.
    return MAC_BROWSER_PATH


def windows_candidates(environ: Mapping[str, str]) -> List[str]:
    """Candidate chrome.exe paths, one per install root variable that is set."""
    candidates = []
    for var in WINDOWS_INSTALL_ROOT_VARS:
        root = environ.get(var)
        if root:
            candidates.append(str(PureWindowsPath(root) / WINDOWS_CHROME_RELATIVE_PATH))
    return candidates


def _locate_windows(environ: Mapping[str, str], which: Which, is_file: IsFile) -> str:
    candidates = windows_candidates(environ)
    for candidate in candidates:
        if is_file(candidate):
            LOGGER.debug(f"Found Chrome at {candidate}")
            return candidate
    raise BrowserNotFoundError(
        "Could not find a Chrome binary; looked in: "
        + (", ".join(candidates) if candidates else "no install roots set")
    )


_LOCATORS: Dict[PlatformFamily, Callable[[Mapping[str, str], Which, IsFile], str]] = {
    PlatformFamily.LINUX: _locate_linux,
    PlatformFamily.MAC: _locate_mac,
    PlatformFamily.WINDOWS: _locate_windows,
}


def locate_browser(
    platform: Platform,
    environ: Optional[Mapping[str, str]] = None,
    which: Which = shutil.which,
    is_file: IsFile = os.path.isfile,
) -> str:
    """Find the browser executable for a platform.

    Args:
        platform: Target platform.
        environ: Environment used for Windows install roots (default: os.environ).
        which: PATH lookup function.
        is_file: File existence check for Windows candidates.

    Returns:
        Path to the browser executable.

    Raises:
        BrowserNotFoundError: If no browser can be found.
    """
    environ = os.environ if environ is None else environ
    return _LOCATORS[platform.family](environ, which, is_file)
