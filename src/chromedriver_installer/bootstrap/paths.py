"""Path management for the installer home and download cache.

Handles the ~/.chromedriver-installer directory structure and the resolution
of the directory Chromedriver is installed into.
"""

from __future__ import annotations

import os
import sysconfig
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Union

from chromedriver_installer.core.errors import (
    CacheDirectoryError,
    DestinationNotDirectoryError,
)
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".chromedriver-installer"

# Environment variable to override home directory
INSTALLER_HOME_ENV = "CHROMEDRIVER_INSTALLER_HOME"

PathLike = Union[str, Path]


def get_installer_home() -> Path:
    """Get the installer home directory path.

    Resolution order:
    1. CHROMEDRIVER_INSTALLER_HOME environment variable (if set)
    2. ~/.chromedriver-installer (default)

    Returns:
        Path to the installer home directory.
    """
    env_home = os.environ.get(INSTALLER_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


def get_default_bin_dir() -> Path:
    """Scripts directory of the running interpreter (venv bin/ or Scripts/)."""
    return Path(sysconfig.get_path("scripts"))


@dataclass
class InstallerPaths:
    """Manages paths within the installer home directory.

    Directory structure:
        ~/.chromedriver-installer/
            cache/
                chromedriver/
                    chromedriver.zip   - Last downloaded archive
                    chromedriver.json  - Where that archive came from
            config/
                config.yml             - Global configuration
    """

    home: Path

    _CACHE_DIR: ClassVar[str] = "cache"
    _CONFIG_DIR: ClassVar[str] = "config"
    _DRIVER_CACHE_DIR: ClassVar[str] = "chromedriver"
    _ARCHIVE_NAME: ClassVar[str] = "chromedriver.zip"
    _MANIFEST_NAME: ClassVar[str] = "chromedriver.json"

    @classmethod
    def default(cls) -> "InstallerPaths":
        """Create paths from the default installer home."""
        return cls(get_installer_home())

    @property
    def cache_dir(self) -> Path:
        return self.home / self._CACHE_DIR

    @property
    def config_dir(self) -> Path:
        return self.home / self._CONFIG_DIR

    @property
    def driver_cache_dir(self) -> Path:
        """Directory holding the downloaded Chromedriver archive."""
        return self.cache_dir / self._DRIVER_CACHE_DIR

    @property
    def archive_path(self) -> Path:
        return self.driver_cache_dir / self._ARCHIVE_NAME

    @property
    def manifest_path(self) -> Path:
        return self.driver_cache_dir / self._MANIFEST_NAME

    def ensure_driver_cache_dir(self) -> Path:
        """Create the archive cache directory if it does not exist.

        Returns:
            The cache directory.

        Raises:
            CacheDirectoryError: If the directory cannot be created.
        """
        cache_dir = self.driver_cache_dir
        if cache_dir.is_dir():
            return cache_dir
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirectoryError(
                f"Could not create Chromedriver cache directory {cache_dir}: {e}"
            ) from e
        if not cache_dir.is_dir():
            raise CacheDirectoryError(
                f"Could not create Chromedriver cache directory {cache_dir}."
            )
        LOGGER.debug(f"Created cache directory {cache_dir}")
        return cache_dir


def resolve_destination(
    destination: Optional[PathLike] = None,
    bin_dir: Optional[PathLike] = None,
    bin_dir_override: Optional[PathLike] = None,
) -> Path:
    """Resolve the directory Chromedriver is installed into.

    Resolution order:
    1. destination, when given
    2. bin_dir_override, when it names an existing directory
    3. bin_dir (the build tool's binary directory)

    Args:
        destination: Directory explicitly requested by the caller.
        bin_dir: Build tool binary directory.
        bin_dir_override: Override for bin_dir, usually from the environment.

    Returns:
        The destination directory.

    Raises:
        DestinationNotDirectoryError: If the resolved path is not a directory.
    """
    if destination is not None:
        resolved: Optional[Path] = Path(destination)
    else:
        resolved = Path(bin_dir) if bin_dir is not None else None
        if bin_dir_override and Path(bin_dir_override).is_dir():
            resolved = Path(bin_dir_override)

    if resolved is None or not resolved.is_dir():
        raise DestinationNotDirectoryError(f"The directory {resolved} does not exist.")

    return resolved
