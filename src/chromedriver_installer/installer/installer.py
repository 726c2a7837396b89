"""Chromedriver installation orchestration.

Ties together platform detection, browser lookup, version detection, the
catalog client and the archive cache to put a Chromedriver matching the
local browser into a destination directory.
"""

from __future__ import annotations

import contextlib
import json
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, ContextManager, Dict, Optional, Union

from chromedriver_installer.bootstrap.download import download_file
from chromedriver_installer.bootstrap.paths import (
    InstallerPaths,
    get_default_bin_dir,
    resolve_destination,
)
from chromedriver_installer.bootstrap.platform import Platform, resolve_platform
from chromedriver_installer.bootstrap.validation import validate_binary
from chromedriver_installer.catalog.client import CatalogClient
from chromedriver_installer.core.errors import (
    ArchiveRemovalError,
    BinaryRemovalError,
    CacheDirectoryError,
    ChmodError,
    DownloadError,
)
from chromedriver_installer.core.logging import get_logger
from chromedriver_installer.core.progress import NullProgress, ProgressReporter
from chromedriver_installer.detection.browser import locate_browser
from chromedriver_installer.detection.version import (
    read_installed_version,
    resolve_milestone,
)
from chromedriver_installer.installer.archive import extract_file, is_valid_archive

LOGGER = get_logger(__name__)

EXECUTABLE_MODE = 0o755
BACKUP_SUFFIX = ".old"

PathLike = Union[str, Path]
Downloader = Callable[[str, Path], Any]
LockFactory = Callable[[], ContextManager[Any]]


@dataclass
class ArchiveManifest:
    """Where the cached archive was downloaded from.

    Stored next to the archive in ~/.chromedriver-installer/cache/chromedriver/
    """

    url: str
    platform: str = ""
    milestone: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "platform": self.platform, "milestone": self.milestone}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArchiveManifest":
        return cls(
            url=data["url"],
            platform=data.get("platform", ""),
            milestone=data.get("milestone", ""),
        )


class Installer:
    """Installs the Chromedriver build matching the local browser.

    Platform, browser binary and milestone are resolved once, at
    construction; any detection failure raises immediately. install() can be
    called any number of times and redoes the download and install steps
    each time.
    """

    def __init__(
        self,
        version: Optional[str] = None,
        platform: Optional[Union[str, Platform]] = None,
        binary: Optional[str] = None,
        progress: Optional[ProgressReporter] = None,
        catalog: Optional[CatalogClient] = None,
        paths: Optional[InstallerPaths] = None,
        archive_override: Optional[PathLike] = None,
        bin_dir: Optional[PathLike] = None,
        bin_dir_override: Optional[PathLike] = None,
        downloader: Downloader = download_file,
        lock: Optional[LockFactory] = None,
        version_runner: Callable[..., Any] = subprocess.run,
    ) -> None:
        """Initialize the installer and resolve platform, binary and version.

        Args:
            version: Chrome version or milestone; detected from the binary if omitted.
            platform: Catalog platform identifier; detected from the host if omitted.
            binary: Chrome executable; located per platform if omitted.
            progress: Sink for progress lines (silent by default).
            catalog: Catalog client (a fresh one on the public catalog by default).
            paths: Installer home layout (default: ~/.chromedriver-installer).
            archive_override: Pre-downloaded archive used instead of the network
                when it is an existing file.
            bin_dir: Build tool binary directory, the default destination
                (default: the interpreter's scripts directory).
            bin_dir_override: Replaces bin_dir when it is an existing directory.
            downloader: Callable fetching a URL to a local path.
            lock: Context manager factory wrapped around every install().
            version_runner: subprocess.run compatible callable for the version check.

        Raises:
            UnsupportedPlatformError, InvalidPlatformError, BrowserNotFoundError,
            InvalidBinaryError, VersionDetectionError, InvalidVersionFormatError.
        """
        self._progress = progress or NullProgress()

        self._platform = resolve_platform(platform)
        self._progress.writeln(f"Platform: {self._platform}")

        if binary is None:
            binary = locate_browser(self._platform)
        self._binary = validate_binary(binary)
        self._progress.writeln(f"Binary: {self._binary}")

        if version is None:
            version = read_installed_version(self._platform, self._binary, runner=version_runner)
        self._milestone = resolve_milestone(version)
        self._version = version
        self._progress.writeln(f"Version: {version}")

        self._catalog = catalog if catalog is not None else CatalogClient()
        self._paths = paths if paths is not None else InstallerPaths.default()
        self._archive_override = archive_override
        self._use_archive_override = True
        self._bin_dir = bin_dir if bin_dir is not None else get_default_bin_dir()
        self._bin_dir_override = bin_dir_override
        self._downloader = downloader
        self._lock = lock or contextlib.nullcontext

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def binary(self) -> str:
        return self._binary

    @property
    def version(self) -> str:
        """Version as supplied or detected, before milestone extraction."""
        return self._version

    @property
    def milestone(self) -> str:
        return self._milestone

    @property
    def executable_name(self) -> str:
        return self._platform.executable_name

    @property
    def catalog(self) -> CatalogClient:
        return self._catalog

    def get_version(self) -> str:
        """Return the milestone the installed driver is matched against."""
        return self._milestone

    def use_archive_override(self, enabled: bool) -> None:
        """Enable or disable use of the pre-downloaded archive override."""
        self._use_archive_override = enabled

    def download_url(self) -> str:
        """Resolve the catalog download URL for this platform and milestone."""
        return self._catalog.resolve_download_url(self._platform, self._milestone)

    def install(self, destination: Optional[PathLike] = None, force: bool = False) -> Path:
        """Install Chromedriver into a directory.

        Args:
            destination: Target directory; defaults to the bin dir override
                or the build tool binary directory.
            force: Download again even if the cached archive matches.

        Returns:
            Path to the installed executable.

        Raises:
            DestinationNotDirectoryError: If the destination is not a directory.
            BinaryRemovalError: If an existing executable cannot be moved aside.
            CatalogFetchError, CatalogDecodeError, DownloadNotFoundError:
                If the download URL cannot be resolved.
            CacheDirectoryError, ArchiveRemovalError, DownloadError:
                If the archive cannot be put in the cache.
            ExtractionError: If the executable cannot be extracted.
            ChmodError: If the executable cannot be made executable.
        """
        with self._lock():
            return self._install(destination, force)

    def _install(self, destination: Optional[PathLike], force: bool) -> Path:
        dest_dir = resolve_destination(destination, self._bin_dir, self._bin_dir_override)
        executable = dest_dir / self.executable_name

        # A locked executable must fail the run before anything is fetched.
        backup = self._move_aside(executable)
        try:
            archive = self._resolve_archive(force)

            extract_file(archive, self.executable_name, executable)

            try:
                executable.chmod(EXECUTABLE_MODE)
            except OSError as e:
                raise ChmodError(f"Could not make Chromedriver executable: {e}") from e
        except Exception:
            if backup is not None:
                self._restore(backup, executable)
            raise

        if backup is not None:
            self._discard_backup(backup)

        self._progress.writeln(f"Installed Chromedriver to {executable}")
        return executable

    def _resolve_archive(self, force: bool) -> Path:
        override = self._archive_override if self._use_archive_override else None
        if override and Path(override).is_file():
            LOGGER.debug(f"Using archive override {override}")
            self._progress.writeln(f"Using Chromedriver archive {override}")
            return Path(override)
        return self._download_archive(force)

    def _download_archive(self, force: bool) -> Path:
        self._progress.writeln("Fetching Chromedriver version URL ...")
        url = self.download_url()

        self._paths.ensure_driver_cache_dir()
        archive = self._paths.archive_path

        if not force and self._is_cached(archive, url):
            self._progress.writeln(f"Using cached Chromedriver archive {archive}")
            return archive

        self._remove_existing(self._paths.manifest_path, ArchiveRemovalError, "archive manifest")
        self._remove_existing(archive, ArchiveRemovalError, "zip file")

        self._progress.writeln(f"Downloading Chromedriver to {archive} ...")
        try:
            self._downloader(url, archive)
        except (OSError, ValueError) as e:
            raise DownloadError(f"Failed to download Chromedriver from {url}: {e}") from e

        self._write_manifest(ArchiveManifest(url, str(self._platform), self._milestone))
        self._progress.writeln(f"Downloaded Chromedriver to {archive}")
        return archive

    def _is_cached(self, archive: Path, url: str) -> bool:
        manifest = self._read_manifest()
        if manifest is None or manifest.url != url:
            return False
        if not is_valid_archive(archive):
            LOGGER.debug(f"Cached archive {archive} is missing or corrupt")
            return False
        return True

    def _read_manifest(self) -> Optional[ArchiveManifest]:
        manifest_path = self._paths.manifest_path
        if not manifest_path.exists():
            return None
        try:
            return ArchiveManifest.from_dict(json.loads(manifest_path.read_text()))
        except (OSError, ValueError, KeyError, TypeError) as e:
            LOGGER.warning(f"Failed to parse {manifest_path}: {e}")
            return None

    def _write_manifest(self, manifest: ArchiveManifest) -> None:
        manifest_path = self._paths.manifest_path
        try:
            manifest_path.write_text(json.dumps(manifest.to_dict(), indent=2) + "\n")
        except OSError as e:
            raise CacheDirectoryError(f"Could not write {manifest_path}: {e}") from e

    @staticmethod
    def _move_aside(executable: Path) -> Optional[Path]:
        """Rename an existing executable to <name>.old until the install succeeds."""
        if not executable.is_file():
            return None
        backup = executable.with_name(executable.name + BACKUP_SUFFIX)
        try:
            executable.replace(backup)
        except OSError as e:
            raise BinaryRemovalError(
                f"Could not remove existing executable file {executable}: {e}"
            ) from e
        return backup

    @staticmethod
    def _restore(backup: Path, executable: Path) -> None:
        try:
            if executable.is_file():
                executable.unlink()
            backup.replace(executable)
        except OSError as e:
            LOGGER.warning(f"Could not restore previous Chromedriver from {backup}: {e}")

    @staticmethod
    def _discard_backup(backup: Path) -> None:
        try:
            backup.unlink()
        except OSError as e:
            LOGGER.warning(f"Could not remove previous Chromedriver {backup}: {e}")

    @staticmethod
    def _remove_existing(path: Path, error: type, label: str) -> None:
        if not path.is_file():
            return
        try:
            path.unlink()
        except OSError as e:
            raise error(f"Could not remove existing {label} {path}: {e}") from e
