"""Tests for the Chromedriver installer."""

from __future__ import annotations

import contextlib
import json
import os
import subprocess
from pathlib import Path
from typing import Any, List
from unittest.mock import MagicMock, patch
from urllib.error import URLError

import pytest

from chromedriver_installer.bootstrap.paths import InstallerPaths
from chromedriver_installer.bootstrap.platform import Platform
from chromedriver_installer.catalog.client import CatalogClient
from chromedriver_installer.core.errors import (
    ArchiveRemovalError,
    BinaryRemovalError,
    CatalogDecodeError,
    CatalogFetchError,
    ChmodError,
    DestinationNotDirectoryError,
    DownloadError,
    ExtractionError,
    InvalidBinaryError,
    InvalidPlatformError,
    InvalidVersionFormatError,
)
from chromedriver_installer.core.progress import RecordingProgress
from chromedriver_installer.installer.installer import ArchiveManifest, Installer
from tests.helpers import (
    DRIVER_BYTES,
    LINUX_URL,
    FakeDownloader,
    FakeFetch,
    build_catalog,
    build_driver_zip,
)

posix_only = pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")


def _installer(
    binary: Path,
    paths: InstallerPaths,
    fetch: Any = None,
    downloader: Any = None,
    **kwargs: Any,
) -> Installer:
    kwargs.setdefault("version", "120.0.6099.129")
    kwargs.setdefault("platform", "linux64")
    return Installer(
        binary=str(binary),
        catalog=CatalogClient(fetch=fetch if fetch is not None else FakeFetch()),
        paths=paths,
        downloader=downloader if downloader is not None else FakeDownloader(),
        **kwargs,
    )


class TestConstruction:
    def test_resolves_milestone(self, fake_browser: Path, installer_paths: InstallerPaths) -> None:
        installer = _installer(fake_browser, installer_paths)

        assert installer.platform == Platform.LINUX64
        assert installer.binary == str(fake_browser)
        assert installer.version == "120.0.6099.129"
        assert installer.milestone == "120"
        assert installer.get_version() == "120"
        assert installer.executable_name == "chromedriver"

    def test_windows_executable_name(
        self, fake_browser: Path, installer_paths: InstallerPaths
    ) -> None:
        installer = _installer(fake_browser, installer_paths, platform="win64")
        assert installer.executable_name == "chromedriver.exe"

    def test_progress_lines(self, fake_browser: Path, installer_paths: InstallerPaths) -> None:
        progress = RecordingProgress()
        _installer(fake_browser, installer_paths, progress=progress)

        assert progress.lines == [
            "Platform: linux64",
            f"Binary: {fake_browser}",
            "Version: 120.0.6099.129",
        ]

    def test_detects_version_when_omitted(
        self, fake_browser: Path, installer_paths: InstallerPaths
    ) -> None:
        runner = MagicMock(return_value=subprocess.CompletedProcess(
            args=[], returncode=0, stdout="Chromium 121.0.6167.85 snap\n"
        ))
        installer = _installer(
            fake_browser, installer_paths, version=None, version_runner=runner
        )

        assert installer.version == "121.0.6167.85"
        assert installer.milestone == "121"
        assert runner.call_args.args[0] == [str(fake_browser), "--version"]

    def test_supplied_version_skips_detection(
        self, fake_browser: Path, installer_paths: InstallerPaths
    ) -> None:
        runner = MagicMock()
        _installer(fake_browser, installer_paths, version="120", version_runner=runner)
        runner.assert_not_called()

    def test_locates_browser_when_binary_omitted(
        self, fake_browser: Path, installer_paths: InstallerPaths
    ) -> None:
        with patch(
            "chromedriver_installer.installer.installer.locate_browser",
            return_value=str(fake_browser),
        ) as mock_locate:
            installer = Installer(
                version="120", platform="linux64", paths=installer_paths,
                catalog=CatalogClient(fetch=FakeFetch()),
            )

        mock_locate.assert_called_once_with(Platform.LINUX64)
        assert installer.binary == str(fake_browser)

    def test_invalid_platform(self, fake_browser: Path, installer_paths: InstallerPaths) -> None:
        with pytest.raises(InvalidPlatformError):
            _installer(fake_browser, installer_paths, platform="solaris")

    def test_invalid_binary(self, tmp_path: Path, installer_paths: InstallerPaths) -> None:
        with pytest.raises(InvalidBinaryError):
            _installer(tmp_path / "missing", installer_paths)

    def test_invalid_version(self, fake_browser: Path, installer_paths: InstallerPaths) -> None:
        with pytest.raises(InvalidVersionFormatError):
            _installer(fake_browser, installer_paths, version="latest")

    def test_download_url(self, fake_browser: Path, installer_paths: InstallerPaths) -> None:
        assert _installer(fake_browser, installer_paths).download_url() == LINUX_URL


class TestInstall:
    @posix_only
    def test_happy_path(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        downloader = FakeDownloader()
        installer = _installer(fake_browser, installer_paths, downloader=downloader)

        result = installer.install(dest_dir)

        assert result == dest_dir / "chromedriver"
        assert result.read_bytes() == DRIVER_BYTES
        assert result.stat().st_mode & 0o777 == 0o755
        assert downloader.calls == [LINUX_URL]
        assert installer_paths.archive_path.is_file()

    def test_writes_manifest(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        _installer(fake_browser, installer_paths).install(dest_dir)

        manifest = ArchiveManifest.from_dict(json.loads(installer_paths.manifest_path.read_text()))
        assert manifest == ArchiveManifest(LINUX_URL, "linux64", "120")

    def test_second_install_reuses_cache(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        fetch = FakeFetch()
        downloader = FakeDownloader()
        installer = _installer(fake_browser, installer_paths, fetch=fetch, downloader=downloader)

        first = installer.install(dest_dir).read_bytes()
        second = installer.install(dest_dir).read_bytes()

        assert first == second == DRIVER_BYTES
        assert len(downloader.calls) == 1
        assert len(fetch.calls) == 1

    def test_new_installer_reuses_archive_cache(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        _installer(fake_browser, installer_paths).install(dest_dir)

        downloader = FakeDownloader()
        _installer(fake_browser, installer_paths, downloader=downloader).install(dest_dir)

        assert downloader.calls == []

    def test_force_downloads_again(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        downloader = FakeDownloader()
        installer = _installer(fake_browser, installer_paths, downloader=downloader)

        installer.install(dest_dir)
        installer.install(dest_dir, force=True)

        assert len(downloader.calls) == 2

    def test_changed_url_downloads_again(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        _installer(fake_browser, installer_paths).install(dest_dir)

        document = build_catalog(downloads=[
            {"platform": "linux64", "url": "https://example.com/newer.zip"},
        ])
        downloader = FakeDownloader()
        _installer(
            fake_browser, installer_paths, fetch=FakeFetch(document=document), downloader=downloader
        ).install(dest_dir)

        assert downloader.calls == ["https://example.com/newer.zip"]

    def test_corrupt_cached_archive_downloads_again(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        _installer(fake_browser, installer_paths).install(dest_dir)
        installer_paths.archive_path.write_bytes(b"truncated")

        downloader = FakeDownloader()
        result = _installer(fake_browser, installer_paths, downloader=downloader).install(dest_dir)

        assert len(downloader.calls) == 1
        assert result.read_bytes() == DRIVER_BYTES

    def test_unreadable_manifest_downloads_again(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        _installer(fake_browser, installer_paths).install(dest_dir)
        installer_paths.manifest_path.write_text("{not json")

        downloader = FakeDownloader()
        _installer(fake_browser, installer_paths, downloader=downloader).install(dest_dir)

        assert len(downloader.calls) == 1

    def test_replaces_existing_executable(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        (dest_dir / "chromedriver").write_bytes(b"old driver")

        result = _installer(fake_browser, installer_paths).install(dest_dir)

        assert result.read_bytes() == DRIVER_BYTES
        assert not (dest_dir / "chromedriver.old").exists()

    def test_progress_lines(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        progress = RecordingProgress()
        _installer(fake_browser, installer_paths, progress=progress).install(dest_dir)

        archive = installer_paths.archive_path
        assert progress.lines[3:] == [
            "Fetching Chromedriver version URL ...",
            f"Downloading Chromedriver to {archive} ...",
            f"Downloaded Chromedriver to {archive}",
            f"Installed Chromedriver to {dest_dir / 'chromedriver'}",
        ]

    def test_lock_wraps_install(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        events: List[str] = []

        @contextlib.contextmanager
        def lock():
            events.append("acquire")
            yield
            events.append("release")

        _installer(fake_browser, installer_paths, lock=lock).install(dest_dir)
        _installer(fake_browser, installer_paths, lock=lock).install(dest_dir)

        assert events == ["acquire", "release", "acquire", "release"]


class TestArchiveOverride:
    def test_override_skips_network(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path,
        driver_zip: Path,
    ) -> None:
        fetch = FakeFetch()
        downloader = FakeDownloader()
        progress = RecordingProgress()
        installer = _installer(
            fake_browser, installer_paths, fetch=fetch, downloader=downloader,
            archive_override=driver_zip, progress=progress,
        )

        result = installer.install(dest_dir)

        assert result.read_bytes() == DRIVER_BYTES
        assert fetch.calls == []
        assert downloader.calls == []
        assert f"Using Chromedriver archive {driver_zip}" in progress.lines

    def test_missing_override_downloads(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path, tmp_path: Path
    ) -> None:
        downloader = FakeDownloader()
        _installer(
            fake_browser, installer_paths, downloader=downloader,
            archive_override=tmp_path / "missing.zip",
        ).install(dest_dir)

        assert downloader.calls == [LINUX_URL]

    def test_override_can_be_disabled(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path,
        driver_zip: Path,
    ) -> None:
        downloader = FakeDownloader()
        installer = _installer(
            fake_browser, installer_paths, downloader=downloader, archive_override=driver_zip
        )
        installer.use_archive_override(False)

        installer.install(dest_dir)

        assert downloader.calls == [LINUX_URL]


class TestDestination:
    def test_default_bin_dir(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        result = _installer(fake_browser, installer_paths, bin_dir=dest_dir).install()
        assert result == dest_dir / "chromedriver"

    def test_bin_dir_override(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path, tmp_path: Path
    ) -> None:
        override = tmp_path / "override-bin"
        override.mkdir()

        result = _installer(
            fake_browser, installer_paths, bin_dir=dest_dir, bin_dir_override=override
        ).install()

        assert result == override / "chromedriver"

    def test_missing_destination(
        self, fake_browser: Path, installer_paths: InstallerPaths, tmp_path: Path
    ) -> None:
        fetch = FakeFetch()
        installer = _installer(fake_browser, installer_paths, fetch=fetch)

        with pytest.raises(DestinationNotDirectoryError):
            installer.install(tmp_path / "nope")
        assert fetch.calls == []


class TestFailures:
    def test_locked_executable_fails_before_fetch(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        (dest_dir / "chromedriver").write_bytes(b"running driver")
        fetch = FakeFetch()
        downloader = FakeDownloader()
        installer = _installer(fake_browser, installer_paths, fetch=fetch, downloader=downloader)

        with patch.object(Path, "replace", side_effect=PermissionError("in use")):
            with pytest.raises(BinaryRemovalError) as exc_info:
                installer.install(dest_dir)

        assert exc_info.value.code == 14
        assert fetch.calls == []
        assert downloader.calls == []
        assert (dest_dir / "chromedriver").read_bytes() == b"running driver"

    @pytest.mark.parametrize(
        "fetch",
        [
            FakeFetch(error=URLError("offline")),
            FakeFetch(document={}),
        ],
        ids=["network", "catalog"],
    )
    def test_failed_install_keeps_existing_driver(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path,
        fetch: FakeFetch,
    ) -> None:
        existing = dest_dir / "chromedriver"
        existing.write_bytes(b"working driver")
        installer = _installer(fake_browser, installer_paths, fetch=fetch)

        with pytest.raises((CatalogFetchError, CatalogDecodeError)):
            installer.install(dest_dir)

        assert existing.read_bytes() == b"working driver"
        assert not (dest_dir / "chromedriver.old").exists()

    def test_failed_chmod_restores_existing_driver(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        existing = dest_dir / "chromedriver"
        existing.write_bytes(b"working driver")
        installer = _installer(fake_browser, installer_paths)

        with patch.object(Path, "chmod", side_effect=PermissionError("read-only")):
            with pytest.raises(ChmodError):
                installer.install(dest_dir)

        assert existing.read_bytes() == b"working driver"
        assert not (dest_dir / "chromedriver.old").exists()

    def test_stale_archive_removal_failure(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        installer_paths.ensure_driver_cache_dir()
        installer_paths.archive_path.write_bytes(b"stale archive")
        downloader = FakeDownloader()
        installer = _installer(fake_browser, installer_paths, downloader=downloader)
        unlink = Path.unlink

        def locked_archive(path: Path, *args: Any, **kwargs: Any) -> None:
            if path.name == "chromedriver.zip":
                raise PermissionError("in use")
            unlink(path, *args, **kwargs)

        with patch.object(Path, "unlink", autospec=True, side_effect=locked_archive):
            with pytest.raises(ArchiveRemovalError) as exc_info:
                installer.install(dest_dir)

        assert exc_info.value.code == 4
        assert downloader.calls == []
        assert installer_paths.archive_path.read_bytes() == b"stale archive"

    def test_catalog_failure_propagates(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        installer = _installer(fake_browser, installer_paths, fetch=FakeFetch(document={}))
        with pytest.raises(CatalogDecodeError):
            installer.install(dest_dir)

    def test_download_failure(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        downloader = FakeDownloader(error=OSError("connection reset"))
        installer = _installer(fake_browser, installer_paths, downloader=downloader)

        with pytest.raises(DownloadError, match="connection reset") as exc_info:
            installer.install(dest_dir)

        assert exc_info.value.code == 10
        assert not installer_paths.manifest_path.exists()

    def test_missing_member(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        downloader = FakeDownloader(member="chromedriver-linux64/README")
        installer = _installer(fake_browser, installer_paths, downloader=downloader)

        with pytest.raises(ExtractionError):
            installer.install(dest_dir)

    def test_chmod_failure(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path
    ) -> None:
        installer = _installer(fake_browser, installer_paths)

        with patch.object(Path, "chmod", side_effect=PermissionError("read-only")):
            with pytest.raises(ChmodError) as exc_info:
                installer.install(dest_dir)

        assert exc_info.value.code == 17

    def test_override_archive_without_member(
        self, fake_browser: Path, installer_paths: InstallerPaths, dest_dir: Path, tmp_path: Path
    ) -> None:
        archive = build_driver_zip(tmp_path / "wrong.zip", member="chromedriver-win64/chromedriver.exe")
        installer = _installer(fake_browser, installer_paths, archive_override=archive)

        with pytest.raises(ExtractionError):
            installer.install(dest_dir)
