"""Shared fixtures: fake browsers, installer homes and Chromedriver archives."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from chromedriver_installer.bootstrap.paths import InstallerPaths
from tests.helpers import build_driver_zip


@pytest.fixture
def fake_browser(tmp_path: Path) -> Path:
    """An executable standing in for the Chrome binary."""
    browser = tmp_path / "browser" / "chromium"
    browser.parent.mkdir()
    browser.write_text("#!/bin/sh\necho 'Chromium 120.0.6099.129 snap'\n")
    browser.chmod(browser.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return browser


@pytest.fixture
def installer_paths(tmp_path: Path) -> InstallerPaths:
    return InstallerPaths(tmp_path / ".chromedriver-installer")


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    dest = tmp_path / "bin"
    dest.mkdir()
    return dest


@pytest.fixture
def driver_zip(tmp_path: Path) -> Path:
    return build_driver_zip(tmp_path / "override.zip")
