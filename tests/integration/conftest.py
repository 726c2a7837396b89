"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest


def _find_local_browser():
    for name in ("chromium", "google-chrome"):
        path = shutil.which(name)
        if path:
            return path
    return None


_local_browser = _find_local_browser()

# Pytest markers for conditional test execution
browser_available = pytest.mark.skipif(
    _local_browser is None,
    reason="No chromium or google-chrome on PATH",
)


@pytest.fixture
def local_browser() -> str:
    assert _local_browser is not None
    return _local_browser


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the installer home and working directory at tmp_path."""
    home = tmp_path / "installer-home"
    monkeypatch.setenv("CHROMEDRIVER_INSTALLER_HOME", str(home))
    monkeypatch.delenv("CHROMEDRIVER_ZIP_FILE", raising=False)
    monkeypatch.delenv("CHROMEDRIVER_BIN_DIR", raising=False)
    monkeypatch.chdir(tmp_path)
    return home
