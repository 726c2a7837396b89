"""Chromedriver download, extraction and installation."""

from chromedriver_installer.installer.archive import extract_file
from chromedriver_installer.installer.installer import ArchiveManifest, Installer

__all__ = ["ArchiveManifest", "Installer", "extract_file"]
