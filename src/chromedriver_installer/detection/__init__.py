"""Detection of the locally installed browser and its version."""

from chromedriver_installer.detection.browser import locate_browser
from chromedriver_installer.detection.version import (
    read_installed_version,
    resolve_milestone,
)

__all__ = [
    "locate_browser",
    "read_installed_version",
    "resolve_milestone",
]
