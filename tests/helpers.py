"""Fakes and builders shared by the test suite: catalogs, archives, network stand-ins."""

from __future__ import annotations

import json
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional

LINUX_URL = (
    "https://storage.googleapis.com/chrome-for-testing-public/"
    "120.0.6099.109/linux64/chromedriver-linux64.zip"
)
MAC_ARM_URL = (
    "https://storage.googleapis.com/chrome-for-testing-public/"
    "120.0.6099.109/mac-arm64/chromedriver-mac-arm64.zip"
)
DRIVER_BYTES = b"#!/bin/sh\necho 'ChromeDriver 120.0.6099.109'\n"


def build_catalog(
    milestone: str = "120",
    downloads: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Catalog document with one milestone."""
    if downloads is None:
        downloads = [
            {"platform": "linux64", "url": LINUX_URL},
            {"platform": "mac-arm64", "url": MAC_ARM_URL},
        ]
    return {
        "timestamp": "2023-12-20T09:08:47.012Z",
        "milestones": {
            milestone: {
                "milestone": milestone,
                "version": f"{milestone}.0.6099.109",
                "revision": "1217362",
                "downloads": {
                    "chrome": [],
                    "chromedriver": downloads,
                },
            }
        },
    }


def build_driver_zip(
    path: Path,
    member: str = "chromedriver-linux64/chromedriver",
    content: bytes = DRIVER_BYTES,
) -> Path:
    """Write a Chromedriver-like zip archive."""
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr(member, content)
        zf.writestr("chromedriver-linux64/LICENSE.chromedriver", b"license")
    return path


class FakeFetch:
    """Stands in for fetch_bytes, counting calls."""

    def __init__(self, document: Any = None, raw: Optional[bytes] = None,
                 error: Optional[BaseException] = None) -> None:
        self.document = build_catalog() if document is None else document
        self.raw = raw
        self.error = error
        self.calls: List[str] = []

    def __call__(self, url: str) -> bytes:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return self.raw
        return json.dumps(self.document).encode("utf-8")


class FakeDownloader:
    """Stands in for download_file, writing a driver zip and counting calls."""

    def __init__(self, member: str = "chromedriver-linux64/chromedriver",
                 error: Optional[BaseException] = None) -> None:
        self.member = member
        self.error = error
        self.calls: List[str] = []

    def __call__(self, url: str, dest_path: Path) -> Path:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return build_driver_zip(dest_path, member=self.member)
