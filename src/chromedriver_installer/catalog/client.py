"""Client for the Chrome for Testing milestone catalog.

The catalog is a single JSON document:

    {"milestones": {"120": {"downloads": {"chromedriver": [
        {"platform": "linux64", "url": "https://.../chromedriver-linux64.zip"},
        ...
    ]}}}}
"""

from __future__ import annotations

import json
from typing import Any, Callable, List, Optional
from urllib.error import HTTPError, URLError

from chromedriver_installer.bootstrap.download import fetch_bytes
from chromedriver_installer.catalog.cache import CatalogCache
from chromedriver_installer.core.errors import (
    CatalogDecodeError,
    CatalogFetchError,
    DownloadNotFoundError,
)
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

CATALOG_URL = (
    "https://googlechromelabs.github.io/chrome-for-testing/"
    "latest-versions-per-milestone-with-downloads.json"
)

Fetcher = Callable[[str], bytes]


class CatalogClient:
    """Resolves Chromedriver download URLs from the milestone catalog."""

    def __init__(
        self,
        url: str = CATALOG_URL,
        cache: Optional[CatalogCache] = None,
        fetch: Fetcher = fetch_bytes,
    ) -> None:
        """Initialize CatalogClient.

        Args:
            url: Catalog document URL.
            cache: Resolution memo; a private one is created when omitted.
            fetch: Callable returning the raw document for a URL.
        """
        self._url = url
        self._cache = cache if cache is not None else CatalogCache()
        self._fetch = fetch

    @property
    def url(self) -> str:
        return self._url

    @property
    def cache(self) -> CatalogCache:
        return self._cache

    def resolve_download_url(self, platform: str, milestone: str) -> str:
        """Return the Chromedriver download URL for a platform and milestone.

        Raises:
            CatalogFetchError: If the catalog cannot be fetched.
            CatalogDecodeError: If the catalog is not valid JSON or lacks the
                milestone's chromedriver downloads.
            DownloadNotFoundError: If the milestone has no download for the platform.
        """
        platform = str(platform)
        milestone = str(milestone)

        cached = self._cache.get(platform, milestone)
        if cached is not None:
            return cached

        downloads = self._milestone_downloads(self._fetch_catalog(), milestone)
        url = self._find_platform_url(downloads, platform, milestone)

        self._cache.put(platform, milestone, url)
        LOGGER.debug(f"Resolved Chromedriver {milestone} for {platform}: {url}")
        return url

    def _fetch_catalog(self) -> Any:
        LOGGER.info(f"Fetching Chromedriver catalog from {self._url}")
        try:
            raw = self._fetch(self._url)
        except HTTPError as e:
            raise CatalogFetchError(
                "Failed to fetch known good Chrome and Chromedriver versions with "
                f"downloads: HTTP {e.code} - {e.reason}"
            ) from e
        except URLError as e:
            raise CatalogFetchError(
                "Failed to fetch known good Chrome and Chromedriver versions with "
                f"downloads: {e.reason}. Check your network connection."
            ) from e
        except (OSError, ValueError) as e:
            raise CatalogFetchError(
                "Failed to fetch known good Chrome and Chromedriver versions with "
                f"downloads: {e}"
            ) from e

        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise CatalogDecodeError(
                "Failed to decode known good Chrome and Chromedriver versions with "
                f"downloads: {e}"
            ) from e

    @staticmethod
    def _milestone_downloads(document: Any, milestone: str) -> List[Any]:
        node: Any = document
        for key in ("milestones", milestone, "downloads", "chromedriver"):
            if not isinstance(node, dict) or key not in node:
                raise CatalogDecodeError(
                    "Failed to decode known good Chrome and Chromedriver versions "
                    f"with downloads for milestone {milestone}: missing {key!r}. "
                    "Try upgrading Chrome."
                )
            node = node[key]

        if not isinstance(node, list):
            raise CatalogDecodeError(
                f"Chromedriver downloads for milestone {milestone} are not a list."
            )
        return node

    @staticmethod
    def _find_platform_url(downloads: List[Any], platform: str, milestone: str) -> str:
        for download in downloads:
            if not _is_download_record(download):
                continue
            if download["platform"] == platform:
                return download["url"]

        raise DownloadNotFoundError(
            f"Failed to find a download URL for Chromedriver version {milestone} "
            f"on platform {platform}"
        )


def _is_download_record(download: Any) -> bool:
    return (
        isinstance(download, dict)
        and isinstance(download.get("platform"), str)
        and isinstance(download.get("url"), str)
    )

