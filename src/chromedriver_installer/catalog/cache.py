"""In-process memo of resolved Chromedriver download URLs."""

from __future__ import annotations

import threading
from typing import Dict, Optional, Tuple

from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

CacheKey = Tuple[str, str]


class CatalogCache:
    """Maps (platform, milestone) to the resolved download URL.

    One instance is owned by each CatalogClient. Pass the same instance to
    several clients to share resolutions between them. Keys compare by exact
    string equality; nothing is persisted.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, str] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(platform: str, milestone: str) -> CacheKey:
        return (str(platform), str(milestone))

    def get(self, platform: str, milestone: str) -> Optional[str]:
        with self._lock:
            url = self._entries.get(self.key(platform, milestone))
        if url is not None:
            LOGGER.debug(f"Catalog cache hit for {platform}/{milestone}")
        return url

    def put(self, platform: str, milestone: str, url: str) -> None:
        with self._lock:
            self._entries[self.key(platform, milestone)] = url

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
