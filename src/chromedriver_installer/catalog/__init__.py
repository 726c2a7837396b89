"""Chrome for Testing catalog lookups."""

from chromedriver_installer.catalog.cache import CatalogCache
from chromedriver_installer.catalog.client import CATALOG_URL, CatalogClient

__all__ = ["CATALOG_URL", "CatalogCache", "CatalogClient"]
