"""Secure download utilities with SSL certificate handling.

Downloads go through certifi's CA bundle so they work the same on systems
where Python cannot reach the platform certificate store (macOS framework
builds, standalone binaries).
"""

from __future__ import annotations

import shutil
import ssl
from pathlib import Path
from typing import Optional
from urllib.request import Request, urlopen

import certifi

from chromedriver_installer import __version__
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

USER_AGENT = f"chromedriver-installer/{__version__}"


def get_ssl_context() -> ssl.SSLContext:
    """Get an SSL context that uses certifi's CA bundle."""
    return ssl.create_default_context(cafile=certifi.where())


def secure_urlopen(url: str, timeout: Optional[float] = 30.0):
    """Open a URL with proper SSL certificate verification.

    Args:
        url: The URL to open.
        timeout: Connection timeout in seconds.

    Returns:
        A file-like object for reading the response.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTPS.
    """
    if not url.startswith("https://"):
        raise ValueError(f"Only HTTPS URLs are supported: {url}")

    request = Request(url, headers={"User-Agent": USER_AGENT})
    return urlopen(request, timeout=timeout, context=get_ssl_context())  # nosec B310


def fetch_bytes(url: str, timeout: Optional[float] = 30.0) -> bytes:
    """Fetch a whole document into memory.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTPS.
    """
    LOGGER.debug(f"Fetching {url}")
    with secure_urlopen(url, timeout=timeout) as response:
        return response.read()


def download_file(url: str, dest_path: Path, timeout: Optional[float] = 300.0) -> Path:
    """Stream a URL to a file.

    Args:
        url: The URL to download from.
        dest_path: Path to save the downloaded file.
        timeout: Connection timeout in seconds.

    Returns:
        dest_path.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTPS.
        OSError: If the file cannot be written.
    """
    LOGGER.info(f"Downloading {url} to {dest_path}")
    with secure_urlopen(url, timeout=timeout) as response:
        total_size = response.getheader("Content-Length")
        if total_size:
            LOGGER.debug(f"Download size: {int(total_size) / 1024 / 1024:.1f} MB")
        with open(dest_path, "wb") as f:
            shutil.copyfileobj(response, f)
    return dest_path
