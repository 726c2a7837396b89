"""chromedriver-installer: install the Chromedriver matching the local Chrome.

Typical use:

    from chromedriver_installer import Installer

    path = Installer().install("/usr/local/bin")
"""

__version__ = "0.3.0"

# ruff: noqa: E402
from chromedriver_installer.bootstrap.platform import Platform
from chromedriver_installer.catalog import CatalogCache, CatalogClient
from chromedriver_installer.core.errors import InstallerError
from chromedriver_installer.installer import Installer

__all__ = [
    "__version__",
    "CatalogCache",
    "CatalogClient",
    "Installer",
    "InstallerError",
    "Platform",
]
