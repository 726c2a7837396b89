"""Typed installer configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from chromedriver_installer.catalog.client import CATALOG_URL


@dataclass
class InstallerConfig:
    """Merged installer settings.

    Attributes:
        version: Chrome version or milestone to match; detected when None.
        platform: Catalog platform identifier; detected when None.
        binary: Chrome executable; located when None.
        destination: Directory to install into.
        zip_file: Pre-downloaded Chromedriver archive to use instead of the network.
        bin_dir: Destination override, honored only if it is an existing directory.
        catalog_url: Chrome for Testing catalog document.
        use_zip_file: Whether zip_file is honored at all.
    """

    version: Optional[str] = None
    platform: Optional[str] = None
    binary: Optional[str] = None
    destination: Optional[str] = None
    zip_file: Optional[str] = None
    bin_dir: Optional[str] = None
    catalog_url: str = CATALOG_URL
    use_zip_file: bool = True

    # Where settings were loaded from, for diagnostics
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def sources(self) -> List[str]:
        return list(self._config_sources)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InstallerConfig":
        def _str(key: str) -> Optional[str]:
            value = data.get(key)
            if value is None or value == "":
                return None
            return str(value)

        return cls(
            version=_str("version"),
            platform=_str("platform"),
            binary=_str("binary"),
            destination=_str("destination"),
            zip_file=_str("zip_file"),
            bin_dir=_str("bin_dir"),
            catalog_url=_str("catalog_url") or CATALOG_URL,
            use_zip_file=bool(data.get("use_zip_file", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "platform": self.platform,
            "binary": self.binary,
            "destination": self.destination,
            "zip_file": self.zip_file,
            "bin_dir": self.bin_dir,
            "catalog_url": self.catalog_url,
            "use_zip_file": self.use_zip_file,
        }
