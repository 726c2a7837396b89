"""Bridge between CLI arguments, configuration and the installer."""

from __future__ import annotations

import argparse
from typing import Any, Dict, Optional

from chromedriver_installer.catalog.client import CatalogClient
from chromedriver_installer.config.models import InstallerConfig
from chromedriver_installer.core.progress import ProgressReporter
from chromedriver_installer.installer.installer import Installer


class ConfigBridge:
    """Translates CLI arguments to configuration and configuration to an Installer."""

    @staticmethod
    def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
        """Convert CLI arguments to config override dict.

        Only options given on the command line are included, so config file
        values survive when the flag is absent.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Dictionary of config overrides.
        """
        candidates = {
            "version": getattr(args, "chrome_version", None),
            "platform": getattr(args, "platform", None),
            "binary": getattr(args, "binary", None),
            "destination": getattr(args, "destination", None),
            "catalog_url": getattr(args, "catalog_url", None),
            "use_zip_file": getattr(args, "use_zip_file", None),
        }
        return {k: v for k, v in candidates.items() if v is not None}

    @staticmethod
    def build_installer(
        config: InstallerConfig,
        progress: Optional[ProgressReporter] = None,
    ) -> Installer:
        """Create an Installer from merged configuration.

        Raises:
            InstallerError: If platform, binary or version detection fails.
        """
        installer = Installer(
            version=config.version,
            platform=config.platform,
            binary=config.binary,
            progress=progress,
            catalog=CatalogClient(url=config.catalog_url),
            archive_override=config.zip_file,
            bin_dir_override=config.bin_dir,
        )
        installer.use_archive_override(config.use_zip_file)
        return installer
