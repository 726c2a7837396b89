"""Detect command implementation."""

from __future__ import annotations

from argparse import Namespace

from chromedriver_installer.cli.commands import Command
from chromedriver_installer.cli.config_bridge import ConfigBridge
from chromedriver_installer.cli.exit_codes import EXIT_SUCCESS
from chromedriver_installer.config.models import InstallerConfig
from chromedriver_installer.core.progress import NullProgress


class DetectCommand(Command):
    """Shows what install would do without touching the filesystem."""

    @property
    def name(self) -> str:
        return "detect"

    def execute(self, args: Namespace, config: InstallerConfig) -> int:
        """Print platform, binary, version and (optionally) the download URL.

        Returns:
            Exit code (0 when every detection step succeeded).
        """
        installer = ConfigBridge.build_installer(config, NullProgress())

        print(f"Platform: {installer.platform}")
        print(f"Binary: {installer.binary}")
        print(f"Version: {installer.version}")
        print(f"Milestone: {installer.milestone}")
        print(f"Executable: {installer.executable_name}")

        if getattr(args, "resolve_url", True):
            print(f"Download URL: {installer.download_url()}")

        return EXIT_SUCCESS
