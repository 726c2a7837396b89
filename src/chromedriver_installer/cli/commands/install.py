"""Install command implementation."""

from __future__ import annotations

from argparse import Namespace

from chromedriver_installer.cli.commands import Command
from chromedriver_installer.cli.config_bridge import ConfigBridge
from chromedriver_installer.cli.exit_codes import EXIT_SUCCESS
from chromedriver_installer.config.models import InstallerConfig
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)


class InstallCommand(Command):
    """Installs the Chromedriver matching the local Chrome."""

    @property
    def name(self) -> str:
        return "install"

    def execute(self, args: Namespace, config: InstallerConfig) -> int:
        """Install Chromedriver and print the installed path to stdout.

        Raises:
            InstallerError: Propagated to the runner, which maps it to an exit code.
        """
        installer = ConfigBridge.build_installer(config, self.progress_for(args))
        path = installer.install(config.destination, force=getattr(args, "force", False))
        LOGGER.info(f"Chromedriver {installer.milestone} installed at {path}")
        print(path)
        return EXIT_SUCCESS
