"""CLI runner orchestration.

This module handles command dispatch and execution for the
chromedriver-installer CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from chromedriver_installer.cli.arguments import build_parser
from chromedriver_installer.cli.commands import Command, DetectCommand, InstallCommand
from chromedriver_installer.cli.config_bridge import ConfigBridge
from chromedriver_installer.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
    exit_code_for,
)
from chromedriver_installer.config.loader import ConfigError, load_config
from chromedriver_installer.core.errors import InstallerError
from chromedriver_installer.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get chromedriver-installer version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("chromedriver-installer")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from chromedriver_installer import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        self.parser = build_parser()
        self._version = get_version()
        self.commands = {
            cmd.name: cmd for cmd in (InstallCommand(), DetectCommand())
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None

        try:
            args = self.parser.parse_args(argv_list)
        except SystemExit as e:
            # argparse exits 0 for --help and 2 for usage errors
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        # Configure logging as early as possible
        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = self.commands.get(getattr(args, "command", None) or "")
        if command is None:
            # No command specified - show help
            self.parser.print_help()
            return EXIT_SUCCESS

        return self._execute(command, args)

    def _execute(self, command: Command, args) -> int:
        """Load configuration and run a command, mapping failures to exit codes.

        Args:
            command: Command to run.
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        try:
            config = load_config(
                project_root=Path.cwd(),
                cli_config_path=getattr(args, "config", None),
                cli_overrides=ConfigBridge.args_to_overrides(args),
            )
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        try:
            return command.execute(args, config)
        except InstallerError as e:
            if args.debug:
                LOGGER.exception(f"{command.name} failed")
            LOGGER.error(f"{command.name} failed [error {e.code}]: {e}")
            return exit_code_for(e)
