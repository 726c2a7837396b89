"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace

from chromedriver_installer.config.models import InstallerConfig
from chromedriver_installer.core.progress import (
    NullProgress,
    ProgressReporter,
    StreamProgress,
)


class Command(ABC):
    """Base class for CLI commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace, config: InstallerConfig) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Merged installer configuration.

        Returns:
            Exit code (0 for success, non-zero for error).
        """

    @staticmethod
    def progress_for(args: Namespace) -> ProgressReporter:
        """Progress lines go to stderr unless --quiet is set."""
        if getattr(args, "quiet", False):
            return NullProgress()
        return StreamProgress()


# ruff: noqa: E402
from chromedriver_installer.cli.commands.detect import DetectCommand
from chromedriver_installer.cli.commands.install import InstallCommand

__all__ = [
    "Command",
    "DetectCommand",
    "InstallCommand",
]
