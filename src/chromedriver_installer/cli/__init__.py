"""Command-line interface for chromedriver-installer."""

from __future__ import annotations

from typing import Iterable, Optional

from chromedriver_installer.cli.arguments import build_parser
from chromedriver_installer.cli.runner import CLIRunner


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    return CLIRunner().run(argv)


__all__ = ["build_parser", "main"]
