"""Argument parser construction for the chromedriver-installer CLI.

This module builds the argument parser with subcommands:
- chromedriver-installer install - Install the matching Chromedriver
- chromedriver-installer detect  - Show what would be installed
"""

from __future__ import annotations

import argparse
from pathlib import Path

from chromedriver_installer.bootstrap.platform import Platform


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show chromedriver-installer version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce output to errors only (no progress lines).",
    )


def _add_detection_options(parser: argparse.ArgumentParser) -> None:
    """Options controlling platform, browser and version detection."""
    group = parser.add_argument_group("detection")
    group.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=None,
        help="Target platform (default: detected from this host).",
    )
    group.add_argument(
        "--binary",
        metavar="PATH",
        default=None,
        help="Chrome executable to match (default: located automatically).",
    )
    group.add_argument(
        "--chrome-version",
        dest="chrome_version",
        metavar="VERSION",
        default=None,
        help="Chrome version or milestone, e.g. 120 or 120.0.6099.129 "
             "(default: read from the Chrome binary).",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: .chromedriver-installer.yml in "
             "the current directory).",
    )
    config_group.add_argument(
        "--catalog-url",
        dest="catalog_url",
        metavar="URL",
        default=None,
        help="Chrome for Testing catalog URL.",
    )


def _build_install_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'install' subcommand parser."""
    install_parser = subparsers.add_parser(
        "install",
        help="Install the Chromedriver matching the local Chrome.",
        description=(
            "Resolve the Chromedriver build for the installed Chrome, download "
            "it (or reuse the cached archive) and install it as an executable."
        ),
    )
    install_parser.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="Directory to install into (default: CHROMEDRIVER_BIN_DIR, or "
             "the active environment's scripts directory).",
    )
    install_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Download again even if the cached archive matches.",
    )
    install_parser.add_argument(
        "--no-zip-file",
        dest="use_zip_file",
        action="store_false",
        default=None,
        help="Ignore the CHROMEDRIVER_ZIP_FILE archive override.",
    )
    _add_detection_options(install_parser)


def _build_detect_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'detect' subcommand parser."""
    detect_parser = subparsers.add_parser(
        "detect",
        help="Show detected platform, browser, milestone and download URL.",
        description=(
            "Run platform, browser and version detection and print the "
            "Chromedriver download URL that install would use."
        ),
    )
    detect_parser.add_argument(
        "--no-url",
        dest="resolve_url",
        action="store_false",
        help="Skip the catalog lookup.",
    )
    _add_detection_options(detect_parser)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="chromedriver-installer",
        description="Install the Chromedriver build matching the local Chrome.",
        epilog=(
            "Examples:\n"
            "  chromedriver-installer install                  # Install into the venv\n"
            "  chromedriver-installer install ./bin            # Install into ./bin\n"
            "  chromedriver-installer install --chrome-version 120\n"
            "  chromedriver-installer detect                   # Show what would be installed\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_install_parser(subparsers)
    _build_detect_parser(subparsers)

    return parser
