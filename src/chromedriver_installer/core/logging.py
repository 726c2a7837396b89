from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Precedence:
    - quiet → ERROR
    - debug → DEBUG
    - verbose → INFO
    - default → WARNING
    """

    if quiet:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging from the CLI verbosity flags."""

    logging.basicConfig(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        format=LOG_FORMAT,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger."""

    return logging.getLogger(name if name is not None else "chromedriver_installer")
