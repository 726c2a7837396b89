"""Single-file extraction from Chromedriver zip archives."""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path, PurePosixPath
from typing import Optional

from chromedriver_installer.core.errors import ExtractionError
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)


def is_valid_archive(path: Path) -> bool:
    """Check that path is an existing, readable zip file."""
    return path.is_file() and zipfile.is_zipfile(path)


def find_member(zf: zipfile.ZipFile, name: str) -> Optional[zipfile.ZipInfo]:
    """Find the archive entry whose file name is name.

    Upstream archives nest the executable in a platform directory
    (chromedriver-linux64/chromedriver), older ones keep it at the root.
    """
    for info in zf.infolist():
        if info.is_dir():
            continue
        if PurePosixPath(info.filename.replace("\\", "/")).name == name:
            return info
    return None


def extract_file(archive_path: Path, name: str, dest_path: Path) -> Path:
    """Extract one file from a zip archive to an exact destination path.

    Args:
        archive_path: Zip archive to read.
        name: File name of the entry to extract, e.g. "chromedriver".
        dest_path: Full path the entry is written to.

    Returns:
        dest_path.

    Raises:
        ExtractionError: If the archive cannot be read, has no such entry,
            or the destination cannot be written.
    """
    LOGGER.debug(f"Extracting {name} from {archive_path} to {dest_path}")
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            info = find_member(zf, name)
            if info is None:
                raise ExtractionError(f"File {name} not found in archive {archive_path}")
            with zf.open(info) as source, open(dest_path, "wb") as target:
                shutil.copyfileobj(source, target)
    except ExtractionError:
        raise
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractionError(
            f"Could not extract {name} from {archive_path} to {dest_path}: {e}"
        ) from e

    return dest_path
