"""Locate XML source files for the import scripts."""
import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


class ImportSourceError(Exception):
    """The source directory is missing or holds no XML files."""


def list_xml_files(directory: Union[str, Path]) -> List[Path]:
    """Return the ``*.xml`` files in ``directory`` sorted by name.

    Raises:
        ImportSourceError: if the directory does not exist or has no XML files
    """
    path = Path(directory)
    if not path.is_dir():
        raise ImportSourceError(
            f"XML directory not found: {path}. Create it and place the XML files there."
        )

    files = sorted(
        (entry for entry in path.iterdir() if entry.is_file() and entry.suffix.lower() == ".xml"),
        key=lambda entry: entry.name,
    )
    if not files:
        raise ImportSourceError(f"No XML files found in {path}")

    logger.info("Found %d XML files in %s", len(files), path)
    return files
