"""Input discovery: validating directories and loading supported files."""

import logging
from pathlib import Path

from codeweave.errors import InvalidInputPathError, NoSupportedFilesError
from codeweave.models.source import SUPPORTED_EXTENSIONS, SourceUnit

logger = logging.getLogger(__name__)


def validate_input_path(path: Path | str) -> Path:
    """Check that an input path exists and is a directory.

    Args:
        path: Path supplied by the caller

    Returns:
        Resolved directory path

    Raises:
        InvalidInputPathError: If the path is missing or not a directory
    """
    directory = Path(path).expanduser()
    if not directory.exists():
        raise InvalidInputPathError(path, "Directory does not exist")
    if not directory.is_dir():
        raise InvalidInputPathError(path, "Path is not a directory")
    return directory.resolve()


def is_supported_file(path: Path) -> bool:
    """Check whether a file has a supported extension (case-insensitive)."""
    return path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS


def discover_sources(directory: Path | str) -> list[SourceUnit]:
    """Load every supported file directly inside a directory.

    Subdirectories are not searched. Files are returned sorted by name so
    that runs are reproducible; files that are not valid UTF-8 are skipped.

    Args:
        directory: Directory to scan

    Returns:
        SourceUnits in file-name order

    Raises:
        InvalidInputPathError: If the directory is invalid
        NoSupportedFilesError: If no supported file could be loaded
    """
    root = validate_input_path(directory)

    sources: list[SourceUnit] = []
    for path in sorted(root.iterdir(), key=lambda p: p.name):
        if not is_supported_file(path):
            continue
        try:
            sources.append(SourceUnit.from_path(path))
        except UnicodeDecodeError as e:
            logger.warning("Skipping %s: not valid UTF-8 (%s)", path.name, e.reason)

    if not sources:
        raise NoSupportedFilesError(directory)

    logger.debug("Discovered %d source files in %s", len(sources), root)
    return sources
