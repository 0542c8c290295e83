"""
Folder scanning for FileSense.

Lists the immediate children of one folder (no recursion), builds a
FileRecord for each visible file and sorts it into a category.
"""

import logging
import os
from pathlib import Path

from .categories import ALL_CATEGORIES, Category, classify, get_file_extension
from .errors import FolderNotFoundError, FolderReadError, NotAFolderError
from .models import FileRecord, FolderAnalysis

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 100


def get_file_size(path) -> int:
    """Size in bytes, or 0 if the metadata can't be read."""
    try:
        return os.stat(path).st_size
    except OSError:
        return 0


def build_file_record(path) -> FileRecord:
    """Build a FileRecord for a single file path."""
    path = Path(path)
    return FileRecord(
        name=path.name,
        path=str(path.absolute()),
        size=get_file_size(path),
        extension=get_file_extension(path.name),
    )


def analyze(folder_path, progress_callback=None) -> FolderAnalysis:
    """
    Scan one folder and group its files by category.

    Sub-directories and hidden entries (names starting with '.') are skipped.
    Entries that vanish or can't be inspected mid-scan are logged and skipped.

    Args:
        folder_path: Folder to scan.
        progress_callback: Optional callable(count, path) called per file.

    Returns:
        FolderAnalysis with all categories present.

    Raises:
        FolderNotFoundError: The path doesn't exist.
        NotAFolderError: The path exists but isn't a directory.
        FolderReadError: The directory listing couldn't be opened.
    """
    root = Path(folder_path)
    logger.info("Starting analysis of folder: %s", root)

    if not root.exists():
        raise FolderNotFoundError(folder_path)
    if not root.is_dir():
        raise NotAFolderError(folder_path)

    categories: dict[Category, list[FileRecord]] = {c: [] for c in ALL_CATEGORIES}
    total_files = 0

    try:
        entries = os.scandir(root)
    except OSError as e:
        raise FolderReadError(folder_path, e) from e

    with entries:
        while True:
            try:
                entry = next(entries)
            except StopIteration:
                break
            except OSError as e:
                logger.warning("Error reading entry in %s: %s", root, e)
                continue

            if entry.name.startswith("."):
                continue

            try:
                if entry.is_dir():
                    continue
            except OSError as e:
                logger.warning("Skipping %s: %s", entry.path, e)
                continue

            record = build_file_record(entry.path)
            category = classify(record)
            categories[category].append(record)
            total_files += 1

            if progress_callback:
                progress_callback(total_files, entry.path)
            if total_files % PROGRESS_EVERY == 0:
                logger.info("Processed %d files...", total_files)

    logger.info("Analysis complete: %d files categorized", total_files)
    for category, files in categories.items():
        if files:
            logger.info("%s: %d files", category, len(files))

    return FolderAnalysis(
        total_files=total_files,
        categories={c: tuple(files) for c, files in categories.items()},
    )
