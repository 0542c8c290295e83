"""
Operations exposed to the host application.

Each call runs to completion before returning and keeps no state between
calls. The Move Log returned by ``organize_files`` belongs to the caller and
must be handed back to ``undo_organize`` to reverse the run.
"""

import logging
from pathlib import Path

from . import executor, scanner
from .config import Settings, load_settings
from .errors import FolderNotFoundError, OrganizeError, UndoError
from .models import FolderAnalysis

logger = logging.getLogger(__name__)


def select_folder(settings: Settings | None = None) -> str:
    """
    Default folder to analyze.

    A real folder picker can replace this; here it's the configured default
    location, which must exist.
    """
    settings = settings or load_settings()
    path = settings.default_folder
    if not Path(path).exists():
        raise FolderNotFoundError(path)
    logger.info("Using folder: %s", path)
    return path


def analyze_folder(folder_path: str) -> FolderAnalysis:
    """Scan a folder and sort its files into categories."""
    return scanner.analyze(folder_path)


def organize_files(plan: dict, dry_run: bool = False) -> dict:
    """
    Organize files according to a (possibly user-edited) plan.

    Returns:
        {"message": str, "moves": list[MoveRecord]}

    Raises:
        InvalidPlanError: The plan has no usable target_root.
        OrganizeError: Some files couldn't be moved. ``exc.moves`` holds the
            moves that did happen so they can still be undone.
    """
    report = executor.organize(plan, dry_run=dry_run)
    if not report.ok:
        raise OrganizeError(report.moved, report.errors, report.moves)
    return {"message": report.message, "moves": report.moves}


def undo_organize(moves) -> str:
    """
    Move files back to where they were before ``organize_files``.

    Raises:
        InvalidMoveLogError: An entry lacks "from" or "to"; nothing is moved.
        UndoError: Some files couldn't be restored.
    """
    report = executor.undo(moves)
    if not report.ok:
        raise UndoError(report.restored, report.errors)
    return report.message
