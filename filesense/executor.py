"""
Plan execution for FileSense.

Moves files into per-category folders and reverses those moves later.
Per-file failures never stop a run; they are collected and reported at the
end together with the number of files that did move.
"""

import logging
import os
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from .errors import DirectoryCreateError, MoveError, UndoMoveError
from .models import MoveRecord, OrganizeReport, UndoReport
from .validator import ValidatedPlan, validate_plan

logger = logging.getLogger(__name__)


def _rename(src: Path, dst: Path) -> str | None:
    """
    Rename a single file. Returns None on success, else the failure reason.

    Destinations that already exist are refused instead of overwritten.
    """
    if not os.path.lexists(src):
        return "Source not found"
    if os.path.lexists(dst):
        return f"Destination already exists: {dst}"
    try:
        os.rename(src, dst)
    except OSError as e:
        return str(e)
    return None


def organize(plan, dry_run: bool = False, progress: bool = False) -> OrganizeReport:
    """
    Move every file of an Organization Plan into target_root/<category>/.

    Args:
        plan: Plan mapping, or an already validated plan.
        dry_run: If True, only compute the moves; nothing is touched.
        progress: Show a tqdm progress bar.

    Returns:
        OrganizeReport with the Move Log of every successful move and the
        per-file failures. The log is complete even when ``ok`` is False.

    Raises:
        InvalidPlanError: If the plan has no usable target_root.
    """
    validated = plan if isinstance(plan, ValidatedPlan) else validate_plan(plan)
    report = OrganizeReport(warnings=list(validated.warnings), dry_run=dry_run)
    claimed: set[Path] = set()

    mode = "DRY-RUN" if dry_run else "APPLY"
    logger.info("[%s] Organizing %d files into %s", mode, validated.total_files, validated.target_root)

    with tqdm(total=validated.total_files, unit="file", disable=not progress) as pbar:
        for directory, sources in validated.categories.items():
            if not sources:
                continue

            category_dir = validated.target_root / directory
            if not category_dir.is_dir():
                if dry_run:
                    report.created_dirs.append(str(category_dir))
                else:
                    try:
                        category_dir.mkdir(parents=True, exist_ok=True)
                        report.created_dirs.append(str(category_dir))
                    except OSError as e:
                        failure = DirectoryCreateError(category_dir, e)
                        logger.error(str(failure))
                        report.failures.append(failure)
                        pbar.update(len(sources))
                        continue

            for src in sources:
                dst = category_dir / src.name
                pbar.update(1)

                if src == dst:
                    report.warnings.append(f"Already in place: {src}")
                    logger.info("Already in place: %s", src)
                    continue

                if dry_run:
                    if not os.path.lexists(src):
                        reason = "Source not found"
                    elif os.path.lexists(dst) or dst in claimed:
                        reason = f"Destination already exists: {dst}"
                    else:
                        reason = None
                    claimed.add(dst)
                else:
                    reason = _rename(src, dst)

                if reason is not None:
                    failure = MoveError(src, reason)
                    logger.error(str(failure))
                    report.failures.append(failure)
                    continue

                report.moves.append(MoveRecord(source=str(src), destination=str(dst)))

    logger.info("[%s] Complete: %d moved, %d failed", mode, report.moved, len(report.failures))
    return report


def _as_move_record(move) -> MoveRecord:
    if isinstance(move, MoveRecord):
        return move
    return MoveRecord.from_dict(move)


def undo(moves: Iterable, progress: bool = False) -> UndoReport:
    """
    Reverse a Move Log, then remove category folders left empty.

    Args:
        moves: MoveRecords (or {"from", "to"} dicts) as returned by organize.
        progress: Show a tqdm progress bar.

    Returns:
        UndoReport with the restored count and per-file failures.
    """
    records = [_as_move_record(m) for m in moves]
    report = UndoReport()

    # Category folders the files were moved into
    folders_to_check = {Path(r.destination).parent for r in records}

    logger.info("Undoing %d moves", len(records))
    for record in tqdm(records, unit="file", disable=not progress):
        reason = _rename(Path(record.destination), Path(record.source))
        if reason is not None:
            failure = UndoMoveError(record.destination, reason)
            logger.error(str(failure))
            report.failures.append(failure)
        else:
            report.restored += 1

    report.removed_dirs = cleanup_empty_dirs(folders_to_check)
    logger.info(
        "Undo complete: %d restored, %d failed, %d folders removed",
        report.restored, len(report.failures), len(report.removed_dirs),
    )
    return report


def cleanup_empty_dirs(folders: Iterable) -> list[str]:
    """
    Remove each of the given folders if it exists and is empty.

    Deeper folders go first so a parent emptied by its child can go too.
    Folders that can't be removed are left alone.

    Returns:
        List of removed folder paths.
    """
    removed = []
    for folder in sorted({Path(f) for f in folders}, key=lambda p: len(p.parts), reverse=True):
        if not folder.is_dir():
            continue
        try:
            with os.scandir(folder) as it:
                if next(it, None) is not None:
                    continue
            # os.rmdir only works if the directory is empty
            os.rmdir(folder)
            removed.append(str(folder))
        except OSError:
            # Not empty anymore or no permission, skip
            pass
    return removed
