"""
Plan validation for FileSense.

An Organization Plan is a loose mapping supplied by the UI:

    {
        "target_root": "/home/me/Downloads",
        "Documents": [{"path": "/home/me/Downloads/notes.txt"}, ...],
        "My Custom Bucket": [...],
    }

Validation splits it into the usable subset and a list of warnings for
everything that had to be dropped.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .categories import Category
from .errors import InvalidPlanError

logger = logging.getLogger(__name__)

TARGET_ROOT_KEY = "target_root"


@dataclass
class ValidatedPlan:
    """The usable part of an Organization Plan."""
    target_root: Path
    # directory name -> source paths, in plan order
    categories: dict[str, list[Path]] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return sum(len(paths) for paths in self.categories.values())


def category_directory(key: str) -> str | None:
    """
    Directory name for a plan key.

    Known labels go through the category table; custom names are used as-is
    if they are a single, non-empty path component.
    """
    category = Category.from_label(key)
    if category is not None:
        return category.directory_name

    name = key.strip()
    if not name or name in (".", ".."):
        return None
    if "/" in name or "\\" in name:
        return None
    return name


def validate_plan(plan) -> ValidatedPlan:
    """
    Validate an Organization Plan before organizing.

    Skips (with a warning):
    - category values that aren't lists
    - category names that can't be used as a folder name
    - file entries without a string "path"
    - file entries whose path has no file name
    - the same source listed more than once

    Args:
        plan: The plan mapping.

    Returns:
        ValidatedPlan with the usable categories and the warnings.

    Raises:
        InvalidPlanError: If the plan isn't a mapping or has no usable target_root.
    """
    if not isinstance(plan, dict):
        raise InvalidPlanError("Organization plan is not an object")

    target_root = plan.get(TARGET_ROOT_KEY)
    if target_root is None:
        raise InvalidPlanError("Missing 'target_root' in organization plan")
    if not isinstance(target_root, (str, Path)) or not str(target_root).strip():
        raise InvalidPlanError("'target_root' must be a non-empty path string")

    validated = ValidatedPlan(target_root=Path(target_root))
    seen_sources: set[str] = set()

    for key, files in plan.items():
        if key == TARGET_ROOT_KEY:
            continue

        if not isinstance(files, list):
            validated.warnings.append(f"Skipping '{key}' - not a list of files")
            continue

        directory = category_directory(str(key))
        if directory is None:
            validated.warnings.append(f"Skipping '{key}' - not a valid folder name")
            continue

        paths = validated.categories.setdefault(directory, [])
        for index, item in enumerate(files):
            src = item.get("path") if isinstance(item, dict) else None
            if not isinstance(src, str) or not src:
                validated.warnings.append(f"Skipping '{key}'[{index}] - missing 'path'")
                continue

            src_path = Path(src)
            if not src_path.name:
                validated.warnings.append(f"Skipping {src} - no file name")
                continue

            if src in seen_sources:
                validated.warnings.append(f"Skipping {src} - listed more than once")
                continue
            seen_sources.add(src)

            paths.append(src_path)

    for warning in validated.warnings:
        logger.warning(warning)
    logger.info(
        "Plan validated: %d files in %d categories",
        validated.total_files, len(validated.categories),
    )
    return validated


def plan_from_analysis(analysis, target_root) -> dict:
    """
    Build the default Organization Plan for an analysis.

    This is the plan a UI submits when the user doesn't edit anything:
    every non-empty category, every file, rooted at ``target_root``.
    """
    plan: dict = {TARGET_ROOT_KEY: str(target_root)}
    for category, files in analysis.non_empty().items():
        plan[category.value] = [{"path": f.path} for f in files]
    return plan
