"""
Data classes shared by the scanner, the executor and the command layer.

This module defines:
- FileRecord: one scanned file (name, path, size, extension)
- FolderAnalysis: files grouped by category, plus the total count
- MoveRecord: one successful move; an ordered list of these is the Move Log
- OrganizeReport / UndoReport: outcome of a bulk move or undo
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .categories import ALL_CATEGORIES, Category
from .errors import InvalidMoveLogError


@dataclass(frozen=True)
class FileRecord:
    """
    A file discovered while scanning a folder.

    Attributes:
        name: The file's basename (e.g. "quarterly_report.docx")
        path: Absolute path to the file
        size: Size in bytes (0 if it could not be read)
        extension: Lowercased extension without the dot, "" if none
    """
    name: str
    path: str
    size: int
    extension: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "extension": self.extension,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FileRecord":
        return cls(
            name=data["name"],
            path=data["path"],
            size=int(data.get("size", 0)),
            extension=data.get("extension", ""),
        )


@dataclass(frozen=True)
class FolderAnalysis:
    """
    Result of scanning one folder.

    Every category is present in ``categories``, even when it has no files.
    """
    total_files: int
    categories: Mapping[Category, tuple[FileRecord, ...]]

    def __post_init__(self):
        full = {category: tuple(self.categories.get(category, ())) for category in ALL_CATEGORIES}
        object.__setattr__(self, "categories", MappingProxyType(full))

    def files_in(self, category: Category) -> tuple[FileRecord, ...]:
        return self.categories[category]

    def non_empty(self) -> dict[Category, tuple[FileRecord, ...]]:
        """Categories that received at least one file, in label order."""
        return {c: files for c, files in self.categories.items() if files}

    def total_size(self, category: Category | None = None) -> int:
        if category is not None:
            return sum(f.size for f in self.categories[category])
        return sum(f.size for files in self.categories.values() for f in files)

    def to_dict(self) -> dict:
        return {
            "total_files": self.total_files,
            "categories": {
                category.value: [f.to_dict() for f in files]
                for category, files in self.categories.items()
            },
        }


@dataclass(frozen=True)
class MoveRecord:
    """A file that was moved from ``source`` to ``destination``."""
    source: str
    destination: str

    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.destination}

    @classmethod
    def from_dict(cls, data: dict) -> "MoveRecord":
        try:
            return cls(source=str(data["from"]), destination=str(data["to"]))
        except (KeyError, TypeError) as e:
            raise InvalidMoveLogError(data) from e


@dataclass
class OrganizeReport:
    """
    Outcome of an organize run.

    ``moves`` holds every move that actually happened, also when other
    moves failed, so the successful part can still be undone.
    """
    moves: list[MoveRecord] = field(default_factory=list)
    failures: list[Exception] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    created_dirs: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def moved(self) -> int:
        return len(self.moves)

    @property
    def errors(self) -> list[str]:
        return [str(f) for f in self.failures]

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def message(self) -> str:
        if self.ok:
            if self.dry_run:
                return f"Would organize {self.moved} files."
            return f"Organized {self.moved} files successfully!"
        return f"Moved {self.moved} files, but some errors occurred:\n" + "\n".join(self.errors)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "moves": [m.to_dict() for m in self.moves],
        }


@dataclass
class UndoReport:
    """Outcome of reversing a Move Log."""
    restored: int = 0
    failures: list[Exception] = field(default_factory=list)
    removed_dirs: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [str(f) for f in self.failures]

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def message(self) -> str:
        if self.ok:
            return f"Undo successful! Restored {self.restored} files."
        return f"Restored {self.restored} files, but some errors occurred:\n" + "\n".join(self.errors)
