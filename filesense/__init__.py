"""
FileSense
=========

Privacy-first file organization: sorts the files of a folder into category
sub-folders using only their names and extensions, and can undo the move.
"""

__version__ = "0.1.0"

from .categories import Category, classify
from .scanner import analyze
from .executor import organize, undo
from .commands import select_folder, analyze_folder, organize_files, undo_organize
from .models import FileRecord, FolderAnalysis, MoveRecord

__all__ = [
    "Category",
    "classify",
    "analyze",
    "organize",
    "undo",
    "select_folder",
    "analyze_folder",
    "organize_files",
    "undo_organize",
    "FileRecord",
    "FolderAnalysis",
    "MoveRecord",
]
