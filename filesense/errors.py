"""
Exception types for FileSense.

Scan and plan failures abort the whole operation. Per-file failures during
organize/undo are collected as records and only surface at the end, inside
one aggregate error.
"""

from pathlib import Path


class FileSenseError(Exception):
    """Base error for the project."""

    kind = "Error"


# -----------------------------------------------------------------------------
# Scan-time
# -----------------------------------------------------------------------------

class FolderNotFoundError(FileSenseError):
    kind = "NotFound"

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Folder does not exist: {self.path}")


class NotAFolderError(FileSenseError):
    kind = "NotADirectory"

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Path is not a directory: {self.path}")


class FolderReadError(FileSenseError):
    kind = "ReadError"

    def __init__(self, path, error: OSError):
        self.path = str(path)
        self.error = error
        super().__init__(f"Failed to read directory: {error}")


# -----------------------------------------------------------------------------
# Organize-time
# -----------------------------------------------------------------------------

class InvalidPlanError(FileSenseError):
    kind = "InvalidPlan"


class DirectoryCreateError(FileSenseError):
    kind = "DirectoryCreateError"

    def __init__(self, directory: Path, error: OSError):
        self.directory = str(directory)
        self.error = error
        super().__init__(f"Failed to create directory {self.directory}: {error}")


class MoveError(FileSenseError):
    kind = "MoveError"

    def __init__(self, source, reason):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Failed to move {self.source}: {reason}")


# -----------------------------------------------------------------------------
# Undo-time
# -----------------------------------------------------------------------------

class UndoMoveError(FileSenseError):
    kind = "UndoMoveError"

    def __init__(self, current, reason):
        self.current = str(current)
        self.reason = reason
        super().__init__(f"Failed to move back {self.current}: {reason}")


class InvalidMoveLogError(FileSenseError):
    kind = "InvalidMoveLog"

    def __init__(self, entry):
        self.entry = entry
        super().__init__(f"Invalid move log entry (needs 'from' and 'to'): {entry!r}")


# -----------------------------------------------------------------------------
# Aggregate failures (raised by the command layer)
# -----------------------------------------------------------------------------

class OrganizeError(FileSenseError):
    """Some moves failed. The moves that did happen are kept in ``moves``."""

    kind = "OrganizeError"

    def __init__(self, succeeded: int, errors: list[str], moves=None):
        self.succeeded = succeeded
        self.errors = list(errors)
        self.moves = list(moves or [])
        super().__init__(
            f"Moved {succeeded} files, but some errors occurred:\n" + "\n".join(self.errors)
        )


class UndoError(FileSenseError):
    kind = "UndoError"

    def __init__(self, succeeded: int, errors: list[str]):
        self.succeeded = succeeded
        self.errors = list(errors)
        super().__init__(
            f"Restored {succeeded} files, but some errors occurred:\n" + "\n".join(self.errors)
        )
