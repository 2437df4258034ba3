"""Exception types raised by the file-touching parts of the engine.

Parsing, segmentation and diffing never raise. Reading, writing, backups and
entry edits do. OS-level errors are chained as ``__cause__``.
"""

from __future__ import annotations

from pathlib import Path


class ZshrcError(Exception):
    """Base class for all engine errors"""


class NoBackupError(ZshrcError):
    """Restore or delete was requested but the backup slot is empty"""

    def __init__(self, backup_path: str | Path):
        self.backup_path = str(backup_path)
        super().__init__(f"No backup file found: {self.backup_path}")


class EntryNotFoundError(ZshrcError):
    """No line of the file declares the requested entry"""

    def __init__(self, entry_type: str, key: str):
        self.entry_type = entry_type
        self.key = key
        super().__init__(f"{entry_type} '{key}' not found")


class InvalidEntryError(ZshrcError):
    """An entry to write or edit has an unusable name or kind"""


class ZshrcFileError(ZshrcError):
    """A read or write of the target file failed"""

    def __init__(self, path: str | Path, message: str | None = None):
        self.path = str(path)
        super().__init__(message or f"Operation failed on {self.path}")


class ZshrcNotFoundError(ZshrcFileError):
    def __init__(self, path: str | Path):
        super().__init__(path, f"File not found: {path}")


class ZshrcPermissionError(ZshrcFileError):
    def __init__(self, path: str | Path):
        super().__init__(path, f"Permission denied: {path}")


class ZshrcTooLargeError(ZshrcFileError):
    def __init__(self, path: str | Path, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(path, f"File too large: {path} ({size} bytes, max {max_size})")


class ZshrcReadError(ZshrcFileError):
    def __init__(self, path: str | Path):
        super().__init__(path, f"Failed to read {path}")


class ZshrcWriteError(ZshrcFileError):
    def __init__(self, path: str | Path, reason: str | None = None):
        message = f"Failed to write {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)
