"""zshrc manager backend - parsing, diffing and backup engine for zsh config files"""

from .errors import (
    EntryNotFoundError,
    InvalidEntryError,
    NoBackupError,
    ZshrcError,
    ZshrcFileError,
    ZshrcNotFoundError,
    ZshrcPermissionError,
    ZshrcReadError,
    ZshrcTooLargeError,
    ZshrcWriteError,
)

__version__ = "1.0.0"

__all__ = [
    "EntryNotFoundError",
    "InvalidEntryError",
    "NoBackupError",
    "ZshrcError",
    "ZshrcFileError",
    "ZshrcNotFoundError",
    "ZshrcPermissionError",
    "ZshrcReadError",
    "ZshrcTooLargeError",
    "ZshrcWriteError",
    "__version__",
]
