"""
Zshrc File Service - Validated reads and backed-up atomic writes of the target file
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from zshrc_backend.errors import (
    ZshrcNotFoundError,
    ZshrcPermissionError,
    ZshrcReadError,
    ZshrcTooLargeError,
    ZshrcWriteError,
)
from zshrc_backend.services.backup_manager import BackupManager, atomic_write_bytes

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 1024 * 1024  # 1MB
DEFAULT_FILE_MODE = 0o600

_PERMISSION_ERRNOS = (errno.EACCES, errno.EPERM)


class ZshrcFileCache:
    """Read cache keyed by resolved path and modification time"""

    def __init__(self):
        self._entries: dict[Path, tuple[int, str]] = {}

    def get(self, path: Path, mtime_ns: int) -> str | None:
        cached = self._entries.get(path)
        if cached and cached[0] == mtime_ns:
            return cached[1]
        return None

    def put(self, path: Path, mtime_ns: int, content: str) -> None:
        self._entries[path] = (mtime_ns, content)

    def invalidate(self, path: Path) -> None:
        self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()


class ZshrcFile:
    """A shell config file plus its backup slot"""

    def __init__(
        self,
        path: str | Path,
        max_file_size: int = MAX_FILE_SIZE,
        cache: ZshrcFileCache | None = None,
    ):
        self.path = Path(path).expanduser()
        self.max_file_size = max_file_size
        self.cache = cache

    @property
    def effective_path(self) -> Path:
        """The real file behind a symlinked target"""
        return self.path.resolve() if self.path.is_symlink() else self.path

    @property
    def backups(self) -> BackupManager:
        return BackupManager(self.effective_path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str:
        """
        Read the file as UTF-8, line endings untouched.

        Raises ZshrcNotFoundError, ZshrcPermissionError, ZshrcTooLargeError or
        ZshrcReadError; the OS error is chained as the cause.
        """
        logger.debug("Reading %s", self.path)
        try:
            stats = self.path.stat()
            if stats.st_size > self.max_file_size:
                logger.error("File too large: %s (%d bytes, max %d)", self.path, stats.st_size, self.max_file_size)
                raise ZshrcTooLargeError(self.path, stats.st_size, self.max_file_size)

            key = self.path.resolve()
            if self.cache is not None:
                cached = self.cache.get(key, stats.st_mtime_ns)
                if cached is not None:
                    return cached

            with open(self.path, encoding="utf-8", newline="") as handle:
                content = handle.read()
        except FileNotFoundError as e:
            raise ZshrcNotFoundError(self.path) from e
        except PermissionError as e:
            raise ZshrcPermissionError(self.path) from e
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise ZshrcReadError(self.path) from e

        if self.cache is not None:
            self.cache.put(key, stats.st_mtime_ns, content)
        logger.info("Read %s (%d chars)", self.path, len(content))
        return content

    def read_or_empty(self) -> str:
        """Contents, or an empty string when the file has not been created yet"""
        try:
            return self.read()
        except ZshrcNotFoundError:
            return ""

    def write(self, content: str) -> Path | None:
        """
        Back up the current file, then replace it atomically with ``content``.

        Symlinked targets are written through to the real file. Existing
        permission bits are kept; new files get 0o600. Returns the backup path,
        or None when there was no previous file to back up.
        """
        target = self.effective_path
        logger.info("Writing %s (%d chars)", target, len(content))

        try:
            backup_path = BackupManager(target).snapshot()
            try:
                mode = target.stat().st_mode & 0o777
            except FileNotFoundError:
                mode = DEFAULT_FILE_MODE
            atomic_write_bytes(target, content.encode("utf-8"), mode=mode)
        except OSError as e:
            logger.error("Write failed for %s: %s", target, e)
            if isinstance(e, PermissionError) or e.errno in _PERMISSION_ERRNOS:
                raise ZshrcPermissionError(target) from e
            raise ZshrcWriteError(target, os.strerror(e.errno) if e.errno else str(e)) from e
        finally:
            if self.cache is not None:
                self.cache.invalidate(target.resolve())

        logger.info("Wrote %s", target)
        return backup_path

    def restore_backup(self) -> None:
        """Restore from the backup slot; NoBackupError propagates"""
        try:
            self.backups.restore()
        finally:
            if self.cache is not None:
                self.cache.invalidate(self.effective_path.resolve())
