"""
Backup Manager - Single-slot backup of a target config file

The backup lives next to the target as ``<target>.bak``. Each snapshot
replaces the previous one; there is no history.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from zshrc_backend.errors import NoBackupError
from zshrc_backend.models.backup import BackupInfo

logger = logging.getLogger(__name__)

BACKUP_EXTENSION = ".bak"


def backup_path_for(target_path: str | Path) -> Path:
    """Deterministic sibling backup path for a target file"""
    target = Path(target_path)
    return target.with_name(target.name + BACKUP_EXTENSION)


def atomic_write_bytes(path: Path, data: bytes, mode: int | None = None) -> None:
    """
    Replace ``path`` with ``data`` via a temporary sibling and ``os.replace``.

    The temporary file is removed if anything fails before the rename.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class BackupManager:
    """Snapshot, inspect, restore and delete the backup of one target file"""

    def __init__(self, target_path: str | Path, backup_path: str | Path | None = None):
        self.target_path = Path(target_path)
        self.backup_path = Path(backup_path) if backup_path else backup_path_for(self.target_path)

    def snapshot(self) -> Path | None:
        """
        Copy the target's bytes into the backup slot, overwriting it.

        Returns the backup path, or None when the target does not exist yet
        (there is nothing to back up and the existing backup is kept).
        """
        try:
            with open(self.target_path, "rb") as source:
                data = source.read()
        except FileNotFoundError:
            logger.debug("No target at %s; skipping backup", self.target_path)
            return None

        atomic_write_bytes(self.backup_path, data, mode=0o600)
        logger.info("Backed up %s to %s (%d bytes)", self.target_path, self.backup_path, len(data))
        return self.backup_path

    def get_backup_info(self) -> BackupInfo:
        try:
            stats = self.backup_path.stat()
        except FileNotFoundError:
            return BackupInfo(exists=False, path=str(self.backup_path))

        return BackupInfo(
            exists=True,
            path=str(self.backup_path),
            size_bytes=stats.st_size,
            modified_at=datetime.fromtimestamp(stats.st_mtime),
        )

    def read_backup(self) -> str | None:
        """Backup contents as text, or None when the slot is empty"""
        try:
            with open(self.backup_path, encoding="utf-8", newline="") as handle:
                return handle.read()
        except FileNotFoundError:
            return None

    def restore(self) -> None:
        """
        Overwrite the target with the backup's bytes.

        Raises NoBackupError when the slot is empty. The target keeps its
        permission bits; a missing target is recreated with mode 0o600.
        """
        try:
            with open(self.backup_path, "rb") as source:
                data = source.read()
        except FileNotFoundError:
            logger.error("Restore requested but no backup at %s", self.backup_path)
            raise NoBackupError(self.backup_path) from None

        target = self.target_path.resolve()
        try:
            mode = target.stat().st_mode & 0o777
        except FileNotFoundError:
            mode = 0o600

        atomic_write_bytes(target, data, mode=mode)
        logger.info("Restored %s from %s", target, self.backup_path)

    def delete_backup(self) -> None:
        """Remove the backup; raises NoBackupError when there is none"""
        try:
            self.backup_path.unlink()
        except FileNotFoundError:
            raise NoBackupError(self.backup_path) from None
        logger.info("Deleted backup %s", self.backup_path)
