"""Backup slot endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from zshrc_backend.errors import NoBackupError, ZshrcError
from zshrc_backend.models.api import BackupDiffResponse
from zshrc_backend.models.backup import BackupInfo
from zshrc_backend.routers.deps import current_settings, get_zshrc_file
from zshrc_backend.routers.errors import to_http_exception
from zshrc_backend.services.config_manager import ZshrcSettings
from zshrc_backend.services.diff_generator import compute_diff
from zshrc_backend.services.zshrc_file import ZshrcFile

router = APIRouter()


@router.get("", response_model=BackupInfo)
async def get_backup_info(zshrc_file: ZshrcFile = Depends(get_zshrc_file)) -> BackupInfo:
    """Whether a backup exists, with its size and modification time"""
    return zshrc_file.backups.get_backup_info()


@router.get("/diff", response_model=BackupDiffResponse)
async def diff_against_backup(
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> BackupDiffResponse:
    """Changes made to the file since the backup was taken"""
    backups = zshrc_file.backups

    backup_content = backups.read_backup()
    if backup_content is None:
        raise to_http_exception(NoBackupError(backups.backup_path))
    try:
        current = zshrc_file.read_or_empty()
    except ZshrcError as e:
        raise to_http_exception(e) from e

    return BackupDiffResponse(
        backup=backups.get_backup_info(),
        diff=compute_diff(backup_content, current, settings.diff_context_lines),
    )


@router.post("/restore")
async def restore_backup(zshrc_file: ZshrcFile = Depends(get_zshrc_file)) -> dict[str, Any]:
    """Overwrite the config file with the backup"""
    try:
        zshrc_file.restore_backup()
    except ZshrcError as e:
        raise to_http_exception(e) from e
    except OSError as e:
        raise to_http_exception(ZshrcError(f"Restore failed: {e}")) from e

    return {"status": "success", "message": f"Restored {zshrc_file.path} from backup"}


@router.delete("")
async def delete_backup(zshrc_file: ZshrcFile = Depends(get_zshrc_file)) -> dict[str, Any]:
    """Remove the backup file"""
    backups = zshrc_file.backups
    try:
        backups.delete_backup()
    except ZshrcError as e:
        raise to_http_exception(e) from e

    return {"status": "success", "message": f"Deleted {backups.backup_path}"}
