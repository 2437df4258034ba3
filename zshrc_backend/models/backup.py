"""Backup slot data models"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, computed_field


def format_size(size: int) -> str:
    """Human-readable byte count: B below 1 KiB, then KB and MB with one decimal"""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


class BackupInfo(BaseModel):
    """State of the single backup slot paired with a target file"""

    exists: bool
    path: str
    size_bytes: int = 0
    modified_at: datetime | None = None

    @computed_field
    @property
    def size_formatted(self) -> str:
        return format_size(self.size_bytes)
