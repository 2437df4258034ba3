"""Request and response models for the HTTP API"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .backup import BackupInfo
from .diff import DiffResult
from .mutation import AliasDefinition


class ContentRequest(BaseModel):
    """Proposed full content of the config file"""

    content: str


class PreviewResponse(BaseModel):
    """Diff of a proposed write against the current file"""

    path: str
    diff: DiffResult
    preview: str  # diff markdown + preview markdown


class WriteResponse(BaseModel):
    """Result of a backed-up write"""

    path: str
    diff: DiffResult
    backup: BackupInfo


class FormatResponse(BaseModel):
    """Predominant section heading format of the file"""

    format: str
    header_start: str
    header_end: str | None = None


class BackupDiffResponse(BaseModel):
    """Changes made to the file since the backup was taken"""

    backup: BackupInfo
    diff: DiffResult


class AddAliasesRequest(BaseModel):
    """Aliases to add under a section, created when no existing one matches"""

    section_name: str | None = None  # None appends a single alias to the end of the file
    aliases: list[AliasDefinition] = Field(min_length=1)
    attribution: str | None = None


class MutationResponse(BaseModel):
    """Result of an edit written to the file"""

    path: str
    message: str
    changed: bool = True
    section_name: str | None = None
    line_number: int | None = None
    enabled: bool | None = None
    diff: DiffResult
    backup: BackupInfo
