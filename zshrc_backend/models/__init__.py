"""Models module - Pydantic data models"""

from .api import (
    AddAliasesRequest,
    BackupDiffResponse,
    ContentRequest,
    FormatResponse,
    MutationResponse,
    PreviewResponse,
    WriteResponse,
)
from .backup import BackupInfo
from .diff import DiffLine, DiffResult
from .entry import UNLABELED, DuplicateGroup, DuplicateReport, Entry, EntryType, Section
from .mutation import AliasDefinition, EntryEditResult, SectionMatch, SectionWriteResult

__all__ = [
    # Entry models
    "UNLABELED",
    "Entry",
    "EntryType",
    "Section",
    "DuplicateGroup",
    "DuplicateReport",
    # Diff models
    "DiffLine",
    "DiffResult",
    # Backup models
    "BackupInfo",
    # Mutation models
    "AliasDefinition",
    "EntryEditResult",
    "SectionMatch",
    "SectionWriteResult",
    # API models
    "AddAliasesRequest",
    "BackupDiffResponse",
    "ContentRequest",
    "FormatResponse",
    "MutationResponse",
    "PreviewResponse",
    "WriteResponse",
]
