"""Diff-related data models"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, model_validator

DiffLineType = Literal["add", "remove", "unchanged"]


class DiffLine(BaseModel):
    """A single line of a positional diff"""

    type: DiffLineType
    content: str
    line_number: int | None = None  # 1-indexed, in the modified text; None for removals


class DiffResult(BaseModel):
    """Complete diff between two versions of the file"""

    has_changes: bool
    additions: int
    deletions: int
    lines: list[DiffLine]
    markdown: str

    @model_validator(mode="after")
    def _check_counts(self) -> "DiffResult":
        if self.has_changes != (self.additions > 0 or self.deletions > 0):
            raise ValueError("has_changes must reflect additions/deletions")
        return self
