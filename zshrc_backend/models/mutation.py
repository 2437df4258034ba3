"""Models for edits that add, toggle or delete entries in the file"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class AliasDefinition(BaseModel):
    """An alias to be written into the file"""

    name: str
    command: str
    description: str | None = None  # written as a comment line above the alias


class SectionMatch(BaseModel):
    """A heading in the file that fits a requested section name"""

    label: str
    start_line: int  # 1-indexed heading line
    end_line: int  # last line before the next heading, or the last line of the file
    score: int  # 100 exact, 90 same core name, 50 prefix


class SectionWriteResult(BaseModel):
    """New file content after inserting aliases"""

    content: str
    message: str
    added_to: Literal["existing", "new", "end"]
    section_name: str | None = None


class EntryEditResult(BaseModel):
    """New file content after toggling or deleting one entry line"""

    content: str
    message: str
    line_number: int
    enabled: bool  # state of the line after the edit; False for a deleted line
    changed: bool = True
