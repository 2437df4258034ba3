"""Parsed zshrc entry and section models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, computed_field

UNLABELED = "Unlabeled"


class EntryType(str, Enum):
    """Construct kinds recognized by the entry parsers"""

    ALIAS = "alias"
    EXPORT = "export"
    FUNCTION = "function"
    SOURCE = "source"
    PLUGIN = "plugin"
    SETOPT = "setopt"
    EVAL = "eval"
    AUTOLOAD = "autoload"
    FPATH = "fpath"
    PATH = "path"
    THEME = "theme"
    COMPLETION = "completion"
    HISTORY = "history"
    KEYBINDING = "keybinding"


class Entry(BaseModel):
    """A single structured fact extracted from one line of the file"""

    type: EntryType
    line_number: int  # 1-indexed
    original_line: str
    section: str | None = None  # assigned after segmentation

    # Kind-specific payload; unused fields stay None
    name: str | None = None  # alias, function, plugin, autoload, theme
    variable: str | None = None  # export, history
    command: str | None = None  # alias, eval, completion, keybinding
    value: str | None = None  # export, path, history
    path: str | None = None  # source, fpath
    option: str | None = None  # setopt

    def key(self, field: str) -> str | None:
        """Value of any field by name as a string, or None when unset or unknown"""
        if field not in type(self).model_fields:
            return None
        value = getattr(self, field)
        if value is None:
            return None
        if isinstance(value, Enum):
            return value.value
        return str(value)


class Section(BaseModel):
    """A labeled, contiguous, inclusive line range of the file"""

    label: str
    start_line: int
    end_line: int
    content: str
    alias_count: int = 0
    export_count: int = 0
    function_count: int = 0
    source_count: int = 0
    plugin_count: int = 0
    setopt_count: int = 0
    eval_count: int = 0
    autoload_count: int = 0
    fpath_count: int = 0
    path_count: int = 0
    theme_count: int = 0
    completion_count: int = 0
    history_count: int = 0
    keybinding_count: int = 0
    other_count: int = 0

    @computed_field
    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def contains(self, line_number: int) -> bool:
        return self.start_line <= line_number <= self.end_line


class DuplicateGroup(BaseModel):
    """All entries sharing one key value"""

    key: str
    occurrences: list[Entry]

    @computed_field
    @property
    def count(self) -> int:
        return len(self.occurrences)

    @computed_field
    @property
    def sections(self) -> list[str]:
        seen: list[str] = []
        for entry in self.occurrences:
            label = entry.section or UNLABELED
            if label not in seen:
                seen.append(label)
        return seen


class DuplicateReport(BaseModel):
    """Colliding keys in first-occurrence order"""

    duplicates: list[DuplicateGroup] = []
    total_duplicates: int = 0
