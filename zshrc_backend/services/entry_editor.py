"""
Entry Editor - Enable, disable and delete single entry lines

An entry is disabled by commenting its line out with ``# `` after the leading
whitespace, and enabled by removing that comment again. Lookups see through
the comment, so a disabled entry can still be found, toggled or deleted.
Only the first line declaring the key is touched.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from zshrc_backend.errors import EntryNotFoundError, InvalidEntryError, ZshrcWriteError
from zshrc_backend.models.entry import EntryType
from zshrc_backend.models.mutation import EntryEditResult
from zshrc_backend.services.entry_parsers import MAX_SAFE_LINE_LENGTH
from zshrc_backend.services.zshrc_file import ZshrcFile

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "# "

_COMMENT_MARKER = re.compile(r"^(\s*)#\s*")
_LEADING_WHITESPACE = re.compile(r"^\s*")

# Line pattern per editable kind, built from the escaped key
ENTRY_LINE_PATTERNS: dict[EntryType, Callable[[str], str]] = {
    EntryType.ALIAS: lambda key: rf"^\s*alias\s+(?:-[gsS]\s+)?{key}=",
    EntryType.EXPORT: lambda key: rf"^\s*(?:export|typeset\s+-x)\s+{key}=",
    EntryType.SETOPT: lambda key: rf"^\s*setopt\s+{key}\s*$",
    EntryType.SOURCE: lambda key: rf"^\s*(?:source|\.)\s+{key}\s*$",
    EntryType.HISTORY: lambda key: rf"^\s*{key}\s*=",
}


def entry_line_pattern(entry_type: EntryType, key: str) -> re.Pattern[str]:
    """Pattern matching the declaration line of one entry; InvalidEntryError for other kinds"""
    if entry_type not in ENTRY_LINE_PATTERNS:
        raise InvalidEntryError(f"Entries of type {entry_type.value!r} cannot be edited")
    if not key or not key.strip():
        raise InvalidEntryError("Entry key must not be empty")
    return re.compile(ENTRY_LINE_PATTERNS[entry_type](re.escape(key)))


def is_commented(line: str) -> bool:
    return line.lstrip().startswith("#")


def uncomment_line(line: str) -> str:
    return _COMMENT_MARKER.sub(r"\1", line, count=1)


def comment_line(line: str) -> str:
    leading = _LEADING_WHITESPACE.match(line).group(0)
    return f"{leading}{COMMENT_PREFIX}{line[len(leading):]}"


def find_entry_line(
    lines: list[str],
    pattern: re.Pattern[str],
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> int | None:
    """0-based index of the first line declaring the entry, commented out or not"""
    for index, line in enumerate(lines):
        if not line or len(line) > max_line_length:
            continue
        if pattern.search(line) or pattern.search(uncomment_line(line)):
            return index
    return None


def _locate(content: str, entry_type: EntryType, key: str, max_line_length: int) -> tuple[list[str], int]:
    # split on LF only; a CR stays on its line and is written back unchanged
    lines = content.split("\n")
    index = find_entry_line(lines, entry_line_pattern(entry_type, key), max_line_length)
    if index is None:
        raise EntryNotFoundError(entry_type.value, key)
    return lines, index


def toggle_entry_line(
    content: str,
    entry_type: EntryType,
    key: str,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> EntryEditResult:
    """Flip the entry between enabled and commented out"""
    lines, index = _locate(content, entry_type, key, max_line_length)
    enabled = is_commented(lines[index])
    lines[index] = uncomment_line(lines[index]) if enabled else comment_line(lines[index])
    return EntryEditResult(
        content="\n".join(lines),
        message=f"{entry_type.value.capitalize()} '{key}' {'enabled' if enabled else 'disabled'}",
        line_number=index + 1,
        enabled=enabled,
    )


def set_entry_line_enabled(
    content: str,
    entry_type: EntryType,
    key: str,
    enabled: bool,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> EntryEditResult:
    """Put the entry in the given state; content is returned unchanged when it already is"""
    lines, index = _locate(content, entry_type, key, max_line_length)
    if is_commented(lines[index]) != enabled:
        state = "enabled" if enabled else "disabled"
        return EntryEditResult(
            content=content,
            message=f"{entry_type.value.capitalize()} '{key}' is already {state}",
            line_number=index + 1,
            enabled=enabled,
            changed=False,
        )
    return toggle_entry_line(content, entry_type, key, max_line_length)


def delete_entry_line(
    content: str,
    entry_type: EntryType,
    key: str,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> EntryEditResult:
    """Remove the entry's line, including its line break"""
    lines, index = _locate(content, entry_type, key, max_line_length)
    del lines[index]
    return EntryEditResult(
        content="\n".join(lines),
        message=f"{entry_type.value.capitalize()} '{key}' deleted",
        line_number=index + 1,
        enabled=False,
    )


def _write_verified(zshrc_file: ZshrcFile, result: EntryEditResult) -> EntryEditResult:
    """Write the edited content and read it back to confirm it landed"""
    if not result.changed:
        return result
    zshrc_file.write(result.content)
    if zshrc_file.read() != result.content:
        logger.error("Verification failed after editing %s", zshrc_file.path)
        raise ZshrcWriteError(zshrc_file.path, "content mismatch after write")
    logger.info("%s in %s (line %d)", result.message, zshrc_file.path, result.line_number)
    return result


def toggle_entry(
    zshrc_file: ZshrcFile,
    entry_type: EntryType,
    key: str,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> EntryEditResult:
    return _write_verified(zshrc_file, toggle_entry_line(zshrc_file.read(), entry_type, key, max_line_length))


def set_entry_enabled(
    zshrc_file: ZshrcFile,
    entry_type: EntryType,
    key: str,
    enabled: bool,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> EntryEditResult:
    content = zshrc_file.read()
    return _write_verified(zshrc_file, set_entry_line_enabled(content, entry_type, key, enabled, max_line_length))


def delete_entry(
    zshrc_file: ZshrcFile,
    entry_type: EntryType,
    key: str,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> EntryEditResult:
    return _write_verified(zshrc_file, delete_entry_line(zshrc_file.read(), entry_type, key, max_line_length))
