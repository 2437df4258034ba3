"""
Section Writer - Insert aliases into a matching section or a new one

Content-level functions take the file text and return the new text. The
``add_*`` wrappers read the target, insert, and write back through
``ZshrcFile.write`` so every change is backed up first.

Section names match loosely: "Git Aliases" finds "# --- Git --- #" because
both reduce to the core name "git", while "Git" never matches "Digital".
"""

from __future__ import annotations

import logging
import re

from zshrc_backend.errors import InvalidEntryError
from zshrc_backend.models.mutation import AliasDefinition, SectionMatch, SectionWriteResult
from zshrc_backend.services.section_segmenter import detect_section_format, find_section_markers, section_header
from zshrc_backend.services.shell_escape import generate_safe_alias_line
from zshrc_backend.services.zshrc_file import ZshrcFile

logger = logging.getLogger(__name__)

# Stripped from the end of a normalized name to get its core
SECTION_SUFFIXES = ("aliases", "alias", "config", "configuration", "stuff", "settings", "shortcuts", "commands")

EXACT_MATCH_SCORE = 100
CORE_MATCH_SCORE = 90
PREFIX_MATCH_SCORE = 50
MIN_PREFIX_CORE_LENGTH = 3

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def normalize_section_name(name: str) -> str:
    """Lowercase with everything but letters and digits removed"""
    return _NON_ALPHANUMERIC.sub("", name.lower())


def _core_name(normalized: str) -> str:
    for suffix in SECTION_SUFFIXES:
        if normalized.endswith(suffix) and len(normalized) > len(suffix):
            return normalized[: -len(suffix)]
    return normalized


def _match_score(target: str, section_label: str) -> int:
    target_normalized = normalize_section_name(target)
    section_normalized = normalize_section_name(section_label)
    if target_normalized == section_normalized:
        return EXACT_MATCH_SCORE

    target_core = _core_name(target_normalized)
    section_core = _core_name(section_normalized)
    if not target_core or not section_core:
        return 0
    if target_core == section_core:
        return CORE_MATCH_SCORE
    if min(len(target_core), len(section_core)) >= MIN_PREFIX_CORE_LENGTH and (
        section_core.startswith(target_core) or target_core.startswith(section_core)
    ):
        return PREFIX_MATCH_SCORE
    return 0


def _line_ending(content: str) -> str:
    """CRLF when every newline in the text is CRLF, else LF"""
    if "\r\n" in content and content.count("\r\n") == content.count("\n"):
        return "\r\n"
    return "\n"


def find_matching_section(content: str, target_name: str) -> SectionMatch | None:
    """
    Best section heading for ``target_name``, or None.

    End markers never match. On equal scores the earlier heading wins. The
    section runs to the line before the next marker, or to the last line.
    """
    markers = find_section_markers(content)
    best: tuple[int, int] | None = None  # (score, marker index)
    for index, marker in enumerate(markers):
        if marker.dialect.is_end:
            continue
        score = _match_score(target_name, marker.label)
        if score and (best is None or score > best[0]):
            best = (score, index)

    if best is None:
        return None

    score, index = best
    marker = markers[index]
    if index + 1 < len(markers):
        end_line = markers[index + 1].line_number - 1
    else:
        lines = content.split(_line_ending(content))
        # a trailing newline does not start another line
        end_line = len(lines) - 1 if len(lines) > 1 and lines[-1] == "" else len(lines)

    return SectionMatch(label=marker.label, start_line=marker.line_number, end_line=end_line, score=score)


def format_alias_lines(aliases: list[AliasDefinition], include_comments: bool = True) -> list[str]:
    """Alias lines with single-quoted commands, each optionally preceded by ``# description``"""
    lines: list[str] = []
    for alias in aliases:
        line = generate_safe_alias_line(alias.name, alias.command)
        if line is None:
            raise InvalidEntryError(f"Invalid alias name: {alias.name!r}")
        if include_comments and alias.description:
            lines.append(f"# {alias.description}")
        lines.append(line)
    return lines


def _insert_into_section(content: str, match: SectionMatch, new_lines: list[str]) -> str:
    """Insert after the section's last line, separated by a blank line when needed"""
    eol = _line_ending(content)
    lines = content.split(eol)
    insert_at = match.end_line
    block = list(new_lines)
    if insert_at > 0 and lines[insert_at - 1].strip() != "":
        block.insert(0, "")
    lines[insert_at:insert_at] = block
    return eol.join(lines)


def _append_section(content: str, display_name: str, new_lines: list[str], fmt: str) -> str:
    eol = _line_ending(content)
    start, end = section_header(display_name, fmt)
    block = ["", start, "", *new_lines]
    if end:
        block.extend(["", end])
    block.append("")
    return content + eol.join(block)


def insert_aliases(
    content: str,
    section_name: str,
    aliases: list[AliasDefinition],
    attribution: str | None = None,
    fmt: str | None = None,
) -> SectionWriteResult:
    """
    Add aliases under the section best matching ``section_name``.

    An existing section gets an ``# Added from ...`` comment followed by the
    aliases. Without a match, a new section in the file's predominant heading
    format (or ``fmt``) is appended; ``attribution`` is shown in its name.
    Raises InvalidEntryError for an alias name that is not safe to write.
    """
    alias_lines = format_alias_lines(aliases)
    match = find_matching_section(content, section_name)

    if match:
        added_from = f"# Added from {section_name} ({attribution})" if attribution else f"# Added from {section_name}"
        new_content = _insert_into_section(content, match, [added_from, *alias_lines])
        logger.info("Added %d aliases to existing section %r", len(aliases), match.label)
        return SectionWriteResult(
            content=new_content,
            message=f'Added {len(aliases)} aliases to existing section "{match.label}"',
            added_to="existing",
            section_name=match.label,
        )

    display_name = f"{section_name} ({attribution})" if attribution else section_name
    new_content = _append_section(content, display_name, alias_lines, fmt or detect_section_format(content))
    logger.info("Created section %r with %d aliases", display_name, len(aliases))
    return SectionWriteResult(
        content=new_content,
        message=f'Created new section "{display_name}" with {len(aliases)} aliases',
        added_to="new",
        section_name=display_name,
    )


def insert_alias(
    content: str,
    alias: AliasDefinition,
    section_name: str | None = None,
    fmt: str | None = None,
) -> SectionWriteResult:
    """
    Add one alias, into a matching section when ``section_name`` is given.

    Unlike ``insert_aliases`` no ``# Added from`` comment is written. With no
    section name the alias is appended to the end of the file.
    """
    alias_lines = format_alias_lines([alias])

    if section_name is None:
        eol = _line_ending(content)
        new_content = content + eol + eol.join(alias_lines) + eol
        return SectionWriteResult(
            content=new_content,
            message=f'Added "{alias.name}" to end of file',
            added_to="end",
        )

    match = find_matching_section(content, section_name)
    if match:
        return SectionWriteResult(
            content=_insert_into_section(content, match, alias_lines),
            message=f'Added "{alias.name}" to section "{match.label}"',
            added_to="existing",
            section_name=match.label,
        )

    new_content = _append_section(content, section_name, alias_lines, fmt or detect_section_format(content))
    return SectionWriteResult(
        content=new_content,
        message=f'Added "{alias.name}" to new section "{section_name}"',
        added_to="new",
        section_name=section_name,
    )


def add_aliases(
    zshrc_file: ZshrcFile,
    section_name: str,
    aliases: list[AliasDefinition],
    attribution: str | None = None,
    fmt: str | None = None,
) -> SectionWriteResult:
    """Insert aliases into the target file; a missing file is created"""
    result = insert_aliases(zshrc_file.read_or_empty(), section_name, aliases, attribution, fmt)
    zshrc_file.write(result.content)
    return result


def add_alias(
    zshrc_file: ZshrcFile,
    alias: AliasDefinition,
    section_name: str | None = None,
    fmt: str | None = None,
) -> SectionWriteResult:
    result = insert_alias(zshrc_file.read_or_empty(), alias, section_name, fmt)
    zshrc_file.write(result.content)
    return result
