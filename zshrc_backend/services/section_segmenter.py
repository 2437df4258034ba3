"""
Section Segmenter - Split a zshrc into labeled logical sections

Supported heading dialects, tested in this order (first match wins):

1. ``# @end X``            custom end
2. ``# @start X``          custom start
3. ``# --- End X --- #``   dashed end
4. ``# --- X --- #``       dashed start
5. ``# [ X ]``             bracketed
6. ``# Section: X``        labeled
7. ``## X`` / ``# # X``    hash

A start marker opens a section that begins on the marker line; an end marker
closes the open section on its own line. Lines outside any section are
grouped into "Unlabeled" sections, so the result covers every line once.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass

from zshrc_backend.models.entry import UNLABELED, Entry, EntryType, Section
from zshrc_backend.services.entry_parsers import MAX_SAFE_LINE_LENGTH, parse_all_entries, split_lines

logger = logging.getLogger(__name__)

DEFAULT_SECTION_FORMAT = "dashed"


@dataclass(frozen=True)
class SectionDialect:
    """One heading style: a line pattern, its marker role and the format family"""

    name: str
    pattern: re.Pattern[str]
    is_end: bool
    format: str


SECTION_DIALECTS: tuple[SectionDialect, ...] = (
    SectionDialect("custom_end", re.compile(r"^\s*#\s*@end\b\s*(.*?)\s*$", re.IGNORECASE), True, "custom"),
    SectionDialect("custom_start", re.compile(r"^\s*#\s*@start\s+(.+?)\s*$", re.IGNORECASE), False, "custom"),
    SectionDialect(
        "dashed_end", re.compile(r"^\s*#\s*---\s*End\b\s*(.*?)\s*---\s*#\s*$", re.IGNORECASE), True, "dashed"
    ),
    SectionDialect(
        "dashed_start",
        re.compile(r"^\s*#\s*---\s*(?!End\b)(\S.*?)\s*---\s*#\s*$", re.IGNORECASE),
        False,
        "dashed",
    ),
    SectionDialect("bracketed", re.compile(r"^\s*#+\s*\[\s*(.+?)\s*\]\s*$"), False, "bracketed"),
    SectionDialect("labeled", re.compile(r"^\s*#+\s*section\s*:\s*(.+?)\s*$", re.IGNORECASE), False, "labeled"),
    SectionDialect("hash", re.compile(r"^\s*#\s*#\s+([^#\s].*?)\s*$"), False, "hash"),
)

# Marker templates per format family: (start, end or None)
SECTION_TEMPLATES: dict[str, tuple[str, str | None]] = {
    "dashed": ("# --- {name} --- #", "# --- End {name} --- #"),
    "bracketed": ("# [ {name} ]", None),
    "hash": ("## {name}", None),
    "labeled": ("# Section: {name}", None),
    "custom": ("# @start {name}", "# @end {name}"),
}


@dataclass(frozen=True)
class SectionMarker:
    """A heading line recognized by one of the dialects"""

    dialect: SectionDialect
    label: str
    line_number: int


def match_section_marker(line: str, line_number: int = 0) -> SectionMarker | None:
    """Return the first dialect matching the line, or None"""
    if len(line) > MAX_SAFE_LINE_LENGTH:
        return None
    for dialect in SECTION_DIALECTS:
        match = dialect.pattern.match(line)
        if match:
            return SectionMarker(dialect=dialect, label=match.group(1).strip(), line_number=line_number)
    return None


def find_section_markers(content: str) -> list[SectionMarker]:
    markers = []
    for index, line in enumerate(split_lines(content)):
        marker = match_section_marker(line, index + 1)
        if marker:
            markers.append(marker)
    return markers


def _build_section(
    label: str,
    start: int,
    end: int,
    lines: list[str],
    entries: list[Entry],
) -> Section:
    """Assemble a Section for lines start..end (1-indexed, inclusive) with per-kind counts"""
    in_range = [entry for entry in entries if start <= entry.line_number <= end]
    counts = Counter(entry.type for entry in in_range)
    entry_lines = {entry.line_number for entry in in_range}

    other = 0
    for line_number in range(start, end + 1):
        stripped = lines[line_number - 1].strip()
        if stripped and not stripped.startswith("#") and line_number not in entry_lines:
            other += 1

    return Section(
        label=label,
        start_line=start,
        end_line=end,
        content="\n".join(lines[start - 1 : end]),
        other_count=other,
        # alias_count, export_count, ... one per entry kind
        **{f"{entry_type.value}_count": counts[entry_type] for entry_type in EntryType},
    )


def to_logical_sections(
    content: str,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
    entries: list[Entry] | None = None,
) -> list[Section]:
    """
    Partition the text into an ordered, gap-free list of sections.

    Empty input yields no sections. Every other input yields sections whose
    line ranges are disjoint, non-empty and together cover all lines.
    Pass already-parsed ``entries`` to skip parsing the text a second time.
    """
    if content == "":
        return []

    lines = split_lines(content)
    if entries is None:
        entries = parse_all_entries(content, max_line_length)
    sections: list[Section] = []

    current_label = UNLABELED
    current_start = 1

    def close(end: int) -> None:
        if end >= current_start:
            sections.append(_build_section(current_label, current_start, end, lines, entries))

    for index, line in enumerate(lines):
        line_number = index + 1
        if len(line) > max_line_length:
            continue
        marker = match_section_marker(line, line_number)
        if marker is None:
            continue

        if marker.dialect.is_end:
            if current_label == UNLABELED:
                # nothing open; the stray end marker is an ordinary line
                continue
            close(line_number)
            current_label = UNLABELED
            current_start = line_number + 1
        else:
            close(line_number - 1)
            current_label = marker.label or UNLABELED
            current_start = line_number

    close(len(lines))
    logger.debug("Segmented %d lines into %d sections", len(lines), len(sections))
    return sections


def section_label_for_line(sections: list[Section], line_number: int) -> str:
    """Label of the section containing the line; Unlabeled when outside every range"""
    for section in sections:
        if section.contains(line_number):
            return section.label
    return UNLABELED


def detect_section_format(content: str) -> str:
    """Predominant heading format family used in the file; ``dashed`` when there are none"""
    counts = Counter(marker.dialect.format for marker in find_section_markers(content))
    if not counts:
        return DEFAULT_SECTION_FORMAT
    # most_common keeps first-seen order among equal counts
    return counts.most_common(1)[0][0]


def section_header(name: str, fmt: str | None = None) -> tuple[str, str | None]:
    """Start and optional end marker lines for a new section in the given format"""
    start, end = SECTION_TEMPLATES.get(fmt or DEFAULT_SECTION_FORMAT, SECTION_TEMPLATES[DEFAULT_SECTION_FORMAT])
    return start.format(name=name), end.format(name=name) if end else None
