"""Whole-file parsing: every entry kind, joined to its logical section"""

from __future__ import annotations

from zshrc_backend.models.entry import Entry, EntryType
from zshrc_backend.services.entry_parsers import MAX_SAFE_LINE_LENGTH, parse_all_entries, parse_entries
from zshrc_backend.services.section_segmenter import section_label_for_line, to_logical_sections


def parse_zshrc(
    content: str,
    entry_type: EntryType | None = None,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> list[Entry]:
    """
    Parse the file into entries labeled with their section.

    With ``entry_type`` only that kind is returned. Entries are ordered by line
    number; several entries from one line keep parser order.
    """
    all_entries = parse_all_entries(content, max_line_length)
    sections = to_logical_sections(content, max_line_length, entries=all_entries)

    if entry_type is None:
        entries = all_entries
    else:
        entries = parse_entries(content, entry_type, max_line_length)

    return [
        entry.model_copy(update={"section": section_label_for_line(sections, entry.line_number)})
        for entry in entries
    ]
