"""Duplicate detection over parsed entries"""

from __future__ import annotations

import logging

from zshrc_backend.models.entry import DuplicateGroup, DuplicateReport, Entry

logger = logging.getLogger(__name__)


def detect_duplicates(entries: list[Entry], key_field: str) -> DuplicateReport:
    """
    Group entries whose ``key_field`` values are exactly equal.

    Only keys seen more than once are reported, in order of first occurrence.
    ``total_duplicates`` counts every occurrence beyond the first. Entries
    without the field are ignored.
    """
    if key_field not in Entry.model_fields:
        logger.warning("Unknown duplicate key field %r; nothing to compare", key_field)
        return DuplicateReport()

    groups: dict[str, list[Entry]] = {}
    for entry in entries:
        key = entry.key(key_field)
        if key is None:
            continue
        groups.setdefault(key, []).append(entry)

    duplicates = [
        DuplicateGroup(key=key, occurrences=occurrences)
        for key, occurrences in groups.items()
        if len(occurrences) > 1
    ]
    return DuplicateReport(
        duplicates=duplicates,
        total_duplicates=sum(len(group.occurrences) - 1 for group in duplicates),
    )
