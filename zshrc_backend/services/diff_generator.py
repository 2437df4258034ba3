"""
Diff Generator Service - Positional line diffs and markdown previews of zshrc edits
"""

from __future__ import annotations

from zshrc_backend.models.diff import DiffLine, DiffResult

NO_CHANGES_DIFF = "No changes detected."
NO_CHANGES_PREVIEW = "No changes to preview."


def _find_from(lines: list[str], target: str, start: int) -> int:
    """Index of the first occurrence of target at or after start, or -1"""
    try:
        return lines.index(target, start)
    except ValueError:
        return -1


def positional_diff(original: list[str], modified: list[str]) -> list[DiffLine]:
    """
    Walk both line lists with one cursor each.

    On a mismatch, look for the current original line further down the
    modified list and the current modified line further down the original
    list (first match only, so repeated lines are told apart by position).
    The closer match decides: a closer modified line means the original line
    was removed; a closer original line means the modified line was added.
    Equal distances, or no match at all, count as an in-place replacement.
    """
    lines: list[DiffLine] = []
    i = 0
    j = 0

    while i < len(original) or j < len(modified):
        if i >= len(original):
            lines.append(DiffLine(type="add", content=modified[j], line_number=j + 1))
            j += 1
            continue
        if j >= len(modified):
            lines.append(DiffLine(type="remove", content=original[i]))
            i += 1
            continue

        orig_line = original[i]
        mod_line = modified[j]
        if orig_line == mod_line:
            lines.append(DiffLine(type="unchanged", content=orig_line, line_number=j + 1))
            i += 1
            j += 1
            continue

        orig_in_modified = _find_from(modified, orig_line, j)
        mod_in_original = _find_from(original, mod_line, i)

        if orig_in_modified == -1 and mod_in_original == -1:
            step = "replace"
        elif orig_in_modified == -1:
            # the original line never comes back
            step = "remove"
        elif mod_in_original == -1:
            # the modified line is new
            step = "add"
        else:
            removed_distance = mod_in_original - i
            added_distance = orig_in_modified - j
            if removed_distance < added_distance:
                step = "remove"
            elif added_distance < removed_distance:
                step = "add"
            else:
                step = "replace"

        if step in ("remove", "replace"):
            lines.append(DiffLine(type="remove", content=orig_line))
            i += 1
        if step in ("add", "replace"):
            lines.append(DiffLine(type="add", content=mod_line, line_number=j + 1))
            j += 1

    return lines


def _plural(count: int, word: str) -> str:
    return f"- **{count}** {word}{'' if count == 1 else 's'}"


def render_diff_markdown(lines: list[DiffLine], additions: int, deletions: int, context_lines: int = 3) -> str:
    """Summary plus a fenced diff block showing changes with surrounding context"""
    if additions == 0 and deletions == 0:
        return NO_CHANGES_DIFF

    parts = [
        "## Changes Summary",
        _plural(additions, "addition"),
        _plural(deletions, "deletion"),
        "",
        "## Diff",
        "```diff",
    ]

    in_change_region = False
    last_change_idx = -context_lines - 1

    for idx, line in enumerate(lines):
        if line.type != "unchanged":
            if not in_change_region and idx - last_change_idx > context_lines * 2:
                if last_change_idx >= 0:
                    parts.append("...")
                for ctx_line in lines[max(0, idx - context_lines) : idx]:
                    if ctx_line.type == "unchanged":
                        parts.append(f"  {ctx_line.content}")

            in_change_region = True
            last_change_idx = idx
            prefix = "+" if line.type == "add" else "-"
            parts.append(f"{prefix} {line.content}")
        elif in_change_region and idx - last_change_idx <= context_lines:
            parts.append(f"  {line.content}")
        else:
            in_change_region = False

    parts.append("```")
    return "\n".join(parts)


def compute_diff(original: str, modified: str, context_lines: int = 3) -> DiffResult:
    """Positional diff of two full-file contents split on newlines"""
    lines = positional_diff(original.split("\n"), modified.split("\n"))
    additions = sum(1 for line in lines if line.type == "add")
    deletions = sum(1 for line in lines if line.type == "remove")

    return DiffResult(
        has_changes=additions > 0 or deletions > 0,
        additions=additions,
        deletions=deletions,
        lines=lines,
        markdown=render_diff_markdown(lines, additions, deletions, context_lines),
    )


def generate_preview(original: str, modified: str, max_lines: int = 20) -> str:
    """First ``max_lines`` lines of the modified text in a zsh code block"""
    if not compute_diff(original, modified).has_changes:
        return NO_CHANGES_PREVIEW

    modified_lines = modified.split("\n")
    parts = ["## Preview", "```zsh", *modified_lines[:max_lines]]
    if len(modified_lines) > max_lines:
        parts.append(f"... ({len(modified_lines) - max_lines} more lines)")
    parts.append("```")
    return "\n".join(parts)


def create_diff_preview(original: str, modified: str) -> str:
    """Diff markdown and preview separated by a blank line"""
    diff = compute_diff(original, modified)
    return f"{diff.markdown}\n\n{generate_preview(original, modified)}"


class DiffGenerator:
    """Generate diffs and previews with configured defaults"""

    def __init__(self, context_lines: int = 3, preview_max_lines: int = 20):
        self.context_lines = context_lines
        self.preview_max_lines = preview_max_lines

    def generate_diff(self, original_content: str, new_content: str) -> DiffResult:
        return compute_diff(original_content, new_content, self.context_lines)

    def generate_preview(self, original_content: str, new_content: str) -> str:
        return generate_preview(original_content, new_content, self.preview_max_lines)

    def generate_diff_preview(self, original_content: str, new_content: str) -> str:
        """Combined diff and preview markdown honoring both configured limits"""
        diff = self.generate_diff(original_content, new_content)
        return f"{diff.markdown}\n\n{self.generate_preview(original_content, new_content)}"
