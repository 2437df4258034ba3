"""Tests for positional diffs and markdown previews"""

from __future__ import annotations

import pytest

from zshrc_backend.services.diff_generator import (
    NO_CHANGES_DIFF,
    NO_CHANGES_PREVIEW,
    DiffGenerator,
    compute_diff,
    create_diff_preview,
    generate_preview,
    positional_diff,
)


def _ops(lines):
    return [(line.type, line.content) for line in lines]


class TestComputeDiff:
    @pytest.mark.parametrize("content", ["", "a", "line1\nline2\nline3", "x\n\nx\n"])
    def test_identical_content_has_no_changes(self, content: str) -> None:
        result = compute_diff(content, content)

        assert result.has_changes is False
        assert (result.additions, result.deletions) == (0, 0)
        assert result.markdown == NO_CHANGES_DIFF
        assert all(line.type == "unchanged" for line in result.lines)

    def test_append(self) -> None:
        result = compute_diff("line1\nline2", "line1\nline2\nline3")

        assert (result.additions, result.deletions) == (1, 0)
        added = [line for line in result.lines if line.type == "add"]
        assert added[0].content == "line3"
        assert added[0].line_number == 3

    def test_truncate(self) -> None:
        result = compute_diff("line1\nline2\nline3", "line1\nline2")

        assert (result.additions, result.deletions) == (0, 1)
        removed = [line for line in result.lines if line.type == "remove"]
        assert removed[0].content == "line3"
        assert removed[0].line_number is None

    def test_full_replacement(self) -> None:
        result = compute_diff("a\nb\nc", "x\ny\nz")

        assert (result.additions, result.deletions) == (3, 3)
        assert _ops(result.lines) == [
            ("remove", "a"),
            ("add", "x"),
            ("remove", "b"),
            ("add", "y"),
            ("remove", "c"),
            ("add", "z"),
        ]

    def test_insert_in_the_middle(self) -> None:
        result = compute_diff("a\nb\nc", "a\nx\nb\nc")

        assert _ops(result.lines) == [("unchanged", "a"), ("add", "x"), ("unchanged", "b"), ("unchanged", "c")]

    def test_remove_from_the_middle(self) -> None:
        result = compute_diff("a\nx\nb", "a\nb")

        assert _ops(result.lines) == [("unchanged", "a"), ("remove", "x"), ("unchanged", "b")]

    def test_counts_match_lines(self) -> None:
        result = compute_diff("a\nb\nc\nd", "b\nc\ne\nd\nf")

        assert result.additions == sum(1 for line in result.lines if line.type == "add")
        assert result.deletions == sum(1 for line in result.lines if line.type == "remove")
        assert result.has_changes

    def test_added_and_unchanged_lines_carry_new_line_numbers(self) -> None:
        result = compute_diff("a\nb", "z\na\nb")

        assert [(line.type, line.line_number) for line in result.lines] == [
            ("add", 1),
            ("unchanged", 2),
            ("unchanged", 3),
        ]

    def test_trailing_newline_is_a_line(self) -> None:
        result = compute_diff("a", "a\n")

        assert _ops(result.lines) == [("unchanged", "a"), ("add", "")]


class TestPositionalDiff:
    def test_swap_at_equal_distance_is_a_replacement(self) -> None:
        lines = positional_diff(["A", "B"], ["B", "A"])

        assert _ops(lines) == [("remove", "A"), ("add", "B"), ("remove", "B"), ("add", "A")]

    def test_closer_match_wins(self) -> None:
        # "b" is one line ahead in the original, "a" is two lines ahead in the modified list
        lines = positional_diff(["a", "b", "c"], ["b", "x", "a"])

        assert _ops(lines)[0] == ("remove", "a")

    def test_repeated_lines_use_first_match(self) -> None:
        lines = positional_diff(["fi", "fi"], ["fi", "echo", "fi"])

        assert _ops(lines) == [("unchanged", "fi"), ("add", "echo"), ("unchanged", "fi")]

    def test_empty_lists(self) -> None:
        assert positional_diff([], []) == []


class TestMarkdown:
    def test_summary_pluralization(self) -> None:
        markdown = compute_diff("a", "b\nc").markdown

        assert "## Changes Summary" in markdown
        assert "- **2** additions" in markdown
        assert "- **1** deletion\n" in markdown
        assert "```diff" in markdown
        assert markdown.endswith("```")

    def test_change_lines_are_prefixed(self) -> None:
        markdown = compute_diff("old", "new").markdown

        lines = markdown.splitlines()
        assert "- old" in lines
        assert "+ new" in lines

    def test_context_around_a_change(self) -> None:
        original = [f"line{n:02d}" for n in range(1, 21)]
        modified = list(original)
        modified[9] = "changed"

        lines = compute_diff("\n".join(original), "\n".join(modified)).markdown.splitlines()

        assert ["  line07", "  line08", "  line09", "- line10", "+ changed"] == lines[6:11]
        assert "  line11" in lines
        assert "  line13" in lines
        assert "  line06" not in lines
        assert "  line14" not in lines
        assert "..." not in lines

    def test_distant_changes_are_separated(self) -> None:
        original = [f"line{n:02d}" for n in range(1, 21)]
        modified = list(original)
        modified[1] = "first"
        modified[17] = "second"

        lines = compute_diff("\n".join(original), "\n".join(modified)).markdown.splitlines()

        assert lines.count("...") == 1
        assert lines.index("+ first") < lines.index("...") < lines.index("+ second")

    def test_context_size_is_configurable(self) -> None:
        original = [f"line{n:02d}" for n in range(1, 21)]
        modified = list(original)
        modified[9] = "changed"

        lines = compute_diff("\n".join(original), "\n".join(modified), context_lines=1).markdown.splitlines()

        assert "  line09" in lines
        assert "  line11" in lines
        assert "  line08" not in lines
        assert "  line12" not in lines


class TestPreview:
    def test_no_changes(self) -> None:
        assert generate_preview("same", "same") == NO_CHANGES_PREVIEW

    def test_short_content_is_shown_in_full(self) -> None:
        preview = generate_preview("", "alias ll='ls -la'\nexport A=1")

        assert preview == "## Preview\n```zsh\nalias ll='ls -la'\nexport A=1\n```"

    def test_long_content_is_truncated(self) -> None:
        modified = "\n".join(f"line{n}" for n in range(1, 51))

        preview = generate_preview("", modified, max_lines=10)

        lines = preview.splitlines()
        assert "line10" in lines
        assert "line11" not in lines
        assert "... (40 more lines)" in lines

    def test_default_limit_is_twenty_lines(self) -> None:
        modified = "\n".join(f"line{n}" for n in range(1, 26))

        assert "... (5 more lines)" in generate_preview("", modified)

    def test_create_diff_preview_joins_both_parts(self) -> None:
        combined = create_diff_preview("a", "b")

        diff_part, preview_part = combined.split("\n\n## Preview", 1)
        assert diff_part == compute_diff("a", "b").markdown
        assert preview_part.startswith("\n```zsh")

    def test_create_diff_preview_without_changes(self) -> None:
        assert create_diff_preview("a", "a") == f"{NO_CHANGES_DIFF}\n\n{NO_CHANGES_PREVIEW}"


class TestDiffGenerator:
    def test_uses_configured_limits(self) -> None:
        generator = DiffGenerator(context_lines=0, preview_max_lines=2)
        modified = "a\nb\nc\nd"

        assert "... (2 more lines)" in generator.generate_preview("", modified)
        assert generator.generate_diff("a\nb", "a\nc").markdown.splitlines()[-3:] == ["- b", "+ c", "```"]

    def test_generate_diff_preview(self) -> None:
        generator = DiffGenerator()

        combined = generator.generate_diff_preview("a", "a\nb")

        assert "- **1** addition" in combined
        assert "## Preview" in combined
