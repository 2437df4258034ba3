"""Tests for inserting aliases into matching or new sections"""

from __future__ import annotations

from pathlib import Path

import pytest

from zshrc_backend.errors import InvalidEntryError
from zshrc_backend.models.entry import EntryType
from zshrc_backend.models.mutation import AliasDefinition
from zshrc_backend.services.backup_manager import backup_path_for
from zshrc_backend.services.section_writer import (
    add_alias,
    add_aliases,
    find_matching_section,
    format_alias_lines,
    insert_alias,
    insert_aliases,
    normalize_section_name,
)
from zshrc_backend.services.zshrc_file import ZshrcFile
from zshrc_backend.services.zshrc_parser import parse_zshrc

GIT_SECTION = "# --- Git --- #\nalias gs='git status'\n# --- End Git --- #\n"
GL = AliasDefinition(name="gl", command="git log")
DPS = AliasDefinition(name="dps", command="docker ps")


class TestFindMatchingSection:
    def test_core_name_match(self) -> None:
        match = find_matching_section(GIT_SECTION, "Git Aliases")

        assert match is not None
        assert (match.label, match.start_line, match.end_line, match.score) == ("Git", 1, 2, 90)

    def test_exact_match_beats_prefix(self) -> None:
        content = "## Docker Compose\nalias dc=1\n## Docker\nalias d=1"

        match = find_matching_section(content, "docker")

        assert (match.label, match.score) == ("Docker", 100)

    def test_prefix_match(self) -> None:
        match = find_matching_section("## Docker Compose\nalias dc=1", "Docker")

        assert (match.label, match.score) == ("Docker Compose", 50)

    def test_equal_scores_keep_the_earlier_section(self) -> None:
        match = find_matching_section("## Git Stuff\n## Git Config\n", "Git")

        assert match.label == "Git Stuff"
        assert match.end_line == 1

    @pytest.mark.parametrize("target", ["Git", "gi", "Kubernetes"])
    def test_unrelated_names_do_not_match(self, target: str) -> None:
        assert find_matching_section("## Digital\nalias d=1", target) is None

    def test_end_markers_never_match(self) -> None:
        assert find_matching_section("alias a=1\n# --- End Git --- #", "Git") is None

    def test_last_section_runs_to_last_line(self) -> None:
        match = find_matching_section("## Git\nalias gs=1\n\n", "Git")

        assert match.end_line == 3

    def test_no_sections(self) -> None:
        assert find_matching_section("alias a=1", "Git") is None
        assert find_matching_section("", "Git") is None


def test_normalize_section_name() -> None:
    assert normalize_section_name("Git & GitHub!") == "gitgithub"


def test_format_alias_lines_with_description() -> None:
    aliases = [AliasDefinition(name="gl", command="git log", description="Short log"), DPS]

    assert format_alias_lines(aliases) == ["# Short log", "alias gl='git log'", "alias dps='docker ps'"]
    assert format_alias_lines(aliases, include_comments=False) == ["alias gl='git log'", "alias dps='docker ps'"]


class TestInsertAliases:
    def test_into_existing_section_before_its_end_marker(self) -> None:
        result = insert_aliases(GIT_SECTION, "Git Aliases", [GL])

        assert result.added_to == "existing"
        assert result.section_name == "Git"
        assert result.content == (
            "# --- Git --- #\n"
            "alias gs='git status'\n"
            "\n"
            "# Added from Git Aliases\n"
            "alias gl='git log'\n"
            "# --- End Git --- #\n"
        )
        aliases = parse_zshrc(result.content, entry_type=EntryType.ALIAS)
        assert [(e.name, e.section) for e in aliases] == [("gs", "Git"), ("gl", "Git")]

    def test_attribution_in_added_comment(self) -> None:
        result = insert_aliases("## Git\nalias gs='git status'\n", "git", [GL], attribution="Oh My Zsh")

        assert result.content == (
            "## Git\nalias gs='git status'\n\n# Added from git (Oh My Zsh)\nalias gl='git log'\n"
        )

    def test_no_extra_blank_line_after_blank(self) -> None:
        result = insert_aliases("## Git\nalias gs=1\n\n## Docker\n", "Git", [GL])

        assert result.content == "## Git\nalias gs=1\n\n# Added from Git\nalias gl='git log'\n## Docker\n"

    def test_new_section_in_default_format(self) -> None:
        result = insert_aliases("alias ll='ls'\n", "Docker", [DPS], attribution="curated")

        assert result.added_to == "new"
        assert result.section_name == "Docker (curated)"
        assert result.content == (
            "alias ll='ls'\n"
            "\n"
            "# --- Docker (curated) --- #\n"
            "\n"
            "alias dps='docker ps'\n"
            "\n"
            "# --- End Docker (curated) --- #\n"
        )

    def test_new_section_follows_file_format(self) -> None:
        result = insert_aliases("## Tools\nalias t=1\n", "Docker", [DPS])

        assert result.content == "## Tools\nalias t=1\n\n## Docker\n\nalias dps='docker ps'\n"
        aliases = parse_zshrc(result.content, entry_type=EntryType.ALIAS)
        assert [(e.name, e.section) for e in aliases] == [("t", "Tools"), ("dps", "Docker")]

    def test_explicit_format(self) -> None:
        result = insert_aliases("", "Docker", [DPS], fmt="custom")

        assert "# @start Docker" in result.content
        assert "# @end Docker" in result.content

    def test_crlf_file_stays_crlf(self) -> None:
        result = insert_aliases("## Git\r\nalias gs=1\r\n", "Git", [GL])

        assert result.content == "## Git\r\nalias gs=1\r\n\r\n# Added from Git\r\nalias gl='git log'\r\n"

    def test_invalid_alias_name(self) -> None:
        with pytest.raises(InvalidEntryError):
            insert_aliases(GIT_SECTION, "Git", [AliasDefinition(name="rm -rf", command="x")])


class TestInsertAlias:
    def test_appends_to_end_without_section(self) -> None:
        result = insert_alias("alias a='1'", AliasDefinition(name="b", command="2", description="Bee"))

        assert result.added_to == "end"
        assert result.content == "alias a='1'\n# Bee\nalias b='2'\n"

    def test_into_existing_section_without_added_comment(self) -> None:
        result = insert_alias(GIT_SECTION, GL, section_name="Git")

        assert result.added_to == "existing"
        assert "# Added from" not in result.content
        assert result.content.splitlines()[3] == "alias gl='git log'"

    def test_creates_missing_section(self) -> None:
        result = insert_alias(GIT_SECTION, DPS, section_name="Docker")

        assert result.added_to == "new"
        assert result.content.startswith(GIT_SECTION)
        assert "# --- Docker --- #" in result.content


class TestFileWrappers:
    def test_add_aliases_writes_with_backup(self, zshrc_path: Path, sample_zshrc: str) -> None:
        result = add_aliases(ZshrcFile(zshrc_path), "Aliases", [GL])

        assert result.added_to == "existing"
        assert zshrc_path.read_bytes().decode("utf-8") == result.content
        assert backup_path_for(zshrc_path).read_text(encoding="utf-8") == sample_zshrc

    def test_add_alias_creates_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".zshrc"

        add_alias(ZshrcFile(path), GL)

        assert path.read_text(encoding="utf-8") == "\nalias gl='git log'\n"
        assert not backup_path_for(path).exists()
