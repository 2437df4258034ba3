"""
Entry Parsers - Line-oriented extractors for zshrc constructs

Each parser takes the full file text and returns the entries of its own kind.
Parsers are independent of each other and of section segmentation, never
raise, and skip any line longer than ``max_line_length`` before a regex sees it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from zshrc_backend.models.entry import Entry, EntryType

logger = logging.getLogger(__name__)

MAX_SAFE_LINE_LENGTH = 1000

_LINE_SPLIT = re.compile(r"\r?\n")
_NAME = r"[A-Za-z_][A-Za-z0-9_:.-]*"

ALIAS_PATTERN = re.compile(r"^\s*alias\s+(?:-[gsS]\s+)?([A-Za-z0-9_.:@+-]+)=(.*?)\s*$")
EXPORT_PATTERN = re.compile(r"^\s*(?:export|typeset\s+-x)\s+([A-Za-z_][A-Za-z0-9_]*)=(.*?)\s*$")
# The opening brace may sit on the next line
FUNCTION_PATTERN = re.compile(
    rf"^\s*(?:function\s+({_NAME})\s*(?:\(\s*\))?|({_NAME})\s*\(\s*\))\s*(?:\{{|$)"
)
SOURCE_PATTERN = re.compile(r"^\s*(?:source|\.)\s+(.+?)\s*$")
SETOPT_PATTERN = re.compile(r"^\s*setopt\s+(.+?)\s*$")
EVAL_PATTERN = re.compile(r"^\s*eval\s+(.+?)\s*$")
PLUGINS_START_PATTERN = re.compile(r"^\s*plugins\s*=\s*\((.*)$")
AUTOLOAD_PATTERN = re.compile(r"^\s*autoload\s+(.+?)\s*$")
FPATH_PATTERN = re.compile(r"^\s*fpath\s*\+?=\s*\((.*?)\)\s*$")
PATH_PATTERN = re.compile(r"^\s*PATH\s*=\s*(.+?)\s*$")
THEME_PATTERN = re.compile(r"""^\s*ZSH_THEME\s*=\s*(["']?)(.*?)\1\s*$""")
COMPLETION_PATTERN = re.compile(r"^\s*(compinit\b.*?)\s*$")
HISTORY_PATTERN = re.compile(r"^\s*(HIST[A-Z_]*)\s*=\s*(.+?)\s*$")
KEYBINDING_PATTERN = re.compile(r"^\s*bindkey\s+(.+?)\s*$")

_COMMENT_START = re.compile(r"(?:^|\s)#")

# (pattern, extractor) pairs; an extractor returns one payload per entry on the line
LineRecognizer = tuple[re.Pattern[str], Callable[[re.Match[str]], list[dict[str, str]]]]


def split_lines(content: str) -> list[str]:
    """Split on LF with an optional preceding CR"""
    return _LINE_SPLIT.split(content)


def iter_safe_lines(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> Iterator[tuple[int, str]]:
    """Yield (line_number, line) pairs, dropping lines too long to match safely"""
    for index, line in enumerate(split_lines(content)):
        if len(line) > max_line_length:
            logger.debug("Skipping line %d (%d chars exceeds %d)", index + 1, len(line), max_line_length)
            continue
        yield index + 1, line


def strip_outer_quotes(value: str) -> str:
    """Remove one matching pair of surrounding quotes, leaving inner quotes alone"""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def strip_trailing_comment(fragment: str) -> str:
    """Drop a ``#`` comment that starts the fragment or follows whitespace"""
    return _COMMENT_START.split(fragment, maxsplit=1)[0]


def _extract_alias(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"name": match.group(1), "command": strip_outer_quotes(match.group(2))}]


def _extract_export(match: re.Match[str]) -> list[dict[str, str]]:
    if not match.group(2):
        return []
    return [{"variable": match.group(1), "value": match.group(2)}]


def _extract_function(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"name": match.group(1) or match.group(2)}]


def _extract_source(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"path": match.group(1)}]


def _extract_setopt(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"option": match.group(1)}]


def _extract_eval(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"command": match.group(1)}]


def _extract_autoload(match: re.Match[str]) -> list[dict[str, str]]:
    # autoload -Uz compinit promptinit: flags are dropped, each name is an entry
    words = strip_trailing_comment(match.group(1)).split()
    return [{"name": word} for word in words if not word.startswith(("-", "+"))]


def _extract_fpath(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"path": directory} for directory in strip_trailing_comment(match.group(1)).split()]


def _extract_path(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"value": match.group(1)}]


def _extract_theme(match: re.Match[str]) -> list[dict[str, str]]:
    if not match.group(2):
        return []
    return [{"name": match.group(2)}]


def _extract_completion(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"command": match.group(1)}]


def _extract_history(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"variable": match.group(1), "value": match.group(2)}]


def _extract_keybinding(match: re.Match[str]) -> list[dict[str, str]]:
    return [{"command": match.group(1)}]


RECOGNIZERS: dict[EntryType, list[LineRecognizer]] = {
    EntryType.ALIAS: [(ALIAS_PATTERN, _extract_alias)],
    EntryType.EXPORT: [(EXPORT_PATTERN, _extract_export)],
    EntryType.FUNCTION: [(FUNCTION_PATTERN, _extract_function)],
    EntryType.SOURCE: [(SOURCE_PATTERN, _extract_source)],
    EntryType.SETOPT: [(SETOPT_PATTERN, _extract_setopt)],
    EntryType.EVAL: [(EVAL_PATTERN, _extract_eval)],
    EntryType.AUTOLOAD: [(AUTOLOAD_PATTERN, _extract_autoload)],
    EntryType.FPATH: [(FPATH_PATTERN, _extract_fpath)],
    EntryType.PATH: [(PATH_PATTERN, _extract_path)],
    EntryType.THEME: [(THEME_PATTERN, _extract_theme)],
    EntryType.COMPLETION: [(COMPLETION_PATTERN, _extract_completion)],
    EntryType.HISTORY: [(HISTORY_PATTERN, _extract_history)],
    EntryType.KEYBINDING: [(KEYBINDING_PATTERN, _extract_keybinding)],
}


def _parse_single_line_kind(
    content: str,
    entry_type: EntryType,
    max_line_length: int,
) -> list[Entry]:
    """Run the recognizers of one kind over every safe line, first match wins"""
    entries: list[Entry] = []
    for line_number, line in iter_safe_lines(content, max_line_length):
        for pattern, extract in RECOGNIZERS[entry_type]:
            match = pattern.match(line)
            if not match:
                continue
            payloads = extract(match)
            if not payloads:
                continue
            for fields in payloads:
                entries.append(Entry(type=entry_type, line_number=line_number, original_line=line, **fields))
            break
    return entries


def parse_aliases(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse ``alias NAME=VALUE`` lines; one pair of outer quotes is stripped from the command"""
    return _parse_single_line_kind(content, EntryType.ALIAS, max_line_length)


def parse_exports(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse ``export VAR=VALUE`` and ``typeset -x VAR=VALUE``; the value keeps its quoting"""
    return _parse_single_line_kind(content, EntryType.EXPORT, max_line_length)


def parse_functions(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse function declaration lines; bodies are not captured"""
    return _parse_single_line_kind(content, EntryType.FUNCTION, max_line_length)


def parse_sources(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse ``source PATH`` and ``. PATH``; the path is kept verbatim"""
    return _parse_single_line_kind(content, EntryType.SOURCE, max_line_length)


def parse_setopts(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    return _parse_single_line_kind(content, EntryType.SETOPT, max_line_length)


def parse_evals(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    return _parse_single_line_kind(content, EntryType.EVAL, max_line_length)


def parse_autoloads(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse ``autoload [-flags] NAME...``; one entry per loaded name"""
    return _parse_single_line_kind(content, EntryType.AUTOLOAD, max_line_length)


def parse_fpaths(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse single-line ``fpath=( ... )`` and ``fpath+=( ... )``; one entry per directory"""
    return _parse_single_line_kind(content, EntryType.FPATH, max_line_length)


def parse_paths(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    return _parse_single_line_kind(content, EntryType.PATH, max_line_length)


def parse_themes(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse ``ZSH_THEME="name"``; an empty theme is not an entry"""
    return _parse_single_line_kind(content, EntryType.THEME, max_line_length)


def parse_completions(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    return _parse_single_line_kind(content, EntryType.COMPLETION, max_line_length)


def parse_history(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Parse ``HISTSIZE=``, ``HISTFILE=`` and other ``HIST*`` assignments"""
    return _parse_single_line_kind(content, EntryType.HISTORY, max_line_length)


def parse_keybindings(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    return _parse_single_line_kind(content, EntryType.KEYBINDING, max_line_length)


def _plugin_tokens(fragment: str) -> tuple[list[str], bool]:
    """Tokens of one line inside a plugins block, and whether the block closed on it"""
    # a ")" inside a comment does not close the block
    fragment = strip_trailing_comment(fragment)
    closed = ")" in fragment
    if closed:
        fragment = fragment.split(")", 1)[0]
    return fragment.split(), closed


def parse_plugins(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """
    Parse the OhMyZsh ``plugins=( ... )`` list.

    The declaration may span several lines; every whitespace-separated token up
    to the closing parenthesis becomes one entry, numbered by the line it sits on.
    An unterminated block runs to the end of the file.
    """
    entries: list[Entry] = []
    in_block = False

    for line_number, line in iter_safe_lines(content, max_line_length):
        if in_block:
            fragment = line
        else:
            match = PLUGINS_START_PATTERN.match(line)
            if not match:
                continue
            fragment = match.group(1)
            in_block = True

        tokens, closed = _plugin_tokens(fragment)
        for token in tokens:
            entries.append(
                Entry(type=EntryType.PLUGIN, line_number=line_number, original_line=line, name=token)
            )
        if closed:
            in_block = False

    return entries


PARSERS: dict[EntryType, Callable[..., list[Entry]]] = {
    EntryType.ALIAS: parse_aliases,
    EntryType.EXPORT: parse_exports,
    EntryType.FUNCTION: parse_functions,
    EntryType.SOURCE: parse_sources,
    EntryType.PLUGIN: parse_plugins,
    EntryType.SETOPT: parse_setopts,
    EntryType.EVAL: parse_evals,
    EntryType.AUTOLOAD: parse_autoloads,
    EntryType.FPATH: parse_fpaths,
    EntryType.PATH: parse_paths,
    EntryType.THEME: parse_themes,
    EntryType.COMPLETION: parse_completions,
    EntryType.HISTORY: parse_history,
    EntryType.KEYBINDING: parse_keybindings,
}


def parse_entries(
    content: str,
    entry_type: EntryType,
    max_line_length: int = MAX_SAFE_LINE_LENGTH,
) -> list[Entry]:
    """Dispatch to the parser for one entry kind"""
    return PARSERS[entry_type](content, max_line_length)


def parse_all_entries(content: str, max_line_length: int = MAX_SAFE_LINE_LENGTH) -> list[Entry]:
    """Run every parser; entries ordered by line, ties in parser order"""
    entries: list[Entry] = []
    for parser in PARSERS.values():
        entries.extend(parser(content, max_line_length))
    # sorted() is stable, so same-line entries keep PARSERS order
    return sorted(entries, key=lambda entry: entry.line_number)
