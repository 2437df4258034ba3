"""Services module - Business logic layer"""

from .backup_manager import BackupManager, backup_path_for
from .config_manager import ConfigManager, ZshrcSettings
from .diff_generator import DiffGenerator, compute_diff, create_diff_preview, generate_preview
from .duplicates import detect_duplicates
from .entry_editor import delete_entry, set_entry_enabled, toggle_entry
from .entry_parsers import (
    parse_aliases,
    parse_all_entries,
    parse_autoloads,
    parse_completions,
    parse_entries,
    parse_evals,
    parse_exports,
    parse_fpaths,
    parse_functions,
    parse_history,
    parse_keybindings,
    parse_paths,
    parse_plugins,
    parse_setopts,
    parse_sources,
    parse_themes,
)
from .section_segmenter import detect_section_format, section_header, to_logical_sections
from .section_writer import add_alias, add_aliases, find_matching_section
from .shell_escape import generate_safe_alias_line, generate_safe_export_line, shell_quote
from .zshrc_file import ZshrcFile, ZshrcFileCache
from .zshrc_parser import parse_zshrc

__all__ = [
    "BackupManager",
    "backup_path_for",
    "ConfigManager",
    "ZshrcSettings",
    "DiffGenerator",
    "compute_diff",
    "create_diff_preview",
    "generate_preview",
    "detect_duplicates",
    "delete_entry",
    "set_entry_enabled",
    "toggle_entry",
    "parse_aliases",
    "parse_all_entries",
    "parse_autoloads",
    "parse_completions",
    "parse_entries",
    "parse_evals",
    "parse_exports",
    "parse_fpaths",
    "parse_functions",
    "parse_history",
    "parse_keybindings",
    "parse_paths",
    "parse_plugins",
    "parse_setopts",
    "parse_sources",
    "parse_themes",
    "detect_section_format",
    "section_header",
    "to_logical_sections",
    "add_alias",
    "add_aliases",
    "find_matching_section",
    "generate_safe_alias_line",
    "generate_safe_export_line",
    "shell_quote",
    "ZshrcFile",
    "ZshrcFileCache",
    "parse_zshrc",
]
