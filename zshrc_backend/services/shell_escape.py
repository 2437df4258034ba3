"""
Shell Escape - Quoting helpers for lines written into a zsh config file

Values are only ever placed inside quotes built here, so a command or value
cannot break out of its alias or export line.
"""

from __future__ import annotations

import re

VALID_ALIAS_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
VALID_VAR_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Characters that stay special inside double quotes
_DOUBLE_QUOTE_SPECIALS = re.compile(r'([\\"$`!])')


def validate_alias_name(name: str) -> bool:
    return bool(VALID_ALIAS_NAME.match(name))


def validate_var_name(name: str) -> bool:
    return bool(VALID_VAR_NAME.match(name))


def shell_quote_single(value: str) -> str:
    """Escape for use between single quotes: ``'`` becomes ``'"'"'``"""
    return value.replace("'", "'\"'\"'")


def shell_quote_double(value: str) -> str:
    """Escape for use between double quotes"""
    return _DOUBLE_QUOTE_SPECIALS.sub(r"\\\1", value)


def shell_quote(value: str) -> str:
    return f"'{shell_quote_single(value)}'"


def generate_safe_alias_line(name: str, command: str) -> str | None:
    """``alias name='command'``, or None when the name is not a valid alias name"""
    if not validate_alias_name(name):
        return None
    return f"alias {name}={shell_quote(command)}"


def generate_safe_export_line(variable: str, value: str) -> str | None:
    """``export VAR="value"``, or None when the variable name is invalid"""
    if not validate_var_name(variable):
        return None
    return f'export {variable}="{shell_quote_double(value)}"'
