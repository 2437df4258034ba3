"""Translation of engine errors into HTTP responses"""

from __future__ import annotations

from fastapi import HTTPException

from zshrc_backend.errors import (
    EntryNotFoundError,
    InvalidEntryError,
    NoBackupError,
    ZshrcError,
    ZshrcNotFoundError,
    ZshrcPermissionError,
    ZshrcTooLargeError,
)

_STATUS_BY_ERROR: tuple[tuple[type[ZshrcError], int], ...] = (
    (NoBackupError, 404),
    (EntryNotFoundError, 404),
    (InvalidEntryError, 400),
    (ZshrcNotFoundError, 404),
    (ZshrcPermissionError, 403),
    (ZshrcTooLargeError, 413),
)


def to_http_exception(error: ZshrcError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
