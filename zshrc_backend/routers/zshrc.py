"""Config file parsing, preview, write and entry editing endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from zshrc_backend.errors import ZshrcError
from zshrc_backend.models.api import (
    AddAliasesRequest,
    ContentRequest,
    FormatResponse,
    MutationResponse,
    PreviewResponse,
    WriteResponse,
)
from zshrc_backend.models.entry import DuplicateReport, Entry, EntryType, Section
from zshrc_backend.routers.deps import current_settings, get_zshrc_file
from zshrc_backend.routers.errors import to_http_exception
from zshrc_backend.services.config_manager import ZshrcSettings
from zshrc_backend.services.diff_generator import DiffGenerator
from zshrc_backend.services.duplicates import detect_duplicates
from zshrc_backend.services.entry_editor import delete_entry, set_entry_enabled, toggle_entry
from zshrc_backend.services.section_segmenter import detect_section_format, section_header, to_logical_sections
from zshrc_backend.services.section_writer import add_alias, add_aliases
from zshrc_backend.services.zshrc_file import ZshrcFile
from zshrc_backend.services.zshrc_parser import parse_zshrc

router = APIRouter()


def _read(zshrc_file: ZshrcFile) -> str:
    try:
        return zshrc_file.read()
    except ZshrcError as e:
        raise to_http_exception(e) from e


def _mutation_response(
    zshrc_file: ZshrcFile,
    settings: ZshrcSettings,
    before: str,
    after: str,
    message: str,
    **details,
) -> MutationResponse:
    diff_generator = DiffGenerator(settings.diff_context_lines, settings.preview_max_lines)
    return MutationResponse(
        path=str(zshrc_file.path),
        message=message,
        diff=diff_generator.generate_diff(before, after),
        backup=zshrc_file.backups.get_backup_info(),
        **details,
    )


@router.get("/entries", response_model=list[Entry])
async def get_entries(
    type: EntryType | None = Query(default=None),
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> list[Entry]:
    """Parsed entries of the config file, optionally of one kind"""
    return parse_zshrc(_read(zshrc_file), entry_type=type, max_line_length=settings.max_line_length)


@router.get("/sections", response_model=list[Section])
async def get_sections(
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> list[Section]:
    """Logical sections of the config file"""
    return to_logical_sections(_read(zshrc_file), max_line_length=settings.max_line_length)


@router.get("/duplicates", response_model=DuplicateReport)
async def get_duplicates(
    type: EntryType = Query(default=EntryType.ALIAS),
    key: str = Query(default="name"),
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> DuplicateReport:
    """Entries of one kind that share a key value"""
    entries = parse_zshrc(_read(zshrc_file), entry_type=type, max_line_length=settings.max_line_length)
    return detect_duplicates(entries, key)


@router.get("/format", response_model=FormatResponse)
async def get_section_format(
    name: str = Query(default="New Section"),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> FormatResponse:
    """Heading style used by the file, with sample markers for a new section"""
    fmt = detect_section_format(_read(zshrc_file))
    start, end = section_header(name, fmt)
    return FormatResponse(format=fmt, header_start=start, header_end=end)


@router.post("/preview", response_model=PreviewResponse)
async def preview_changes(
    request: ContentRequest,
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> PreviewResponse:
    """Diff a proposed content against the current file without writing"""
    try:
        current = zshrc_file.read_or_empty()
    except ZshrcError as e:
        raise to_http_exception(e) from e

    diff_generator = DiffGenerator(settings.diff_context_lines, settings.preview_max_lines)
    return PreviewResponse(
        path=str(zshrc_file.path),
        diff=diff_generator.generate_diff(current, request.content),
        preview=diff_generator.generate_diff_preview(current, request.content),
    )


@router.put("/content", response_model=WriteResponse)
async def write_content(
    request: ContentRequest,
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> WriteResponse:
    """Back up the current file, then replace it with the given content"""
    diff_generator = DiffGenerator(settings.diff_context_lines, settings.preview_max_lines)

    try:
        current = zshrc_file.read_or_empty()
        diff = diff_generator.generate_diff(current, request.content)
        zshrc_file.write(request.content)
    except ZshrcError as e:
        raise to_http_exception(e) from e

    return WriteResponse(
        path=str(zshrc_file.path),
        diff=diff,
        backup=zshrc_file.backups.get_backup_info(),
    )


@router.post("/aliases", response_model=MutationResponse)
async def add_aliases_to_section(
    request: AddAliasesRequest,
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> MutationResponse:
    """Add aliases under a matching section, creating the section when none matches"""
    if request.section_name is None and len(request.aliases) != 1:
        raise HTTPException(status_code=400, detail="section_name is required when adding several aliases")

    try:
        before = zshrc_file.read_or_empty()
        if request.section_name is None:
            result = add_alias(zshrc_file, request.aliases[0], fmt=settings.section_format)
        else:
            result = add_aliases(
                zshrc_file,
                request.section_name,
                request.aliases,
                attribution=request.attribution,
                fmt=settings.section_format,
            )
    except ZshrcError as e:
        raise to_http_exception(e) from e

    return _mutation_response(
        zshrc_file, settings, before, result.content, result.message, section_name=result.section_name
    )


@router.post("/entries/{type}/toggle", response_model=MutationResponse)
async def toggle_entry_state(
    type: EntryType,
    key: str = Query(...),
    enabled: bool | None = Query(default=None),
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> MutationResponse:
    """Comment an entry out or back in; ``enabled`` forces a state instead of flipping it"""
    try:
        before = zshrc_file.read()
        if enabled is None:
            result = toggle_entry(zshrc_file, type, key, settings.max_line_length)
        else:
            result = set_entry_enabled(zshrc_file, type, key, enabled, settings.max_line_length)
    except ZshrcError as e:
        raise to_http_exception(e) from e

    return _mutation_response(
        zshrc_file,
        settings,
        before,
        result.content,
        result.message,
        changed=result.changed,
        line_number=result.line_number,
        enabled=result.enabled,
    )


@router.delete("/entries/{type}", response_model=MutationResponse)
async def remove_entry(
    type: EntryType,
    key: str = Query(...),
    settings: ZshrcSettings = Depends(current_settings),
    zshrc_file: ZshrcFile = Depends(get_zshrc_file),
) -> MutationResponse:
    """Remove the first line declaring an entry, commented out or not"""
    try:
        before = zshrc_file.read()
        result = delete_entry(zshrc_file, type, key, settings.max_line_length)
    except ZshrcError as e:
        raise to_http_exception(e) from e

    return _mutation_response(
        zshrc_file, settings, before, result.content, result.message, line_number=result.line_number
    )
