"""Request dependencies shared by the routers"""

from __future__ import annotations

from fastapi import Depends, Request

from zshrc_backend.services.config_manager import ConfigManager, ZshrcSettings
from zshrc_backend.services.zshrc_file import ZshrcFile, ZshrcFileCache


def current_settings() -> ZshrcSettings:
    return ConfigManager.get_instance().get_settings()


def get_file_cache(request: Request) -> ZshrcFileCache:
    """The read cache owned by the running app, created by the lifespan handler"""
    cache = getattr(request.app.state, "file_cache", None)
    if cache is None:
        # app used without its lifespan (e.g. TestClient outside a with block)
        cache = request.app.state.file_cache = ZshrcFileCache()
    return cache


def get_zshrc_file(
    settings: ZshrcSettings = Depends(current_settings),
    cache: ZshrcFileCache = Depends(get_file_cache),
) -> ZshrcFile:
    return ZshrcFile(settings.target_path(), max_file_size=settings.max_file_size, cache=cache)
