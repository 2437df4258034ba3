"""Routers module - FastAPI route handlers"""

from . import backup, config, zshrc

__all__ = ["backup", "config", "zshrc"]
