"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ValidationError

from zshrc_backend.services.config_manager import ConfigManager, ZshrcSettings

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    zshrc_path: str | None = None
    config_file_type: Literal["zshrc", "zprofile", "zshenv"] | None = None
    max_line_length: int | None = None
    max_file_size: int | None = None
    diff_context_lines: int | None = None
    preview_max_lines: int | None = None
    section_format: Literal["dashed", "bracketed", "hash", "labeled", "custom"] | None = None


class ConfigResponse(ZshrcSettings):
    """Configuration response"""

    resolved_path: str


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    settings = ConfigManager.get_instance().get_settings()
    return ConfigResponse(**settings.model_dump(), resolved_path=str(settings.target_path()))


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    current_config.update(request.model_dump(exclude_unset=True))

    try:
        config_manager.save_config(current_config)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid configuration: {e}")
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration updated"}
