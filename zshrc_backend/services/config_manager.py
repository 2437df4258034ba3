"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "ZSHRC_MANAGER_CONFIG_DIR"

# Config file types and their filenames under $HOME
CONFIG_FILES: dict[str, str] = {
    "zshrc": ".zshrc",
    "zprofile": ".zprofile",
    "zshenv": ".zshenv",
}


class ZshrcSettings(BaseModel):
    """Validated engine settings"""

    zshrc_path: str | None = None  # custom path; overrides config_file_type
    config_file_type: Literal["zshrc", "zprofile", "zshenv"] = "zshrc"
    max_line_length: int = Field(default=1000, gt=0)
    max_file_size: int = Field(default=1024 * 1024, gt=0)
    diff_context_lines: int = Field(default=3, ge=0)
    preview_max_lines: int = Field(default=20, gt=0)
    section_format: Literal["dashed", "bracketed", "hash", "labeled", "custom"] | None = None  # None: detect from the file

    def target_path(self) -> Path:
        """Config file to manage, with ``~`` expanded"""
        if self.zshrc_path:
            return Path(self.zshrc_path).expanduser()
        return Path.home() / CONFIG_FILES[self.config_file_type]


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        # 1. environment variable, 2. ~/.zshrc_manager, 3. temp directory
        config_dir = os.environ.get(CONFIG_DIR_ENV) or os.path.expanduser("~/.zshrc_manager")

        try:
            config_path = Path(config_dir)
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            logger.warning("Cannot write to %s: %s", config_dir, e)
            tmp_dir = Path(tempfile.gettempdir()) / "zshrc_manager"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            logger.info("Using temporary config path: %s", self._config_file)

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next get_instance() re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, falling back to defaults when missing or invalid"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                data = json.load(f)
            return ZshrcSettings.model_validate(data).model_dump()
        except (json.JSONDecodeError, OSError, ValidationError) as e:
            logger.warning("Error loading config %s: %s", self._config_file, e)
            return self._default_config()

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return ZshrcSettings().model_dump()

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def get_settings(self) -> ZshrcSettings:
        return ZshrcSettings.model_validate(self.get_config())

    def save_config(self, config: dict[str, Any]):
        """Validate, merge and save configuration to file"""
        merged = {**self._config, **config}
        self._config = ZshrcSettings.model_validate(merged).model_dump()

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self.save_config({key: value})
