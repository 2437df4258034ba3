"""
Shared fixtures for the zshrc backend tests.

- Sample config file text with known line numbers
- Temporary target files
- A ConfigManager isolated in a temp directory
- A FastAPI TestClient bound to that configuration
"""

from __future__ import annotations

from pathlib import Path

import pytest

from zshrc_backend.services.config_manager import CONFIG_DIR_ENV, ConfigManager

# Line numbers are referenced by the tests; keep them stable.
SAMPLE_LINES = [
    "# --- Oh My Zsh --- #",  # 1
    'export ZSH="$HOME/.oh-my-zsh"',  # 2
    "plugins=(",  # 3
    "  git",  # 4
    "  docker",  # 5
    ")",  # 6
    "source $ZSH/oh-my-zsh.sh",  # 7
    "# --- End Oh My Zsh --- #",  # 8
    "",  # 9
    "# Section: Aliases",  # 10
    "alias ll='ls -la'",  # 11
    'alias gs="git status"',  # 12
    "alias dc=docker-compose",  # 13
    "",  # 14
    "## Options",  # 15
    "setopt SHARE_HISTORY",  # 16
    'eval "$(starship init zsh)"',  # 17
    "",  # 18
    "# [ Functions ]",  # 19
    "mkcd() {",  # 20
    '  mkdir -p "$1" && cd "$1"',  # 21
    "}",  # 22
    ". ~/.p10k.zsh",  # 23
]

SAMPLE_ZSHRC = "\n".join(SAMPLE_LINES)


# =============================================================================
# CONTENT FIXTURES
# =============================================================================


@pytest.fixture
def sample_zshrc() -> str:
    return SAMPLE_ZSHRC


@pytest.fixture
def zshrc_path(tmp_path: Path, sample_zshrc: str) -> Path:
    """A target file holding the sample content"""
    path = tmp_path / ".zshrc"
    path.write_text(sample_zshrc, encoding="utf-8")
    return path


# =============================================================================
# CONFIG / APP FIXTURES
# =============================================================================


@pytest.fixture
def config_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """A ConfigManager singleton whose config lives under tmp_path"""
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path / "config"))
    ConfigManager.reset_instance()
    manager = ConfigManager.get_instance()
    yield manager
    ConfigManager.reset_instance()


@pytest.fixture
def client(config_manager: ConfigManager, zshrc_path: Path):
    """TestClient for the app, managing the sample zshrc"""
    from fastapi.testclient import TestClient

    from zshrc_backend.main import app

    config_manager.save_config({"zshrc_path": str(zshrc_path)})
    with TestClient(app) as test_client:
        yield test_client
