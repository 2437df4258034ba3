"""
Zshrc Manager Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zshrc_backend import __version__
from zshrc_backend.routers import backup, config, zshrc
from zshrc_backend.services.config_manager import ConfigManager
from zshrc_backend.services.zshrc_file import ZshrcFileCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logger.info("Starting Zshrc Manager Backend...")
    config_manager = ConfigManager.get_instance()
    settings = config_manager.get_settings()
    logger.info("ConfigManager initialized from %s, managing %s", config_manager.config_file, settings.target_path())
    app.state.file_cache = ZshrcFileCache()

    yield
    app.state.file_cache.clear()
    logger.info("Shutting down Zshrc Manager Backend...")


app = FastAPI(
    title="Zshrc Manager Backend",
    description="Parsing, diffing and backup engine for zsh configuration files",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for the local launcher UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(zshrc.router, prefix="/api/zshrc", tags=["zshrc"])
app.include_router(backup.router, prefix="/api/backup", tags=["backup"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "zshrc-manager-backend"}


def run() -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    uvicorn.run(app, host="127.0.0.1", port=8000)


if __name__ == "__main__":
    run()
