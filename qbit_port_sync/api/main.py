import asyncio
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from qbit_port_sync.config import Config
from qbit_port_sync.logger import logger
from qbit_port_sync.sync import get_syncer

from .routes import pages, status

app = FastAPI(
    title="qBittorrent Port Sync",
    description="Keeps qBittorrent's listening port in sync with the Gluetun forwarded port",
    version="1.0.0"
)

# Mount static files
if os.path.isdir(Config.STATIC_DIR):
    app.mount("/static", StaticFiles(directory=Config.STATIC_DIR), name="static")

# Include routers
app.include_router(status.router)
app.include_router(pages.router)

_sync_task: Optional[asyncio.Task] = None


@app.on_event("startup")
async def startup_event():
    """Log the effective configuration and start the reconciliation loop."""
    global _sync_task

    syncer = get_syncer()
    logger.info("Starting qBittorrent Port Sync...")
    logger.info(f"Gluetun: {syncer.gluetun.url}")
    logger.info(f"qBittorrent: {syncer.qbittorrent.url}")
    logger.info(f"Update interval: {syncer.interval:g}s")
    logger.info(f"Gluetun auth: {syncer.gluetun.auth_method}")

    _sync_task = asyncio.create_task(syncer.run())


@app.on_event("shutdown")
async def shutdown_event():
    """Stop the reconciliation loop."""
    global _sync_task

    syncer = get_syncer()
    syncer.stop()
    if _sync_task is not None:
        _sync_task.cancel()
        try:
            await _sync_task
        except asyncio.CancelledError:
            pass
        _sync_task = None
    syncer.shutdown()
