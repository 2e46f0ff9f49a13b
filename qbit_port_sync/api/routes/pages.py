import os
import time

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from qbit_port_sync.config import Config
from qbit_port_sync.sync import PortSyncer, get_syncer

from ..schemas import HealthResponse

router = APIRouter(tags=["pages"])

@router.get("/")
async def root():
    """Serve the status page."""
    return FileResponse(os.path.join(Config.STATIC_DIR, "index.html"), media_type="text/html")

@router.get("/health", response_model=HealthResponse)
async def health(syncer: PortSyncer = Depends(get_syncer)):
    """Health check endpoint."""
    snapshot = syncer.state.snapshot()
    return HealthResponse(
        status="ok",
        uptime=round(time.time() - snapshot.started_at, 3),
        port_found=snapshot.current_port is not None,
        logged_in=syncer.qbittorrent.is_logged_in,
        update_count=snapshot.update_count,
    )
