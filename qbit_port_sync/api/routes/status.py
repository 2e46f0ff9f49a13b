from fastapi import APIRouter, Depends
from qbit_port_sync.logger import logger
from qbit_port_sync.state import isoformat
from qbit_port_sync.sync import PortSyncer, get_syncer

from ..schemas import ForceUpdateResponse, StatusResponse

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(syncer: PortSyncer = Depends(get_syncer)):
    """Report the last synced port and time until the next cycle."""
    snapshot = syncer.state.snapshot()
    return StatusResponse(
        current_port=snapshot.current_port,
        next_update_in=snapshot.next_update_in(syncer.interval),
        last_check=isoformat(snapshot.last_check),
    )

@router.api_route("/force-update", methods=["GET", "POST"], response_model=ForceUpdateResponse)
async def force_update(syncer: PortSyncer = Depends(get_syncer)):
    """
    Run a reconciliation cycle now and return the resulting port.

    If a cycle is already in progress no second one is started; the request
    waits for that cycle and reports the port it left behind.
    """
    logger.info("Force update requested via API")
    ran = await syncer.trigger()

    return ForceUpdateResponse(
        success=True,
        message="Update cycle triggered" if ran else "Update cycle already in progress",
        port=syncer.state.snapshot().current_port,
    )
