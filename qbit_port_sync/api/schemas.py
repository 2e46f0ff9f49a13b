from typing import Optional
from pydantic import BaseModel


class StatusResponse(BaseModel):
    current_port: Optional[int] = None  # None until a port has been confirmed
    next_update_in: int  # Seconds until the next scheduled cycle
    last_check: str  # ISO8601 timestamp of the last cycle attempt


class ForceUpdateResponse(BaseModel):
    success: bool
    message: str
    port: Optional[int] = None


class HealthResponse(BaseModel):
    status: str
    uptime: float
    port_found: bool
    logged_in: bool
    update_count: int
