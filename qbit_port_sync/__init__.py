"""
qBittorrent Port Sync - keep qBittorrent listening on the VPN forwarded port.

Polls the Gluetun control server for the forwarded port and updates
qBittorrent's listen_port through its WebUI API whenever the two diverge.
"""

from .config import Config
from .sync import PortSyncer

__version__ = "1.0.0"
__all__ = ["PortSyncer", "Config"]
