"""
Reconciliation loop keeping qBittorrent's listening port on the VPN port.

Each cycle fetches the forwarded port from Gluetun, compares it with the
listen_port in qBittorrent's preferences and writes it back only when they
differ. Cycles run on a fixed interval and can also be triggered manually;
a cycle never overlaps another one. A timer cycle that finds one running is
skipped; a manual trigger waits for the running cycle and reports its result.

Cycle bodies make blocking HTTP calls and run in a thread pool so the event
loop stays free to answer status requests.
"""

import asyncio
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .config import Config, UPDATE_INTERVAL as DEFAULT_UPDATE_INTERVAL
from .exceptions import PortSyncError
from .gluetun_client import GluetunClient
from .logger import logger
from .qbittorrent_client import QBittorrentClient
from .state import SyncState


class PortSyncer:
    """
    Owns the sync state and the two service clients.

    The HTTP layer reads state through ``state.snapshot()`` and requests
    out-of-band cycles through ``trigger()``.
    """

    def __init__(
        self,
        gluetun: Optional[GluetunClient] = None,
        qbittorrent: Optional[QBittorrentClient] = None,
        state: Optional[SyncState] = None,
        interval: Optional[float] = None,
    ):
        self.gluetun = gluetun or GluetunClient()
        self.qbittorrent = qbittorrent or QBittorrentClient()
        self.state = state or SyncState()
        self.interval = interval if interval is not None else Config().UPDATE_INTERVAL_SECONDS
        if self.interval <= 0:
            logger.warning(
                f"Update interval must be positive, got {self.interval:g}s; "
                f"using {DEFAULT_UPDATE_INTERVAL / 1000:g}s"
            )
            self.interval = DEFAULT_UPDATE_INTERVAL / 1000
        self._cycle_lock = threading.Lock()
        # Two workers so a manual trigger can wait on a running timer cycle
        self._executor = ThreadPoolExecutor(max_workers=2)
        self._running = False

    @property
    def is_cycle_running(self) -> bool:
        return self._cycle_lock.locked()

    def sync_once(self, wait: bool = False) -> bool:
        """
        Run one reconciliation cycle unless another one is in progress.

        Args:
            wait: If a cycle is in progress, block until it finishes instead
                of returning immediately. No second cycle is started either way.

        Returns:
            True if a cycle ran, False if it was skipped
        """
        if not self._cycle_lock.acquire(blocking=False):
            if not wait:
                logger.warning("Update cycle already in progress, skipping")
                return False
            logger.info("Update cycle already in progress, waiting for it to finish")
            with self._cycle_lock:
                pass
            return False

        try:
            self._run_cycle()
        finally:
            self._cycle_lock.release()
        return True

    def _run_cycle(self) -> None:
        count = self.state.begin_cycle()
        logger.info(f"Checking for VPN port update (#{count})...")

        try:
            port = self.gluetun.get_forwarded_port()
            if port is None:
                logger.warning("No VPN port available, skipping update")
                return

            preferences = self.qbittorrent.get_preferences()
            current_port = preferences.get("listen_port")

            if current_port == port:
                logger.info(f"Port already set correctly in qBittorrent ({port}), skipping update")
                self.state.record_port(port)
                return

            logger.info(f"Port needs update: qBittorrent={current_port}, VPN={port}")

            if self.qbittorrent.set_port(port, preferences):
                self.state.record_port(port)
            else:
                logger.warning(f"Port update to {port} failed, will retry next cycle")

        except PortSyncError as e:
            logger.error(f"Update cycle error: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error in update cycle: {e}")

    def seconds_until_next(self, now: Optional[float] = None) -> float:
        if now is None:
            now = time.time()
        return max(0.0, self.interval - (now - self.state.snapshot().last_check))

    async def trigger(self) -> bool:
        """
        Run a cycle in the thread pool and wait for it.

        If a cycle is already running, waits for that one instead so the
        caller always sees the post-cycle state.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.sync_once, True)

    async def _sleep_until_due(self) -> None:
        # A manual trigger moves last_check forward, so re-check after waking
        while self._running:
            remaining = self.seconds_until_next()
            if remaining <= 0:
                return
            logger.debug(f"Next update in {remaining:.0f}s")
            await asyncio.sleep(remaining)

    async def run(self) -> None:
        """Main reconciliation loop."""
        self._running = True
        logger.info(f"Port sync loop started (interval: {self.interval:g}s)")

        loop = asyncio.get_running_loop()
        try:
            logged_in = await loop.run_in_executor(self._executor, self.qbittorrent.login)
            if not logged_in:
                logger.warning("Initial login failed, will retry on first update")

            while self._running:
                try:
                    await loop.run_in_executor(self._executor, self.sync_once)
                    await self._sleep_until_due()
                except asyncio.CancelledError:
                    break
                except Exception as e:
                    logger.error(f"Error in sync loop: {e}")
                    await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            pass
        finally:
            self._running = False
            logger.info("Port sync loop stopped")

    def stop(self) -> None:
        """Signal the loop to stop."""
        self._running = False

    def shutdown(self) -> None:
        """Stop the loop and release the thread pool. Triggers fail afterwards."""
        self.stop()
        self._executor.shutdown(wait=False)


# Global syncer instance
_syncer: Optional[PortSyncer] = None


def get_syncer() -> PortSyncer:
    """Get the global syncer instance, creating it if needed."""
    global _syncer
    if _syncer is None:
        _syncer = PortSyncer()
    return _syncer
