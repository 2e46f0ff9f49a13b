"""Errors raised while talking to qBittorrent."""


class PortSyncError(Exception):
    """Base class for errors that abort a reconciliation cycle."""


class QBittorrentError(PortSyncError):
    """A qBittorrent WebUI call failed or returned an unusable response."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class QBittorrentAuthError(QBittorrentError):
    """Re-authentication against qBittorrent failed."""
