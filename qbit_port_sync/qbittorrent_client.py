"""
qBittorrent WebUI API client.

Provides the QBittorrentClient class which keeps an authenticated cookie
session with the WebUI and reads or rewrites the listening port in the
application preferences.

The WebUI answers 403 once the SID cookie has expired. Fetching preferences
re-authenticates once and retries; any further failure is raised to the caller.
"""

import json
from typing import Any, Dict, Optional

import requests

from .config import Config
from .exceptions import QBittorrentAuthError, QBittorrentError
from .logger import logger


QBITTORRENT_URL = Config.QBITTORRENT_URL
QBITTORRENT_USER = Config.QBITTORRENT_USER
QBITTORRENT_PASS = Config.QBITTORRENT_PASS

LOGIN_OK = "Ok."


class QBittorrentClient:
    def __init__(
        self,
        url: str = QBITTORRENT_URL,
        username: str = QBITTORRENT_USER,
        password: str = QBITTORRENT_PASS,
        timeout: float = Config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url.rstrip('/')
        self.username = username
        self.password = password
        self.timeout = timeout
        # The session's cookie jar holds the SID set by a successful login
        self.session = session or requests.Session()
        self.is_logged_in = False

    def _endpoint(self, path: str) -> str:
        return f"{self.url}/api/v2/{path.lstrip('/')}"

    def login(self) -> bool:
        """Authenticate with the WebUI and store the session cookie."""
        try:
            response = self.session.post(
                self._endpoint("auth/login"),
                data={
                    "username": self.username,
                    "password": self.password,
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"qBittorrent login error: {e}")
            self.is_logged_in = False
            return False

        text = response.text.strip()
        self.is_logged_in = text == LOGIN_OK
        if self.is_logged_in:
            logger.info("Logged into qBittorrent successfully")
        else:
            logger.error(f"qBittorrent login failed: {response.status_code} - {text}")
        return self.is_logged_in

    def _fetch_preferences(self) -> requests.Response:
        try:
            return self.session.get(self._endpoint("app/preferences"), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise QBittorrentError(f"Failed to reach qBittorrent: {e}") from e

    def get_preferences(self) -> Dict[str, Any]:
        """
        Fetch the application preferences document.

        On a 403 the session is assumed expired: login is retried once and the
        request repeated once. No further attempts are made.

        Raises:
            QBittorrentAuthError: If re-authentication fails
            QBittorrentError: If the request fails or the body is not a JSON object
        """
        response = self._fetch_preferences()

        if response.status_code == 403:
            logger.info("Session expired, attempting to re-login...")
            self.is_logged_in = False
            if not self.login():
                raise QBittorrentAuthError("Failed to re-authenticate", status_code=403)

            response = self._fetch_preferences()
            if not response.ok:
                raise QBittorrentError(
                    f"Failed to get preferences after login: {response.status_code}",
                    status_code=response.status_code,
                )

        elif not response.ok:
            raise QBittorrentError(
                f"Failed to get preferences: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            preferences = response.json()
        except ValueError as e:
            raise QBittorrentError(f"Preferences response is not JSON: {e}") from e

        if not isinstance(preferences, dict):
            raise QBittorrentError("Preferences response is not a JSON object")

        return preferences

    def set_port(self, port: int, preferences: Dict[str, Any]) -> bool:
        """
        Set the listening port, resubmitting the rest of the preferences unchanged.

        Args:
            port: The port qBittorrent should listen on
            preferences: The preferences document last returned by get_preferences

        Returns:
            True if the port is set, False if the update was rejected or failed
        """
        if preferences.get("listen_port") == port:
            logger.info(f"Port already set to {port}, no update needed")
            return True

        preferences["listen_port"] = port

        try:
            response = self.session.post(
                self._endpoint("app/setPreferences"),
                data={"json": json.dumps(preferences)},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Error updating qBittorrent port: {e}")
            return False

        if not response.ok:
            logger.error(f"Failed to update port, status: {response.status_code}")
            return False

        logger.info(f"Updated qBittorrent to use port {port}")
        return True
