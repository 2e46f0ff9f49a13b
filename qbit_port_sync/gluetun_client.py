"""
Client for the Gluetun control server's port forwarding endpoint.

Fetches the port the VPN provider currently forwards to the container.
Every failure (network error, bad status, unexpected body) is logged and
reported as ``None`` so callers can simply skip the cycle.
"""

import base64
from typing import Dict, Optional

import requests

from .config import Config
from .logger import logger


AUTH_METHODS = ("none", "basic", "apikey")


class GluetunClient:
    def __init__(
        self,
        url: str = Config.GLUETUN_SERVER_URL,
        auth_method: str = Config.GLUETUN_AUTH_METHOD,
        username: str = Config.GLUETUN_AUTH_USERNAME,
        password: str = Config.GLUETUN_AUTH_PASSWORD,
        api_key: str = Config.GLUETUN_AUTH_API_KEY,
        timeout: float = Config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.auth_method = (auth_method or "none").lower()
        self.username = username
        self.password = password
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_auth_headers(self) -> Dict[str, str]:
        """Headers for the configured auth method, empty when misconfigured."""
        headers = {}

        if self.auth_method not in AUTH_METHODS:
            logger.warning(f'Unknown Gluetun auth method "{self.auth_method}", falling back to none')
            return headers

        if self.auth_method == "basic":
            if not self.username or not self.password:
                logger.warning("Gluetun basic auth configured without username/password")
                return headers
            token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
            headers["Authorization"] = f"Basic {token}"

        elif self.auth_method == "apikey":
            if not self.api_key:
                logger.warning("Gluetun API key auth configured without apikey")
                return headers
            headers["X-API-Key"] = self.api_key

        return headers

    def get_forwarded_port(self) -> Optional[int]:
        """Return the forwarded port, or None if it could not be determined."""
        try:
            response = self.session.get(
                self.url,
                headers=self.build_auth_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch VPN port: {e}")
            return None

        if response.status_code in (401, 403):
            logger.error(f"Gluetun authentication failed with status {response.status_code}")
            return None

        if not response.ok:
            logger.error(f"Gluetun returned status {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Gluetun returned a non-JSON body: {e}")
            return None

        port = data.get("port") if isinstance(data, dict) else None
        # bool is an int subclass; a literal true is not a port
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port <= 65535:
            logger.debug(f"No usable port in Gluetun response: {data!r}")
            return None

        return port
