import os
import dotenv


dotenv.load_dotenv()


PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

# Defaults
LOG_PATH = ""
LOG_LEVEL = "INFO"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

# Gluetun control server
GLUETUN_SERVER_URL = "http://localhost:8000/v1/portforward"
GLUETUN_AUTH_METHOD = "none"
GLUETUN_AUTH_USERNAME = ""
GLUETUN_AUTH_PASSWORD = ""
GLUETUN_AUTH_API_KEY = ""

# qBittorrent WebUI
QBITTORRENT_URL = "http://localhost:8080"
QBITTORRENT_USER = ""
QBITTORRENT_PASS = ""

UPDATE_INTERVAL = 300_000              # Milliseconds between reconciliation cycles
REQUEST_TIMEOUT = 5                    # Seconds per outbound request

HOST = "0.0.0.0"
SERVER_PORT = 5000
STATIC_DIR = os.path.join(PACKAGE_DIR, "static")


class Config:
    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL).upper()
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # Gluetun Configuration
    GLUETUN_SERVER_URL = os.getenv("GLUETUN_SERVER_URL", GLUETUN_SERVER_URL)
    GLUETUN_AUTH_METHOD = os.getenv("GLUETUN_AUTH_METHOD", GLUETUN_AUTH_METHOD).lower()
    GLUETUN_AUTH_USERNAME = os.getenv("GLUETUN_AUTH_USERNAME", GLUETUN_AUTH_USERNAME)
    GLUETUN_AUTH_PASSWORD = os.getenv("GLUETUN_AUTH_PASSWORD", GLUETUN_AUTH_PASSWORD)
    GLUETUN_AUTH_API_KEY = os.getenv("GLUETUN_AUTH_API_KEY", GLUETUN_AUTH_API_KEY)

    # qBittorrent Configuration
    QBITTORRENT_URL = os.getenv("QBITTORRENT_URL", QBITTORRENT_URL).rstrip('/')
    QBITTORRENT_USER = os.getenv("QBITTORRENT_USER", QBITTORRENT_USER)
    QBITTORRENT_PASS = os.getenv("QBITTORRENT_PASS", QBITTORRENT_PASS)

    UPDATE_INTERVAL = int(os.getenv("UPDATE_INTERVAL", UPDATE_INTERVAL))
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", REQUEST_TIMEOUT))

    # Server Configuration
    HOST = os.getenv("HOST", HOST)
    SERVER_PORT = int(os.getenv("SERVER_PORT", SERVER_PORT))
    STATIC_DIR = os.getenv("STATIC_DIR", STATIC_DIR)

    @property
    def UPDATE_INTERVAL_SECONDS(self):
        """Reconciliation interval converted to seconds."""
        return self.UPDATE_INTERVAL / 1000
