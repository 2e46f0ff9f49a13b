from unittest.mock import MagicMock

import pytest
from qbit_port_sync.gluetun_client import GluetunClient
from qbit_port_sync.logger import logger
from qbit_port_sync.qbittorrent_client import QBittorrentClient


def make_response(status_code=200, json_data=None, text=""):
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def http_session():
    return MagicMock()


@pytest.fixture
def gluetun_client(http_session):
    return GluetunClient(url="http://gluetun:8000/v1/portforward", session=http_session)


@pytest.fixture
def qbittorrent_client(http_session):
    return QBittorrentClient(
        url="http://qbittorrent:8080/",
        username="admin",
        password="secret",
        session=http_session,
    )


@pytest.fixture
def log_records():
    """Collect (level, message) pairs logged during a test."""
    records = []
    handler_id = logger.add(
        lambda message: records.append((message.record["level"].name, message.record["message"])),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)
