"""Test fixtures — fixed machine config and FastAPI test client."""

import socket

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from wolweb.config import AppConfig, MachineConfig, Settings
from wolweb.main import create_app


@pytest.fixture
def app_config():
    return AppConfig(
        address="127.0.0.1:8080",
        broadcast="192.168.1.255",
        machines=(
            MachineConfig(name="desktop", mac="AA:BB:CC:DD:EE:FF", ports=(7, 9)),
            MachineConfig(name="nas", mac="01-23-45-67-89-ab", ports=(9,)),
        ),
    )


@pytest.fixture
def app(app_config):
    return create_app(app_config, Settings(_env_file=None))


@pytest_asyncio.fixture
async def client(app):
    """Provide an async test client bound to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def receiver():
    """UDP socket bound to an ephemeral loopback port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()
