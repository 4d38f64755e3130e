"""Tests for the HTML wake-up form."""

import logging
from unittest.mock import patch

import pytest
from httpx import AsyncClient

from wolweb.utils.wol import DialFailed, build_magic_packet


@pytest.mark.asyncio
async def test_form_lists_machines(client: AsyncClient):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "desktop" in resp.text
    assert "nas" in resp.text
    assert "Magic packet sent" not in resp.text


@pytest.mark.asyncio
async def test_form_wakes_machine_on_every_port(client: AsyncClient):
    with patch("wolweb.utils.wol.send_magic_packet") as mock_send:
        resp = await client.post("/", data={"machine": "0"})

    assert resp.status_code == 200
    assert "Magic packet sent to <strong>desktop</strong>" in resp.text
    assert [c.args for c in mock_send.call_args_list] == [
        ("192.168.1.255", 7, "AA:BB:CC:DD:EE:FF"),
        ("192.168.1.255", 9, "AA:BB:CC:DD:EE:FF"),
    ]


@pytest.mark.asyncio
async def test_form_send_failure_returns_500(client: AsyncClient):
    error = DialFailed("AA:BB:CC:DD:EE:FF", "192.168.1.255", 7, "Network is unreachable")
    with patch("wolweb.utils.wol.send_magic_packet", side_effect=error) as mock_send:
        resp = await client.post("/", data={"machine": "0"})

    assert resp.status_code == 500
    assert "Network is unreachable" in resp.json()["detail"]
    mock_send.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("machine", ["abc", "-1", "2", "99", "", " 1 ", "\u0661", "1_0", "0x1"])
async def test_form_rejects_bad_machine_id(client: AsyncClient, machine):
    with patch("wolweb.utils.wol.send_magic_packet") as mock_send:
        resp = await client.post("/", data={"machine": machine})

    assert resp.status_code == 400
    mock_send.assert_not_called()


@pytest.mark.asyncio
async def test_form_without_machine_field_is_400(client: AsyncClient):
    with patch("wolweb.utils.wol.send_magic_packet") as mock_send:
        resp = await client.post("/", data={})

    assert resp.status_code == 400
    mock_send.assert_not_called()


@pytest.mark.asyncio
async def test_form_delivers_real_packet(client: AsyncClient, app, app_config, receiver):
    """End-to-end through the form to a loopback UDP socket."""
    port = receiver.getsockname()[1]
    loopback = app_config.model_copy(update={"broadcast": "127.0.0.1"})
    loopback = loopback.model_copy(
        update={"machines": (loopback.machines[1].model_copy(update={"ports": (port,)}),)}
    )
    app.state.config = loopback

    resp = await client.post("/", data={"machine": "0"})

    assert resp.status_code == 200
    data, _ = receiver.recvfrom(1024)
    assert data == build_magic_packet("01-23-45-67-89-ab")


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    resp = await client.get("/")
    assert len(resp.headers["X-Request-ID"]) == 12


@pytest.mark.asyncio
async def test_send_failure_log_carries_request_id(client: AsyncClient, caplog):
    error = DialFailed("AA:BB:CC:DD:EE:FF", "192.168.1.255", 7, "Network is unreachable")
    with (
        caplog.at_level(logging.ERROR, logger="wolweb"),
        patch("wolweb.utils.wol.send_magic_packet", side_effect=error),
    ):
        resp = await client.post("/", data={"machine": "0"})

    assert resp.status_code == 500
    request_id = resp.headers["X-Request-ID"]
    failures = [r for r in caplog.records if "Failed to send magic packet" in r.getMessage()]
    assert len(failures) == 1
    assert request_id in failures[0].getMessage()
    assert failures[0].request_id == request_id
    assert failures[0].path == "/"


@pytest.mark.asyncio
async def test_bad_machine_id_log_carries_request_id(client: AsyncClient, caplog):
    with caplog.at_level(logging.ERROR, logger="wolweb"):
        resp = await client.post("/", data={"machine": "abc"})

    assert resp.status_code == 400
    request_id = resp.headers["X-Request-ID"]
    assert any(
        getattr(r, "request_id", None) == request_id and "Cannot parse machine id" in r.getMessage()
        for r in caplog.records
    )
