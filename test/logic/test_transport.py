"""Tests for the WebSocket transport against a local websockets server."""

import asyncio
import socket

import pytest
import simplejson as json
from websockets.asyncio.server import serve

from fmpcm.client import Session
from fmpcm.rpc import WebSocketTransport
from fmpcm.types import EVENTS, CallError, ConnectionClosedError


async def fake_service(ws):
    """Answers GetAppVersion, fails everything else, emits an event on EnableEvents."""
    async for raw in ws:
        req = json.loads(raw)
        if req["method"] == "GetAppVersion":
            result = {"success": True, "data": "3.2.0"}
        elif req["method"] == "EnableEvents":
            result = {"success": True}
        else:
            result = {"success": False, "error": {"msg": f"No {req['method']}"}}
        await ws.send(json.dumps({"jsonrpc": "2.0", "id": req["id"], "result": result}))
        if req["method"] == "EnableEvents":
            await ws.send(
                json.dumps(
                    {"jsonrpc": "2.0", "method": EVENTS.VARIABLE_CHANGED, "params": ["x", 1, 2]}
                )
            )


def free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.network
@pytest.mark.asyncio
async def test_round_trip():
    async with serve(fake_service, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        events = []
        async with Session(
            f"127.0.0.1:{port}",
            on_open=lambda e: events.append(e.type),
            on_close=lambda e: events.append(e.type),
        ) as session:
            assert isinstance(session.transport, WebSocketTransport)
            pcm = session.client
            assert await pcm.get_app_version() == "3.2.0"
            with pytest.raises(CallError) as exc_info:
                await pcm.get_comm_port_info("bad")
            assert exc_info.value.error == {"msg": "No GetCommPortInfo"}

            ext = pcm.activate()
            changed = asyncio.Event()
            seen = []

            def on_changed(name, sub_id, value):
                seen.append((name, sub_id, value))
                changed.set()

            ext.on_variable_changed = on_changed
            await ext.enable_events(True)
            await asyncio.wait_for(changed.wait(), 2)
            assert seen == [("x", 1, 2)]

        assert events == ["open", "close"]
        assert session.closed


@pytest.mark.network
@pytest.mark.asyncio
async def test_server_closes_connection():
    async def closing_service(ws):
        await ws.recv()
        await ws.close(4000, "bye")

    async with serve(closing_service, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        closed = asyncio.Event()
        server_errors = []
        session = Session(
            f"127.0.0.1:{port}",
            on_close=lambda e: closed.set(),
            on_server_error=server_errors.append,
            reject_on_server_error=True,
        )
        await session.open()
        fut = session.client.get_app_version()
        await asyncio.wait_for(closed.wait(), 2)
        with pytest.raises(ConnectionClosedError):
            await fut
        assert len(server_errors) == 1
        assert session.closed


@pytest.mark.network
@pytest.mark.asyncio
async def test_undecodable_binary_frame_is_dropped():
    async def garbling_service(ws):
        await ws.send(b"\xff\xfe")
        await fake_service(ws)

    async with serve(garbling_service, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        closes = []
        session = Session(
            f"127.0.0.1:{port}",
            on_close=lambda e: closes.append(e.type),
        )
        await session.open()
        # the garbage frame is sent first, the reply comes after it
        assert await asyncio.wait_for(session.client.get_app_version(), 2) == "3.2.0"
        assert not session.closed
        assert session.is_open()
        assert closes == []

        await session.close()
        assert closes == ["close"]
        assert session.closed


@pytest.mark.network
@pytest.mark.asyncio
async def test_connect_refused():
    events = []
    session = Session(
        f"127.0.0.1:{free_port()}",
        on_close=lambda e: events.append(("close", e.code)),
        on_error=lambda exc: events.append(("error", type(exc))),
    )
    with pytest.raises(OSError):
        await session.open()
    assert [kind for kind, _ in events] == ["error", "close"]
    assert events[1][1] == 1006
    assert session.closed


@pytest.mark.asyncio
async def test_send_before_connect():
    transport = WebSocketTransport("ws://127.0.0.1:1")
    assert not transport.is_open()
    with pytest.raises(ConnectionError):
        transport.send("{}")
