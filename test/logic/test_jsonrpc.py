"""Tests for the JSON-RPC peer."""

import asyncio

import pytest
import simplejson as json

from fmpcm.rpc import JsonRpcPeer
from fmpcm.rpc.jsonrpc import INTERNAL_ERROR, METHOD_NOT_FOUND
from fmpcm.types import ConnectionClosedError, RpcError, ServerError


@pytest.fixture
def sent():
    return []


@pytest.fixture
def peer(sent):
    return JsonRpcPeer(to_stream=sent.append)


def reply(peer, req_id, **members):
    peer.message_handler(json.dumps({"jsonrpc": "2.0", "id": req_id, **members}))


@pytest.mark.asyncio
async def test_call_and_result(peer, sent):
    fut = peer.call("ReadVariable", ["speed"])
    req = json.loads(sent[-1])
    assert req == {"jsonrpc": "2.0", "id": 1, "method": "ReadVariable", "params": ["speed"]}
    assert peer.pending_count == 1

    reply(peer, 1, result={"success": True, "data": 3})
    assert await fut == {"success": True, "data": 3}
    assert peer.pending_count == 0


@pytest.mark.asyncio
async def test_call_without_params(peer, sent):
    peer.call("GetAppVersion")
    peer.call("StopComm", [])
    for raw in sent:
        assert "params" not in json.loads(raw)


@pytest.mark.asyncio
async def test_error_reply(peer):
    fut = peer.call("Foo")
    reply(peer, 1, error={"code": -32601, "message": "Method not found", "data": "Foo"})
    with pytest.raises(RpcError) as exc_info:
        await fut
    assert exc_info.value.code == -32601
    assert exc_info.value.rpc_message == "Method not found"
    assert exc_info.value.data == "Foo"
    assert exc_info.value.method == "Foo"


@pytest.mark.asyncio
async def test_reply_without_result(peer):
    fut = peer.call("Foo")
    reply(peer, 1)
    with pytest.raises(ServerError):
        await fut


@pytest.mark.asyncio
async def test_unknown_reply_id_ignored(peer):
    fut = peer.call("Foo")
    reply(peer, 99, result=1)
    assert not fut.done()
    assert peer.pending_count == 1


@pytest.mark.asyncio
async def test_no_stream():
    peer = JsonRpcPeer()
    fut = peer.call("Foo")
    with pytest.raises(ConnectionClosedError):
        await fut
    assert peer.pending_count == 0


@pytest.mark.asyncio
async def test_stream_failure():
    def broken(text):
        raise ConnectionError("not connected")

    peer = JsonRpcPeer(to_stream=broken)
    with pytest.raises(ConnectionClosedError) as exc_info:
        await peer.call("Foo")
    assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.asyncio
async def test_reject_all(peer):
    futs = [peer.call("A"), peer.call("B")]
    assert peer.reject_all("closed") == 2
    for fut in futs:
        with pytest.raises(ConnectionClosedError):
            await fut
    assert peer.reject_all("closed") == 0


def test_notification_dispatch(peer):
    calls = []
    peer.dispatch("OnThing", calls.append)
    peer.message_handler('{"jsonrpc": "2.0", "method": "OnThing", "params": [1, "a"]}')
    peer.message_handler('{"jsonrpc": "2.0", "method": "OnThing"}')
    peer.message_handler('{"jsonrpc": "2.0", "method": "OnThing", "params": {"k": 1}}')
    assert calls == [[1, "a"], [], [{"k": 1}]]


def test_dispatch_replaces_handler(peer):
    first, second = [], []
    peer.dispatch("OnThing", first.append)
    peer.dispatch("OnThing", second.append)
    peer.message_handler('{"jsonrpc": "2.0", "method": "OnThing", "params": [1]}')
    assert first == []
    assert second == [[1]]
    assert peer.registered() == ["OnThing"]


def test_unregistered_notification_ignored(peer, sent):
    peer.message_handler('{"jsonrpc": "2.0", "method": "OnThing"}')
    assert sent == []


def test_unregistered_request_answered(peer, sent):
    peer.message_handler('{"jsonrpc": "2.0", "id": 7, "method": "OnThing"}')
    answer = json.loads(sent[-1])
    assert answer["id"] == 7
    assert answer["error"]["code"] == METHOD_NOT_FOUND


def test_request_answered_with_result(peer, sent):
    peer.dispatch("Add", lambda params: sum(params))
    peer.message_handler('{"jsonrpc": "2.0", "id": 3, "method": "Add", "params": [1, 2]}')
    assert json.loads(sent[-1]) == {"jsonrpc": "2.0", "id": 3, "result": 3}


def test_failing_handler(peer, sent):
    def handler(params):
        raise RuntimeError("boom")

    peer.dispatch("Fail", handler)
    peer.message_handler('{"jsonrpc": "2.0", "method": "Fail"}')
    assert sent == []
    peer.message_handler('{"jsonrpc": "2.0", "id": 4, "method": "Fail"}')
    answer = json.loads(sent[-1])
    assert answer["error"]["code"] == INTERNAL_ERROR
    assert answer["error"]["message"] == "boom"


@pytest.mark.asyncio
async def test_batch(peer):
    calls = []
    peer.dispatch("OnThing", calls.append)
    fut = peer.call("Foo")
    peer.message_handler(
        json.dumps(
            [
                {"jsonrpc": "2.0", "method": "OnThing", "params": [1]},
                {"jsonrpc": "2.0", "id": 1, "result": "ok"},
            ]
        )
    )
    assert calls == [[1]]
    assert await fut == "ok"


def test_garbage_dropped(peer, sent):
    peer.message_handler("not json at all")
    peer.message_handler("42")
    peer.message_handler('{"jsonrpc": "2.0"}')
    assert sent == []


@pytest.mark.asyncio
async def test_async_handler_scheduled(peer):
    done = asyncio.Event()

    async def handler(params):
        done.set()

    peer.dispatch("OnThing", handler)
    peer.message_handler('{"jsonrpc": "2.0", "method": "OnThing"}')
    await asyncio.wait_for(done.wait(), 1)
