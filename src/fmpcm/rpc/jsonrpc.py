"""
Minimal JSON-RPC 2.0 peer.

Correlates outgoing calls with their replies by id, and routes incoming
notifications (or requests) to handlers registered with `dispatch`. The peer
knows nothing about sockets: outgoing text goes to `to_stream`, incoming text
is fed to `message_handler`.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Sequence

import simplejson as json
from loguru import logger

from fmpcm.types import (
    ConnectionClosedError,
    RpcError,
    RpcErrorObject,
    RpcReply,
    RpcRequest,
    ServerError,
)

# JSON-RPC 2.0 reserved codes
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class JsonRpcPeer:
    def __init__(self, to_stream: Optional[Callable[[str], None]] = None):
        self.to_stream = to_stream
        self._next_id = 1
        self._pending: dict[int, tuple[str, asyncio.Future]] = {}
        self._dispatch: dict[str, Callable[[list], Any]] = {}
        self._handler_tasks: set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def registered(self) -> list[str]:
        return list(self._dispatch)

    # ------------------------------------------------------------------------
    # outgoing

    def call(
        self, method: str, params: Optional[Sequence[Any]] = None
    ) -> asyncio.Future:
        """Send a call, return a future for its `result` member.

        The future fails with `RpcError` on a JSON-RPC error reply, and with
        `ConnectionClosedError` when the text cannot be handed to the stream
        or the connection drops before the reply.
        """
        fut = asyncio.get_running_loop().create_future()
        req_id = self._next_id
        self._next_id += 1

        req = RpcRequest(method=method, id=req_id, params=list(params or []))
        self._pending[req_id] = (method, fut)
        logger.trace("*RPC* (client->): {}", req)
        try:
            if self.to_stream is None:
                raise ConnectionError("No stream attached to JSON-RPC peer")
            self.to_stream(req.to_json())
        except Exception as e:
            self._pending.pop(req_id, None)
            err = ConnectionClosedError(f"Could not send {method}: {e}", method)
            err.__cause__ = e
            fut.set_exception(err)
        return fut

    def reject_all(self, reason: str) -> int:
        """Fail every outstanding call with ConnectionClosedError."""
        pending, self._pending = self._pending, {}
        for method, fut in pending.values():
            if not fut.done():
                fut.set_exception(ConnectionClosedError(reason, method))
        if pending:
            logger.warning("Rejected {} outstanding call(s): {}", len(pending), reason)
        return len(pending)

    # ------------------------------------------------------------------------
    # incoming

    def dispatch(self, method: str, handler: Callable[[list], Any]) -> None:
        """Route incoming `method` messages to `handler(params_list)`.

        Registering the same name again replaces the previous handler.
        """
        if method in self._dispatch:
            logger.debug("Replacing dispatch handler for {}", method)
        self._dispatch[method] = handler

    def message_handler(self, raw: str) -> None:
        try:
            msg = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Dropping non-JSON message: {!r}", raw[:200])
            return

        if isinstance(msg, list):  # batch
            for item in msg:
                self._handle_one(item)
        else:
            self._handle_one(msg)

    def _handle_one(self, msg: Any) -> None:
        if not isinstance(msg, dict):
            logger.warning("Dropping malformed JSON-RPC message: {!r}", msg)
        elif "method" in msg:
            self._handle_incoming_call(msg)
        elif "id" in msg:
            self._handle_reply(msg)
        else:
            logger.warning("Dropping JSON-RPC message without id or method: {}", msg)

    def _handle_reply(self, msg: dict) -> None:
        entry = self._pending.pop(msg.get("id"), None)
        if entry is None:
            logger.warning("Reply for unknown request id {}", msg.get("id"))
            return
        method, fut = entry
        if fut.done():
            return

        err = msg.get("error")
        if err is not None:
            if isinstance(err, dict):
                exc = RpcError(
                    err.get("code"), str(err.get("message", "")), err.get("data"), method
                )
            else:
                exc = RpcError(None, str(err), method=method)
            fut.set_exception(exc)
        elif "result" in msg:
            fut.set_result(msg["result"])
        else:
            fut.set_exception(ServerError(f"Reply without result for {method}", method))

    def _handle_incoming_call(self, msg: dict) -> None:
        method = msg["method"]
        req_id = msg.get("id")
        params = msg.get("params")
        if params is None:
            params = []
        elif not isinstance(params, list):
            params = [params]

        handler = self._dispatch.get(method)
        if handler is None:
            if req_id is not None:
                self._reply_error(req_id, METHOD_NOT_FOUND, "Method not found")
            logger.debug("No handler for incoming {}, ignored.", method)
            return

        try:
            result = handler(params)
        except Exception as e:
            logger.exception("Error in handler for {}.", method)
            if req_id is not None:
                self._reply_error(req_id, INTERNAL_ERROR, str(e))
            return

        if asyncio.iscoroutine(result):
            # fire-and-forget, keep a reference until done
            task = asyncio.ensure_future(result)
            self._handler_tasks.add(task)
            task.add_done_callback(self._handler_task_done)
            result = None

        if req_id is not None:
            self._send_reply(RpcReply(id=req_id, result=result))

    def _handler_task_done(self, task: asyncio.Task) -> None:
        self._handler_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).error("Error in async event handler.")

    def _reply_error(self, req_id: Any, code: int, message: str) -> None:
        self._send_reply(RpcReply(id=req_id, error=RpcErrorObject(code, message)))

    def _send_reply(self, reply: RpcReply) -> None:
        if self.to_stream is None:
            return
        try:
            self.to_stream(reply.to_json())
        except Exception:
            logger.exception("Could not send reply {}", reply)
