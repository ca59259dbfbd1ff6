"""In-process stand-in for the WebSocket transport.

Plays the service side of the connection: records what the client sends and
lets a script or test push replies, notifications and lifecycle events back,
synchronously, as a single-threaded transport would deliver them.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import simplejson as json

from fmpcm.types import JSONRPC_VERSION, ConnectionEvent

MOCK_URL = "ws://mock:41000"


class MockTransport:
    def __init__(self, url: str = MOCK_URL):
        self.url = url
        self.on_open: Optional[Callable[[ConnectionEvent], None]] = None
        self.on_close: Optional[Callable[[ConnectionEvent], None]] = None
        self.on_error: Optional[Callable[[BaseException], None]] = None
        self.on_message: Optional[Callable[[str], None]] = None
        self.sent: list[str] = []
        self._open = False
        self._closed = False

    def is_open(self) -> bool:
        return self._open

    async def connect(self) -> None:
        self.simulate_open()

    async def close(self) -> None:
        if self._open:
            self.simulate_close(1000, "")

    def send(self, text: str) -> None:
        if not self._open:
            raise ConnectionError("WebSocket not connected")
        self.sent.append(text)

    # ------------------------------------------------------------------------
    # service side

    def sent_requests(self) -> list[dict]:
        return [json.loads(text) for text in self.sent]

    def last_request(self) -> dict:
        if not self.sent:
            raise LookupError("Nothing sent yet")
        return json.loads(self.sent[-1])

    def push(self, message: Any) -> None:
        """Deliver a frame to the client (str as-is, anything else as JSON)."""
        if not isinstance(message, str):
            message = json.dumps(message)
        if self.on_message is not None:
            self.on_message(message)

    def reply(self, request_id: Any, result: Any) -> None:
        self.push({"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result})

    def reply_last(self, result: Any) -> None:
        """Answer the most recent request with `result` (the envelope)."""
        self.reply(self.last_request()["id"], result)

    def reply_error(self, request_id: Any, code: int, message: str) -> None:
        self.push(
            {
                "jsonrpc": JSONRPC_VERSION,
                "id": request_id,
                "error": {"code": code, "message": message},
            }
        )

    def notify(self, method: str, *params: Any) -> None:
        msg = {"jsonrpc": JSONRPC_VERSION, "method": method}
        if params:
            msg["params"] = list(params)
        self.push(msg)

    def simulate_open(self) -> None:
        if self._closed:
            raise RuntimeError("Transport already used, create a new one to reconnect")
        self._open = True
        if self.on_open is not None:
            self.on_open(ConnectionEvent(type="open", url=self.url))

    def simulate_error(self, exc: BaseException) -> None:
        if self.on_error is not None:
            self.on_error(exc)

    def simulate_close(self, code: int = 1006, reason: str = "") -> None:
        self._open = False
        self._closed = True
        if self.on_close is not None:
            self.on_close(
                ConnectionEvent(type="close", url=self.url, code=code, reason=reason)
            )
