"""
Connection session to a FreeMASTER JSON-RPC service.

A `Session` owns one transport and one JSON-RPC peer, wires them together and
forwards the transport's lifecycle to user callbacks. It also holds the
callback slots for server events and for failures that have no caller to go
to (`on_server_error`).

```python
async with Session("localhost:41000") as session:
    pcm = session.client
    print(await pcm.get_app_version())
```

Sessions are single use: once the connection is closed, make a new one.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from loguru import logger

from fmpcm.rpc import JsonRpcPeer, WebSocketTransport
from fmpcm.types import (
    EXTENDED_EVENTS,
    ConnectionEvent,
    SessionClosedError,
    TransportProtocol,
)
from fmpcm.util import REJECT_ON_SERVER_ERROR, parse_address

from .adapter import RequestAdapter
from .client import BaseClient
from .extended import CapabilityExtender, EventHandler, default_event_handler


def _log_open(event: ConnectionEvent) -> None:
    logger.info("Connected to {}", event.url)


def _log_close(event: ConnectionEvent) -> None:
    logger.info("Disconnected from {} ({} {})", event.url, event.code, event.reason)


def _log_error(exc: BaseException) -> None:
    logger.error("Connection error: {}", exc)


def _log_server_error(exc: BaseException) -> None:
    logger.error("Server error: {}", exc)


class Session:
    """Client side of one connection to a FreeMASTER service.

    Parameters
    ----------
    address : str
        "host:port" of the service (a ws:// or wss:// URL is also accepted)
    on_open, on_close : Callable[[ConnectionEvent], None], optional
        Called once when the connection opens / ends. Default: log.
    on_error : Callable[[BaseException], None], optional
        Called on transport errors. Default: log.
    on_server_error : Callable[[BaseException], None], optional
        Called when a call got no structured answer. Default: log.
    event_handlers : Mapping[str, Callable], optional
        Initial handlers for the server events, keyed by event name
        ("OnVariableChanged", ...). Missing ones log the event.
    reject_on_server_error : bool, optional
        Also fail the caller's future on server errors instead of leaving it
        pending.
    transport : TransportProtocol, optional
        Defaults to a `WebSocketTransport` to `address`.

    Raises
    ------
    ValueError
        If `address` cannot be parsed or an event name is unknown.
    """

    def __init__(
        self,
        address: str,
        on_open: Optional[Callable[[ConnectionEvent], None]] = None,
        on_close: Optional[Callable[[ConnectionEvent], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        *,
        on_server_error: Optional[Callable[[BaseException], None]] = None,
        event_handlers: Optional[Mapping[str, EventHandler]] = None,
        reject_on_server_error: bool = REJECT_ON_SERVER_ERROR,
        transport: Optional[TransportProtocol] = None,
    ):
        self.url = parse_address(address)
        self.on_open = on_open or _log_open
        self.on_close = on_close or _log_close
        self.on_error = on_error or _log_error
        self.on_server_error = on_server_error or _log_server_error
        self.event_handlers: dict[str, EventHandler] = self._init_event_handlers(
            event_handlers or {}
        )
        self._closed = False

        self.peer = JsonRpcPeer()
        self.transport = transport if transport is not None else WebSocketTransport(self.url)
        self.transport.on_open = self._handle_open
        self.transport.on_close = self._handle_close
        self.transport.on_error = self._handle_error
        self.transport.on_message = self.peer.message_handler
        self.peer.to_stream = self.transport.send

        self.adapter = RequestAdapter(
            self.peer, self._handle_server_error, reject_on_server_error
        )
        self.extender = CapabilityExtender(self)
        self._client = BaseClient(self)

    @staticmethod
    def _init_event_handlers(
        handlers: Mapping[str, EventHandler],
    ) -> dict[str, EventHandler]:
        unknown = set(handlers) - set(EXTENDED_EVENTS)
        if unknown:
            raise ValueError(
                f"Unknown event(s) {sorted(unknown)}, expected one of {list(EXTENDED_EVENTS)}"
            )
        slots = {}
        for event in EXTENDED_EVENTS:
            handler = handlers.get(event)
            if handler is None:
                handler = default_event_handler(event)
            elif not callable(handler):
                raise TypeError(f"Handler for {event} must be callable, got {handler!r}")
            slots[event] = handler
        return slots

    @property
    def client(self) -> BaseClient:
        return self._client

    @property
    def closed(self) -> bool:
        return self._closed

    def is_open(self) -> bool:
        return not self._closed and self.transport.is_open()

    async def open(self) -> Session:
        if self._closed:
            raise SessionClosedError(
                f"Session to {self.url} is closed, create a new one to reconnect"
            )
        if not self.transport.is_open():
            await self.transport.connect()
        return self

    async def close(self) -> None:
        if self._closed:
            return
        await self.transport.close()
        # never opened: no close event comes
        self._closed = True

    async def __aenter__(self) -> Session:
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------------
    # transport callbacks

    def _handle_open(self, event: ConnectionEvent) -> None:
        self._forward(self.on_open, event)

    def _handle_close(self, event: ConnectionEvent) -> None:
        self._forward(self.on_close, event)
        self._closed = True
        self.peer.reject_all("Connection closed")

    def _handle_error(self, exc: BaseException) -> None:
        self._forward(self.on_error, exc)

    def _handle_server_error(self, exc: BaseException) -> None:
        self.on_server_error(exc)

    @staticmethod
    def _forward(callback: Callable[[Any], None], arg: Any) -> None:
        try:
            callback(arg)
        except Exception:
            logger.exception("Error in session callback {}", callback)
