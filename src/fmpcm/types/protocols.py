"""Collaborator protocols the client layer is written against.

The session only relies on these method signatures, so the JSON-RPC peer and
the transport can be swapped (e.g. `MockTransport` in tests) without touching
the request adapter or the capability extender.

Example
-------
A transport only needs connect/close/send and the four callbacks:

    class MyTransport:
        on_open = on_close = on_error = on_message = None

        async def connect(self) -> None: ...
        async def close(self) -> None: ...
        def send(self, text: str) -> None: ...
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class RpcPeerProtocol(Protocol):
    """Correlating JSON-RPC endpoint."""

    to_stream: Optional[Callable[[str], None]]

    def call(
        self, method: str, params: Optional[Sequence[Any]] = None
    ) -> asyncio.Future: ...

    def dispatch(self, method: str, handler: Callable[[list], Any]) -> None: ...

    def message_handler(self, raw: str) -> None: ...

    def reject_all(self, reason: str) -> int: ...


@runtime_checkable
class TransportProtocol(Protocol):
    """Duplex text-frame connection delivering events on one event loop."""

    url: str
    on_open: Optional[Callable[[Any], None]]
    on_close: Optional[Callable[[Any], None]]
    on_error: Optional[Callable[[BaseException], None]]
    on_message: Optional[Callable[[str], None]]

    async def connect(self) -> None: ...

    async def close(self) -> None: ...

    def send(self, text: str) -> None: ...

    def is_open(self) -> bool: ...
