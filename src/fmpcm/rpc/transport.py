"""WebSocket transport to the FreeMASTER service.

Delivers lifecycle events and incoming text frames through plain callbacks,
all on the event loop that called `connect()`:

- `on_open(ConnectionEvent)` once the handshake completes
- `on_message(str)` per text frame, in arrival order
- `on_error(exception)` on connect failures and abnormal closures
- `on_close(ConnectionEvent)` exactly once when the connection ends

Outgoing frames are queued by `send()` and written by a single writer task so
their order is kept. No reconnection: a closed transport stays closed.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from loguru import logger
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI

from fmpcm.types import ConnectionEvent
from fmpcm.util import DEFAULT_TIMEOUT

ABNORMAL_CLOSURE = 1006


class WebSocketTransport:
    def __init__(self, url: str, open_timeout: float = DEFAULT_TIMEOUT):
        self.url = url
        self.open_timeout = open_timeout
        self.on_open: Optional[Callable[[ConnectionEvent], None]] = None
        self.on_close: Optional[Callable[[ConnectionEvent], None]] = None
        self.on_error: Optional[Callable[[BaseException], None]] = None
        self.on_message: Optional[Callable[[str], None]] = None

        self._ws: Optional[ClientConnection] = None
        self._outbox: Optional[asyncio.Queue[str]] = None
        self._reader: Optional[asyncio.Task] = None
        self._writer: Optional[asyncio.Task] = None
        self._closed = False

    def is_open(self) -> bool:
        return self._ws is not None and not self._closed

    async def connect(self) -> None:
        """Open the connection and start reading.

        Raises
        ------
        OSError, InvalidURI, InvalidHandshake, TimeoutError
            If the service cannot be reached. `on_error` and `on_close` have
            been called by then.
        """
        if self._ws is not None:
            raise RuntimeError("Transport already used, create a new one to reconnect")

        logger.debug("Connecting to {}", self.url)
        try:
            self._ws = await connect(
                self.url, open_timeout=self.open_timeout, max_size=None
            )
        except (OSError, InvalidURI, InvalidHandshake, asyncio.TimeoutError) as e:
            logger.error("Could not connect to {}: {}", self.url, e)
            self._closed = True
            self._emit(self.on_error, e)
            self._emit(
                self.on_close,
                ConnectionEvent(
                    type="close", url=self.url, code=ABNORMAL_CLOSURE, reason=str(e)
                ),
            )
            raise

        self._outbox = asyncio.Queue()
        self._emit(self.on_open, ConnectionEvent(type="open", url=self.url))
        self._reader = asyncio.create_task(self._read_loop())
        self._writer = asyncio.create_task(self._write_loop())

    async def close(self) -> None:
        if self._ws is None or self._closed:
            return
        logger.debug("Closing connection to {}", self.url)
        await self._ws.close()
        if self._reader is not None:
            await self._reader

    def send(self, text: str) -> None:
        if not self.is_open():
            raise ConnectionError("WebSocket not connected")
        self._outbox.put_nowait(text)

    async def _read_loop(self) -> None:
        try:
            async for raw in self._ws:
                if isinstance(raw, bytes):
                    try:
                        raw = raw.decode("utf-8")
                    except UnicodeDecodeError as e:
                        logger.warning("Dropping non UTF-8 frame from {}: {}", self.url, e)
                        continue
                self._emit(self.on_message, raw)
        except ConnectionClosed as e:
            # clean closes end the loop normally, this one was abnormal
            logger.warning("Connection to {} lost: {}", self.url, e)
            self._emit(self.on_error, e)
        except Exception as e:
            logger.exception("Error reading from {}", self.url)
            self._emit(self.on_error, e)
            await self._ws.close()
        finally:
            self._finish()

    async def _write_loop(self) -> None:
        while True:
            text = await self._outbox.get()
            try:
                await self._ws.send(text)
            except ConnectionClosed:
                break  # reported by the reader
            except Exception as e:
                logger.exception("Error writing to {}", self.url)
                self._emit(self.on_error, e)

    def _finish(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._writer is not None:
            self._writer.cancel()
        code = self._ws.close_code
        reason = self._ws.close_reason or ""
        logger.info("Connection to {} closed ({} {})", self.url, code, reason)
        self._emit(
            self.on_close,
            ConnectionEvent(type="close", url=self.url, code=code, reason=reason),
        )

    @staticmethod
    def _emit(callback: Optional[Callable[[Any], None]], arg: Any) -> None:
        if callback is None:
            return
        try:
            callback(arg)
        except Exception:
            logger.exception("Error in transport callback {}", callback)
