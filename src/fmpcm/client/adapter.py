"""
Request adapter: one correlated round trip per procedure call.

Every client method goes through `RequestAdapter.invoke`. The service answers
each call with an envelope, which the adapter unpacks:

- `{"success": true, "data": D}`  -> the caller's future resolves with `D`
- `{"success": false, "error": E}` -> the caller's future fails with
  `CallError`, `CallError.error is E`

When no envelope arrives at all (connection dropped, JSON-RPC error member,
result that is not an envelope), the failure goes to the `on_server_error`
side channel instead. The caller's future is then left pending, unless the
adapter was built with `reject_on_server_error=True`, in which case it also
fails with the `ServerError`.

No retries, no timeouts, no queueing.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Callable, Sequence

from loguru import logger

from fmpcm.types import (
    CallError,
    ConnectionClosedError,
    MalformedEnvelopeError,
    Outcome,
    PendingCall,
    RpcPeerProtocol,
    ServerError,
)


class RequestAdapter:
    def __init__(
        self,
        peer: RpcPeerProtocol,
        on_server_error: Callable[[BaseException], None],
        reject_on_server_error: bool = False,
    ):
        self._peer = peer
        self._on_server_error = on_server_error
        self.reject_on_server_error = reject_on_server_error

    def invoke(self, method: str, args: Sequence[Any] = ()) -> asyncio.Future:
        """Call a remote procedure.

        Parameters
        ----------
        method : str
            Procedure name, e.g. "GetAppVersion"
        args : Sequence[Any], optional
            Positional arguments, JSON-representable, passed through unchecked

        Returns
        -------
        asyncio.Future
            Resolves with the envelope's data, fails with CallError.

        Raises
        ------
        ValueError
            If `method` is empty.
        """
        if not method:
            raise ValueError("Empty procedure name")

        call = PendingCall(
            method, tuple(args), asyncio.get_running_loop().create_future()
        )
        logger.debug("*REQUEST* (client->): {}{}", method, call.params)
        envelope = self._peer.call(method, list(call.params))
        envelope.add_done_callback(partial(self._settle, call))
        return call.future

    def _settle(self, call: PendingCall, envelope: asyncio.Future) -> None:
        if envelope.cancelled():
            self._server_error(call, ConnectionClosedError("Call cancelled", call.method))
            return
        exc = envelope.exception()
        if exc is not None:
            self._server_error(call, exc)
            return

        try:
            outcome = Outcome.from_envelope(envelope.result())
        except TypeError as e:
            self._server_error(call, MalformedEnvelopeError(str(e), call.method))
            return

        if outcome.success:
            logger.debug("*RESPONSE* (client<-): {} -> {}", call.method, outcome)
            call.resolve(outcome.data)
        else:
            logger.error("Error during {}: '{}'", call.method, outcome.error)
            call.reject(CallError(call.method, outcome.error))

    def _server_error(self, call: PendingCall, exc: BaseException) -> None:
        logger.warning("No answer to {}: {}", call.method, exc)
        try:
            self._on_server_error(exc)
        except Exception:
            logger.exception("Error in on_server_error callback.")

        if self.reject_on_server_error:
            if not isinstance(exc, ServerError):
                err = ServerError(str(exc), call.method)
                err.__cause__ = exc
                exc = err
            call.reject(exc)
