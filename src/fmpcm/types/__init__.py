"""
Shared types: wire messages, procedure catalogue, call bookkeeping, exceptions.

The fmpcm.types package provides:

1. Wire messages (messages.py)
    - JSON-RPC request/reply dataclasses (mashumaro) serialised with simplejson
    - The `Outcome` envelope every FreeMASTER procedure answers with

2. Procedure catalogue (commands.py)
    - Wire names of the base and extended procedures and of the events

3. Collaborator protocols (protocols.py)
    - What the session expects from a JSON-RPC peer and a transport

4. Call bookkeeping and errors (this module)
    - `PendingCall`, `CapabilityState` and the exception tree

Exception tree
--------------
```
CommsError                  call failures
├── CallError               service answered success=false (recoverable)
└── ServerError             no structured answer (transport level)
    ├── ConnectionClosedError
    ├── RpcError            JSON-RPC error member
    └── MalformedEnvelopeError
FatalError                  protocol misuse, never a CommsError
├── CapabilityLatchError    deactivating extended capability
└── SessionClosedError      reusing a closed session
```

Examples
--------
Handling an application-level failure:
```python
from fmpcm.types import CallError
try:
    info = await pcm.get_comm_port_info("bad")
except CallError as e:
    print(e.error)  # exactly what the service returned, e.g. {"message": ...}
```

See Also
--------
fmpcm.client : Session, request adapter and capability extender
fmpcm.rpc : JSON-RPC peer and transports
"""

from __future__ import annotations

import asyncio
import types
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .commands import (
    BASE_COMMANDS,
    CONSTS,
    EVENTS,
    EXTENDED_COMMANDS,
    EXTENDED_EVENTS,
)
from .messages import (
    JSONRPC_VERSION,
    ConnectionEvent,
    Message,
    Outcome,
    RpcErrorObject,
    RpcReply,
    RpcRequest,
)
from .protocols import RpcPeerProtocol, TransportProtocol
from .validation import (
    PENDING_COMMAND_VALIDATIONS,
    CommandInfo,
    assert_valid_command_client_correspondence,
    collect_command_registry,
    validate_command_client_correspondence,
)

CAPABILITY = types.SimpleNamespace()
CAPABILITY.BASE = "BASE"
CAPABILITY.EXTENDED = "EXTENDED"


# Exceptions
class CommsError(Exception):
    """Base exception for call failures."""

    pass


class CallError(CommsError):
    """The service answered a call with `success: false`.

    `error` holds the service's error descriptor exactly as received.
    """

    def __init__(self, method: str, error: Any):
        super().__init__(f"Error returned from {method}: {error!r}")
        self.method = method
        self.error = error


class ServerError(CommsError):
    """A call got no structured answer (connection lost, JSON-RPC error...)."""

    def __init__(self, message: str, method: str | None = None):
        super().__init__(message)
        self.method = method


class ConnectionClosedError(ServerError):
    """The connection went away while the call was in flight."""

    pass


class RpcError(ServerError):
    """The JSON-RPC layer answered with an error member instead of a result."""

    def __init__(
        self, code: int | None, message: str, data: Any = None, method: str | None = None
    ):
        super().__init__(f"JSON-RPC error {code}: {message}", method)
        self.code = code
        self.rpc_message = message
        self.data = data


class MalformedEnvelopeError(ServerError):
    """The result was not a `{success, data | error}` envelope."""

    pass


class FatalError(Exception):
    """Protocol misuse. Not recoverable within the session."""

    pass


class CapabilityLatchError(FatalError):
    """Raised when extended capability is withdrawn after activation."""

    pass


class SessionClosedError(FatalError):
    """Raised when a closed session is reused."""

    pass


@dataclass
class PendingCall:
    """One outstanding procedure call and the future its caller holds.

    Settles at most once: later attempts are logged and ignored.
    """

    method: str
    params: tuple
    future: asyncio.Future

    @property
    def settled(self) -> bool:
        return self.future.done()

    def resolve(self, value: Any) -> bool:
        if self.future.done():
            logger.warning("Call {} already settled, dropping result.", self.method)
            return False
        self.future.set_result(value)
        return True

    def reject(self, exc: BaseException) -> bool:
        if self.future.done():
            logger.warning("Call {} already settled, dropping error {}.", self.method, exc)
            return False
        self.future.set_exception(exc)
        return True


@dataclass
class CapabilityState:
    """Monotonic BASE -> EXTENDED latch. There is no way back."""

    state: str = CAPABILITY.BASE

    @property
    def extended(self) -> bool:
        return self.state == CAPABILITY.EXTENDED

    def extend(self) -> bool:
        """Move to EXTENDED. Returns True only on the actual transition."""
        if self.extended:
            return False
        self.state = CAPABILITY.EXTENDED
        return True


__all__ = [
    "BASE_COMMANDS",
    "CAPABILITY",
    "CONSTS",
    "EVENTS",
    "EXTENDED_COMMANDS",
    "EXTENDED_EVENTS",
    "JSONRPC_VERSION",
    "CallError",
    "CapabilityLatchError",
    "CapabilityState",
    "CommandInfo",
    "CommsError",
    "ConnectionClosedError",
    "ConnectionEvent",
    "FatalError",
    "MalformedEnvelopeError",
    "Message",
    "Outcome",
    "PENDING_COMMAND_VALIDATIONS",
    "PendingCall",
    "RpcError",
    "RpcErrorObject",
    "RpcPeerProtocol",
    "RpcReply",
    "RpcRequest",
    "ServerError",
    "SessionClosedError",
    "TransportProtocol",
    "assert_valid_command_client_correspondence",
    "collect_command_registry",
    "validate_command_client_correspondence",
]
