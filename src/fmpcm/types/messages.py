"""Message types for the JSON-RPC link between client and service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import simplejson as json
from mashumaro import DataClassDictMixin

JSONRPC_VERSION = "2.0"

# longer sequences are elided in reprs (memory dumps, recorder data...)
_REPR_MAX_ITEMS = 16


def _short(val: Any) -> str:
    if isinstance(val, (list, tuple)) and len(val) > _REPR_MAX_ITEMS:
        return f"<{type(val).__name__}[{len(val)}]>"
    return repr(val)


@dataclass
class Message(DataClassDictMixin):
    """Base class for all messages."""

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __repr__(self):
        msg = self.__class__.__name__ + "("
        msg += ", ".join(
            f"{name}={_short(val)}" for name, val in self.__dict__.items()
        )
        return msg + ")"


@dataclass(repr=False)
class RpcRequest(Message):
    """A procedure call from client to service.

    `params` is left out of the wire form when there are no arguments.
    """

    method: str
    id: int
    params: Optional[list[Any]] = None
    jsonrpc: str = JSONRPC_VERSION

    def to_json(self) -> str:
        dct = {"jsonrpc": self.jsonrpc, "id": self.id, "method": self.method}
        if self.params:
            # passed through as given, no per-argument conversion
            dct["params"] = list(self.params)
        return json.dumps(dct)


@dataclass(repr=False)
class RpcErrorObject(Message):
    """JSON-RPC level error member."""

    code: int
    message: str
    data: Any = None


@dataclass(repr=False)
class RpcReply(Message):
    """Reply to a call the service made on us."""

    id: Any
    result: Any = None
    error: Optional[RpcErrorObject] = None
    jsonrpc: str = JSONRPC_VERSION

    def to_json(self) -> str:
        dct = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            dct["error"] = self.error.to_dict()
        else:
            dct["result"] = self.result
        return json.dumps(dct)


@dataclass(repr=False)
class Outcome(Message):
    """The envelope every FreeMASTER procedure answers with.

    `{"success": true, "data": ...}` or `{"success": false, "error": ...}`.
    A successful call settles with `data`. `xtra` is kept for inspection only.
    """

    success: bool
    data: Any = None
    error: Any = None
    xtra: Any = None

    @classmethod
    def from_envelope(cls, envelope: Any) -> Outcome:
        """Read an envelope without copying its payload.

        Raises
        ------
        TypeError
            If the envelope is not a JSON object.
        """
        if not isinstance(envelope, dict):
            raise TypeError(
                f"Expected result envelope object, got {type(envelope).__name__}"
            )
        return cls(
            success=bool(envelope.get("success", False)),
            data=envelope.get("data"),
            error=envelope.get("error"),
            xtra=envelope.get("xtra"),
        )


@dataclass(kw_only=True, repr=False)
class ConnectionEvent(Message):
    """Transport lifecycle event handed to on_open / on_close callbacks."""

    type: str  # "open" | "close"
    url: str
    code: Optional[int] = None
    reason: str = ""
