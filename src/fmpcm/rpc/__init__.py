"""
JSON-RPC peer and transports the client session is built on.

See Also
--------
fmpcm.rpc.jsonrpc : Call correlation and incoming dispatch
fmpcm.rpc.transport : WebSocket transport (websockets)
fmpcm.rpc.mock_transport : Scriptable in-process transport for tests
"""

from .jsonrpc import JsonRpcPeer
from .mock_transport import MockTransport
from .transport import WebSocketTransport

__all__ = ["JsonRpcPeer", "MockTransport", "WebSocketTransport"]
