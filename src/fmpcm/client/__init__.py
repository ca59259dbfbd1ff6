# -*- coding: utf-8 -*-
"""
Client layer: session, request adapter and the capability interfaces.

The fmpcm.client package provides:

1. Session (session.py)
    - Owns the transport and the JSON-RPC peer, forwards lifecycle events

2. Request adapter (adapter.py)
    - One correlated round trip per procedure call, envelope unpacking

3. Capability interfaces (client.py, extended.py)
    - `BaseClient`: procedures every FreeMASTER service offers
    - `ExtendedClient`: full-application procedures and server events,
      obtained from `BaseClient.activate()`

Examples
--------
```python
from fmpcm.client import Session
from fmpcm.types import CallError

async with Session("localhost:41000") as session:
    pcm = session.client
    print(await pcm.get_app_version())
    try:
        await pcm.get_comm_port_info("no-such-port")
    except CallError as e:
        print(e.error)
```

See Also
--------
fmpcm.types : Procedure catalogue, messages and exceptions
fmpcm.rpc : JSON-RPC peer and transports
"""

from .adapter import RequestAdapter
from .client import BaseClient, command
from .extended import (
    CapabilityExtender,
    ExtendedClient,
    default_event_handler,
    is_default_event_handler,
)
from .session import Session

__all__ = [
    "BaseClient",
    "CapabilityExtender",
    "ExtendedClient",
    "RequestAdapter",
    "Session",
    "command",
    "default_event_handler",
    "is_default_event_handler",
]
