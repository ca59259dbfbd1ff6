# -*- coding: utf-8 -*-
"""# fmpcm

`FreeMASTER Communication` client for Python.

Drives a FreeMASTER Lite service (or the full FreeMASTER application) through
its WebSocket JSON-RPC interface: read and write target memory and variables,
run oscilloscopes and recorders, talk through pipes, and receive server
events once the extended features are activated.

```python
import asyncio
from fmpcm import Session

async def main():
    async with Session("localhost:41000") as session:
        pcm = session.client
        print(await pcm.get_app_version())

asyncio.run(main())
```

## Packages

- `fmpcm.client`: session, request adapter, base and extended clients
- `fmpcm.rpc`: JSON-RPC peer, WebSocket and mock transports
- `fmpcm.types`: procedure catalogue, wire messages and exceptions
- `fmpcm.util`: logging, defaults and address parsing
- `fmpcm.cli`: command-line tools
"""

from ._version import __version__
from .client import BaseClient, ExtendedClient, Session
from .types import CallError, CapabilityLatchError, CommsError, FatalError, ServerError

__all__ = [
    "__version__",
    "BaseClient",
    "CallError",
    "CapabilityLatchError",
    "CommsError",
    "ExtendedClient",
    "FatalError",
    "ServerError",
    "Session",
]
