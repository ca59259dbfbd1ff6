"""
Command-line interface for fmpcm.

Small tools for poking at a running FreeMASTER service:

- Printing the service version
- Listing the communication ports of the service project
- Reading a project variable
- Watching variables change (full FreeMASTER application only)

The CLI is built using the Click framework. Every service command takes the
service address and logging options.

Examples
--------
Reading a variable from a local FreeMASTER Lite service:
```bash
$ fmpcm read speed -a localhost:41000
speed = 1200
```

Watching two variables for five seconds:
```bash
$ fmpcm watch speed current --duration 5
```

See Also
--------
fmpcm.client : Session and client interfaces


CLI Tree
--------

```
$ fmpcm --tree
cli
└── ports
└── read
└── version
└── watch
```
"""

from .base import cli, tree_option

__all__ = ["cli", "tree_option"]
