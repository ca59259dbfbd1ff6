# -*- coding: utf-8 -*-
"""
Utility functions and constants for fmpcm.

This module provides:

- Logging configuration and management
- Default connection settings
- Service address parsing

Examples
--------
Logging to stderr while scripting:
```python
from fmpcm.util import start_client_log
start_client_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")
```

See Also
--------
fmpcm.util.logging : Logging configuration
fmpcm.util.address : Address parsing
"""

from .address import parse_address
from .defaults import (
    DEFAULT_HOST_ADDR,
    DEFAULT_LOGLEVEL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    REJECT_ON_SERVER_ERROR,
    SINGLE_LINE_ERR_LOG,
    TEST_LOGLEVEL,
)
from .logging import (
    clear_log,
    format_error_response,
    log_default_path_client,
    shutdown_client_log,
    start_client_log,
)

__all__ = [
    "DEFAULT_HOST_ADDR",
    "DEFAULT_LOGLEVEL",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT",
    "REJECT_ON_SERVER_ERROR",
    "SINGLE_LINE_ERR_LOG",
    "TEST_LOGLEVEL",
    "clear_log",
    "format_error_response",
    "log_default_path_client",
    "parse_address",
    "shutdown_client_log",
    "start_client_log",
]
