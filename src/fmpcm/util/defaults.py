# -*- coding: utf-8 -*-

DEFAULT_HOST_ADDR = "localhost"
DEFAULT_PORT = 41000  # FreeMASTER Lite service default
DEFAULT_TIMEOUT = 5  # seconds, CLI waits only (calls themselves never time out)
DEFAULT_LOGLEVEL = "INFO"
TEST_LOGLEVEL = "TRACE"
SINGLE_LINE_ERR_LOG = False  # reformat tracebacks into a single line for err logs

# leave the caller's future pending on transport failure, only report it via
# on_server_error. Set True to also reject the future with ServerError.
REJECT_ON_SERVER_ERROR = False
