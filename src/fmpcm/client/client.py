# -*- coding: utf-8 -*-
"""
Base procedure surface of the FreeMASTER service.

Every method here is a thin wrapper: it marshals its arguments into the
positional parameter list of one remote procedure and hands it to the
session's `RequestAdapter`. Each returns an `asyncio.Future`, so methods are
awaited:

```python
version = await pcm.get_app_version()
```

The decorator-based framework keeps the client in step with the procedure
catalogue (`fmpcm.types.commands`):

1. Each client method is decorated with @command to name the procedure it calls
2. The decorator records the mapping in PENDING_COMMAND_VALIDATIONS
3. `assert_valid_command_client_correspondence()` checks every procedure has
   exactly one wrapper, on the right capability class

Argument and result shapes of the procedures are owned by the service, the
wrappers pass them through untouched.
"""

from __future__ import annotations

import asyncio
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, TypeVar, Union

from fmpcm.types import CONSTS, PENDING_COMMAND_VALIDATIONS, CapabilityState

if TYPE_CHECKING:
    from .extended import ExtendedClient
    from .session import Session

F = TypeVar("F", bound=Callable[..., asyncio.Future])

Address = Union[int, str]  # numeric address or symbol name


def command(command_str: str) -> Callable[[F], F]:
    """Decorator that marks a client method and records its procedure.

    Args:
        command_str: The wire name of the procedure this method calls

    Returns:
        Decorated client method
    """

    def decorator(func: F) -> F:
        # validated later, see fmpcm.types.validation
        PENDING_COMMAND_VALIDATIONS.append((command_str, func.__qualname__))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> asyncio.Future:
            return func(*args, **kwargs)

        wrapper._command = command_str
        wrapper._is_client_method = True
        return wrapper

    return decorator


class BaseClient:
    """Procedures every FreeMASTER service (Lite or full application) offers.

    Obtained from `Session.client`. Extended procedures and server events are
    only reachable through the `ExtendedClient` returned by `activate()`.
    """

    def __init__(self, session: Session):
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    @property
    def capability(self) -> CapabilityState:
        return self._session.extender.state

    def _invoke(self, method: str, *args: Any) -> asyncio.Future:
        return self._session.adapter.invoke(method, args)

    def activate(self, enable: bool = True) -> Optional[ExtendedClient]:
        """Enable the extra procedures and events of the full FreeMASTER application.

        One-way: once enabled, the extended capability stays for the lifetime
        of the session. Events also need `enable_events(True)` on the returned
        client before the service sends any.

        Parameters
        ----------
        enable : bool, optional
            True to activate (repeat calls return the same client). False is a
            no-op before activation.

        Returns
        -------
        ExtendedClient | None
            The extended client, or None for `enable=False`.

        Raises
        ------
        CapabilityLatchError
            If `enable=False` after the capability was activated.
        """
        return self._session.extender.activate(enable)

    # -------------------------------------------------------------------------
    # Application & communication
    # -------------------------------------------------------------------------

    @command(CONSTS.APP.GET_APP_VERSION)
    def get_app_version(self) -> asyncio.Future:
        """Service version string."""
        return self._invoke(CONSTS.APP.GET_APP_VERSION)

    @command(CONSTS.COMM.ENUM_COMM_PORTS)
    def enum_comm_ports(self, index: int) -> asyncio.Future:
        """Communication port friendly name (defined in the project) by index.

        Fails with CallError once `index` runs past the last port, which is how
        enumeration loops end:

        ```python
        index = 0
        while True:
            try:
                name = await pcm.enum_comm_ports(index)
            except CallError:
                break
            index += 1
        ```
        """
        return self._invoke(CONSTS.COMM.ENUM_COMM_PORTS, index)

    @command(CONSTS.COMM.GET_COMM_PORT_INFO)
    def get_comm_port_info(self, name: str) -> asyncio.Future:
        """Port information: name, description, connection_string, elf."""
        return self._invoke(CONSTS.COMM.GET_COMM_PORT_INFO, name)

    @command(CONSTS.COMM.START_COMM)
    def start_comm(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.COMM.START_COMM, name)

    @command(CONSTS.COMM.STOP_COMM)
    def stop_comm(self) -> asyncio.Future:
        return self._invoke(CONSTS.COMM.STOP_COMM)

    @command(CONSTS.COMM.IS_COMM_PORT_OPEN)
    def is_comm_port_open(self) -> asyncio.Future:
        return self._invoke(CONSTS.COMM.IS_COMM_PORT_OPEN)

    @command(CONSTS.COMM.IS_BOARD_DETECTED)
    def is_board_detected(self) -> asyncio.Future:
        return self._invoke(CONSTS.COMM.IS_BOARD_DETECTED)

    @command(CONSTS.COMM.GET_DETECTED_BOARD_INFO)
    def get_detected_board_info(self) -> asyncio.Future:
        """Board information (deprecated since protocol version 4.0)."""
        return self._invoke(CONSTS.COMM.GET_DETECTED_BOARD_INFO)

    # -------------------------------------------------------------------------
    # Target configuration parameters
    # -------------------------------------------------------------------------

    @command(CONSTS.CONFIG.GET_PARAM_U8)
    def get_config_param_u8(self, name: str) -> asyncio.Future:
        """uint8 parameter: "F1" flags, "RC"/"SC"/"PC" recorder/scope/pipe counts."""
        return self._invoke(CONSTS.CONFIG.GET_PARAM_U8, name)

    @command(CONSTS.CONFIG.GET_PARAM_ULEB)
    def get_config_param_uleb(self, name: str) -> asyncio.Future:
        """ULEB128 parameter: "MTU" buffer size, "BA" base address."""
        return self._invoke(CONSTS.CONFIG.GET_PARAM_ULEB, name)

    @command(CONSTS.CONFIG.GET_PARAM_STRING)
    def get_config_param_string(
        self, name: str, length: Optional[int] = None
    ) -> asyncio.Future:
        """String parameter: "VS" version, "NM" name, "DS" description, "BD" build date.

        Parameters
        ----------
        name : str
            Parameter name
        length : int, optional
            String byte length, the service max buffer size (256) if None
        """
        return self._invoke(CONSTS.CONFIG.GET_PARAM_STRING, name, length)

    # -------------------------------------------------------------------------
    # Memory access
    # -------------------------------------------------------------------------

    @command(CONSTS.MEM.READ_INT_VARIABLE)
    def read_int_variable(self, addr: Address, size: int) -> asyncio.Future:
        """Signed integer of `size` bytes (1, 2, 4 or 8) at address or symbol."""
        return self._invoke(CONSTS.MEM.READ_INT_VARIABLE, addr, size)

    @command(CONSTS.MEM.READ_UINT_VARIABLE)
    def read_uint_variable(self, addr: Address, size: int) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.READ_UINT_VARIABLE, addr, size)

    @command(CONSTS.MEM.READ_FLOAT_VARIABLE)
    def read_float_variable(self, addr: Address) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.READ_FLOAT_VARIABLE, addr)

    @command(CONSTS.MEM.READ_DOUBLE_VARIABLE)
    def read_double_variable(self, addr: Address) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.READ_DOUBLE_VARIABLE, addr)

    @command(CONSTS.MEM.WRITE_INT_VARIABLE)
    def write_int_variable(self, addr: Address, size: int, data: int) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_INT_VARIABLE, addr, size, data)

    @command(CONSTS.MEM.WRITE_UINT_VARIABLE)
    def write_uint_variable(
        self, addr: Address, size: int, data: int
    ) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_UINT_VARIABLE, addr, size, data)

    @command(CONSTS.MEM.WRITE_FLOAT_VARIABLE)
    def write_float_variable(self, addr: Address, data: float) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_FLOAT_VARIABLE, addr, data)

    @command(CONSTS.MEM.WRITE_DOUBLE_VARIABLE)
    def write_double_variable(self, addr: Address, data: float) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_DOUBLE_VARIABLE, addr, data)

    @command(CONSTS.MEM.READ_MEMORY)
    def read_memory(self, addr: Address, size: int) -> asyncio.Future:
        """Raw bytes, as a list of ints."""
        return self._invoke(CONSTS.MEM.READ_MEMORY, addr, size)

    @command(CONSTS.MEM.READ_INT_ARRAY)
    def read_int_array(self, addr: Address, size: int, el_size: int) -> asyncio.Future:
        """`size` signed integers of `el_size` bytes each."""
        return self._invoke(CONSTS.MEM.READ_INT_ARRAY, addr, size, el_size)

    @command(CONSTS.MEM.READ_UINT_ARRAY)
    def read_uint_array(
        self, addr: Address, size: int, el_size: int
    ) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.READ_UINT_ARRAY, addr, size, el_size)

    @command(CONSTS.MEM.READ_FLOAT_ARRAY)
    def read_float_array(self, addr: Address, size: int) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.READ_FLOAT_ARRAY, addr, size)

    @command(CONSTS.MEM.READ_DOUBLE_ARRAY)
    def read_double_array(self, addr: Address, size: int) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.READ_DOUBLE_ARRAY, addr, size)

    @command(CONSTS.MEM.WRITE_MEMORY)
    def write_memory(self, addr: Address, data: Sequence[int]) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_MEMORY, addr, data)

    @command(CONSTS.MEM.WRITE_INT_ARRAY)
    def write_int_array(
        self, addr: Address, el_size: int, data: Sequence[int]
    ) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_INT_ARRAY, addr, el_size, data)

    @command(CONSTS.MEM.WRITE_UINT_ARRAY)
    def write_uint_array(
        self, addr: Address, el_size: int, data: Sequence[int]
    ) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_UINT_ARRAY, addr, el_size, data)

    @command(CONSTS.MEM.WRITE_FLOAT_ARRAY)
    def write_float_array(self, addr: Address, data: Sequence[float]) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_FLOAT_ARRAY, addr, data)

    @command(CONSTS.MEM.WRITE_DOUBLE_ARRAY)
    def write_double_array(
        self, addr: Address, data: Sequence[float]
    ) -> asyncio.Future:
        return self._invoke(CONSTS.MEM.WRITE_DOUBLE_ARRAY, addr, data)

    # -------------------------------------------------------------------------
    # Symbols (ELF / TSA)
    # -------------------------------------------------------------------------

    @command(CONSTS.TSA.READ_ELF)
    def read_elf(self, elf_file: str) -> asyncio.Future:
        """Load symbols from an ELF file on the service host."""
        return self._invoke(CONSTS.TSA.READ_ELF, elf_file)

    @command(CONSTS.TSA.READ_TSA)
    def read_tsa(self) -> asyncio.Future:
        """Load symbols from the target-side address table."""
        return self._invoke(CONSTS.TSA.READ_TSA)

    @command(CONSTS.TSA.ENUM_SYMBOLS)
    def enum_symbols(self, index: int) -> asyncio.Future:
        return self._invoke(CONSTS.TSA.ENUM_SYMBOLS, index)

    @command(CONSTS.TSA.GET_SYMBOL_INFO)
    def get_symbol_info(self, name: str) -> asyncio.Future:
        """Symbol name, addr, size and type."""
        return self._invoke(CONSTS.TSA.GET_SYMBOL_INFO, name)

    # -------------------------------------------------------------------------
    # Project variables
    # -------------------------------------------------------------------------

    @command(CONSTS.VAR.ENUM_VARIABLES)
    def enum_variables(self, index: int) -> asyncio.Future:
        return self._invoke(CONSTS.VAR.ENUM_VARIABLES, index)

    @command(CONSTS.VAR.GET_VARIABLE_INFO)
    def get_variable_info(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.VAR.GET_VARIABLE_INFO, name)

    @command(CONSTS.VAR.DEFINE_VARIABLE)
    def define_variable(self, variable: dict[str, Any]) -> asyncio.Future:
        """Define a script variable.

        Parameters
        ----------
        variable : dict
            Variable description: name, addr, type (int, uint, fract, ufract,
            float or double), size, and optionally shift, mask, q_n, q_m.
        """
        return self._invoke(CONSTS.VAR.DEFINE_VARIABLE, variable)

    @command(CONSTS.VAR.DELETE_VARIABLE)
    def delete_variable(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.VAR.DELETE_VARIABLE, name)

    @command(CONSTS.VAR.DELETE_ALL_SCRIPT_VARIABLES)
    def delete_all_script_variables(self) -> asyncio.Future:
        return self._invoke(CONSTS.VAR.DELETE_ALL_SCRIPT_VARIABLES)

    @command(CONSTS.VAR.READ_VARIABLE)
    def read_variable(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.VAR.READ_VARIABLE, name)

    @command(CONSTS.VAR.WRITE_VARIABLE)
    def write_variable(self, name: str, value: Any) -> asyncio.Future:
        return self._invoke(CONSTS.VAR.WRITE_VARIABLE, name, value)

    # -------------------------------------------------------------------------
    # Oscilloscope & recorder
    # -------------------------------------------------------------------------

    @command(CONSTS.SCOPE.SETUP_OSCILLOSCOPE)
    def setup_oscilloscope(self, scope_id: int, variables: Sequence[str]) -> asyncio.Future:
        return self._invoke(CONSTS.SCOPE.SETUP_OSCILLOSCOPE, scope_id, variables)

    @command(CONSTS.SCOPE.GET_OSCILLOSCOPE_DATA)
    def get_oscilloscope_data(self, scope_id: int) -> asyncio.Future:
        return self._invoke(CONSTS.SCOPE.GET_OSCILLOSCOPE_DATA, scope_id)

    @command(CONSTS.REC.GET_RECORDER_LIMITS)
    def get_recorder_limits(self, rec_id: int) -> asyncio.Future:
        """baseRate_ns, buffSize, recStructSize and varStructSize of a recorder."""
        return self._invoke(CONSTS.REC.GET_RECORDER_LIMITS, rec_id)

    @command(CONSTS.REC.SETUP_RECORDER)
    def setup_recorder(
        self,
        rec_id: int,
        config: dict[str, Any],
        rec_vars: Sequence[str],
        trg_vars: Sequence[dict[str, Any]],
    ) -> asyncio.Future:
        """Configure a recorder.

        Parameters
        ----------
        rec_id : int
            Recorder index
        config : dict
            pointsTotal, pointsPreTrigger and timeDiv
        rec_vars : Sequence[str]
            Names of the recorded variables
        trg_vars : Sequence[dict]
            Trigger variables: name, trgType (mask) and trgThr
        """
        return self._invoke(CONSTS.REC.SETUP_RECORDER, rec_id, config, rec_vars, trg_vars)

    @command(CONSTS.REC.START_RECORDER)
    def start_recorder(self, rec_id: int) -> asyncio.Future:
        return self._invoke(CONSTS.REC.START_RECORDER, rec_id)

    @command(CONSTS.REC.STOP_RECORDER)
    def stop_recorder(self, rec_id: int) -> asyncio.Future:
        return self._invoke(CONSTS.REC.STOP_RECORDER, rec_id)

    @command(CONSTS.REC.GET_RECORDER_STATUS)
    def get_recorder_status(self, rec_id: int) -> asyncio.Future:
        return self._invoke(CONSTS.REC.GET_RECORDER_STATUS, rec_id)

    @command(CONSTS.REC.GET_RECORDER_DATA)
    def get_recorder_data(self, rec_id: int) -> asyncio.Future:
        return self._invoke(CONSTS.REC.GET_RECORDER_DATA, rec_id)

    # -------------------------------------------------------------------------
    # Pipes
    # -------------------------------------------------------------------------

    @command(CONSTS.PIPE.OPEN)
    def pipe_open(
        self, port: int, tx_buffer_size: int, rx_buffer_size: int
    ) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.OPEN, port, tx_buffer_size, rx_buffer_size)

    @command(CONSTS.PIPE.CLOSE)
    def pipe_close(self, port: int) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.CLOSE, port)

    @command(CONSTS.PIPE.FLUSH)
    def pipe_flush(self, port: int, timeout: int) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.FLUSH, port, timeout)

    @command(CONSTS.PIPE.SET_DEFAULT_RX_MODE)
    def pipe_set_default_rx_mode(
        self, rx_all_or_nothing: bool, rx_timeout_ms: int
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.SET_DEFAULT_RX_MODE, rx_all_or_nothing, rx_timeout_ms
        )

    @command(CONSTS.PIPE.SET_DEFAULT_STRING_MODE)
    def pipe_set_default_string_mode(self, unicode: bool) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.SET_DEFAULT_STRING_MODE, unicode)

    @command(CONSTS.PIPE.GET_RX_BYTES)
    def pipe_get_rx_bytes(self, port: int) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.GET_RX_BYTES, port)

    @command(CONSTS.PIPE.GET_TX_BYTES)
    def pipe_get_tx_bytes(self, port: int) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.GET_TX_BYTES, port)

    @command(CONSTS.PIPE.GET_TX_FREE)
    def pipe_get_tx_free(self, port: int) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.GET_TX_FREE, port)

    @command(CONSTS.PIPE.GET_RX_BUFFER_SIZE)
    def pipe_get_rx_buffer_size(self, port: int) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.GET_RX_BUFFER_SIZE, port)

    @command(CONSTS.PIPE.GET_TX_BUFFER_SIZE)
    def pipe_get_tx_buffer_size(self, port: int) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.GET_TX_BUFFER_SIZE, port)

    @command(CONSTS.PIPE.WRITE_STRING)
    def pipe_write_string(
        self,
        port: int,
        text: str,
        all_or_nothing: Optional[bool] = None,
        unicode: Optional[bool] = None,
    ) -> asyncio.Future:
        """Write a string to a pipe, None flags use the pipe defaults."""
        return self._invoke(CONSTS.PIPE.WRITE_STRING, port, text, all_or_nothing, unicode)

    @command(CONSTS.PIPE.WRITE_INT_ARRAY)
    def pipe_write_int_array(
        self,
        port: int,
        el_size: int,
        data: Sequence[int],
        all_or_nothing: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.WRITE_INT_ARRAY, port, el_size, data, all_or_nothing
        )

    @command(CONSTS.PIPE.WRITE_UINT_ARRAY)
    def pipe_write_uint_array(
        self,
        port: int,
        el_size: int,
        data: Sequence[int],
        all_or_nothing: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.WRITE_UINT_ARRAY, port, el_size, data, all_or_nothing
        )

    @command(CONSTS.PIPE.WRITE_FLOAT_ARRAY)
    def pipe_write_float_array(
        self, port: int, data: Sequence[float], all_or_nothing: Optional[bool] = None
    ) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.WRITE_FLOAT_ARRAY, port, data, all_or_nothing)

    @command(CONSTS.PIPE.WRITE_DOUBLE_ARRAY)
    def pipe_write_double_array(
        self, port: int, data: Sequence[float], all_or_nothing: Optional[bool] = None
    ) -> asyncio.Future:
        return self._invoke(CONSTS.PIPE.WRITE_DOUBLE_ARRAY, port, data, all_or_nothing)

    @command(CONSTS.PIPE.READ_STRING)
    def pipe_read_string(
        self,
        port: int,
        rx_timeout_ms: Optional[int] = None,
        chars_to_read: Optional[int] = None,
        all_or_nothing: Optional[bool] = None,
        unicode: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.READ_STRING,
            port,
            rx_timeout_ms,
            chars_to_read,
            all_or_nothing,
            unicode,
        )

    @command(CONSTS.PIPE.READ_INT_ARRAY)
    def pipe_read_int_array(
        self,
        port: int,
        el_size: int,
        rx_timeout_ms: Optional[int] = None,
        size: Optional[int] = None,
        all_or_nothing: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.READ_INT_ARRAY, port, el_size, rx_timeout_ms, size, all_or_nothing
        )

    @command(CONSTS.PIPE.READ_UINT_ARRAY)
    def pipe_read_uint_array(
        self,
        port: int,
        el_size: int,
        rx_timeout_ms: Optional[int] = None,
        size: Optional[int] = None,
        all_or_nothing: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.READ_UINT_ARRAY, port, el_size, rx_timeout_ms, size, all_or_nothing
        )

    @command(CONSTS.PIPE.READ_FLOAT_ARRAY)
    def pipe_read_float_array(
        self,
        port: int,
        rx_timeout_ms: Optional[int] = None,
        size: Optional[int] = None,
        all_or_nothing: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.READ_FLOAT_ARRAY, port, rx_timeout_ms, size, all_or_nothing
        )

    @command(CONSTS.PIPE.READ_DOUBLE_ARRAY)
    def pipe_read_double_array(
        self,
        port: int,
        rx_timeout_ms: Optional[int] = None,
        size: Optional[int] = None,
        all_or_nothing: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(
            CONSTS.PIPE.READ_DOUBLE_ARRAY, port, rx_timeout_ms, size, all_or_nothing
        )

    # -------------------------------------------------------------------------
    # Local files on the service host
    # -------------------------------------------------------------------------

    @command(CONSTS.FILE.OPEN)
    def local_file_open(self, file: str, mode: str) -> asyncio.Future:
        """Open a file on the service host, resolves with a handle."""
        return self._invoke(CONSTS.FILE.OPEN, file, mode)

    @command(CONSTS.FILE.CLOSE)
    def local_file_close(self, handle: int) -> asyncio.Future:
        return self._invoke(CONSTS.FILE.CLOSE, handle)

    @command(CONSTS.FILE.READ_STRING)
    def local_file_read_string(
        self,
        handle: int,
        chars_to_read: Optional[int] = None,
        unicode: Optional[bool] = None,
    ) -> asyncio.Future:
        return self._invoke(CONSTS.FILE.READ_STRING, handle, chars_to_read, unicode)

    @command(CONSTS.FILE.WRITE_STRING)
    def local_file_write_string(
        self,
        handle: int,
        text: str,
        unicode: Optional[bool] = None,
        size: Optional[int] = None,
    ) -> asyncio.Future:
        return self._invoke(CONSTS.FILE.WRITE_STRING, handle, text, unicode, size)

    # -------------------------------------------------------------------------
    # Service logging
    # -------------------------------------------------------------------------

    @command(CONSTS.LOG.ENABLE)
    def log_enable(self, name: str, file: Optional[str] = None) -> asyncio.Future:
        return self._invoke(CONSTS.LOG.ENABLE, name, file)

    @command(CONSTS.LOG.DISABLE)
    def log_disable(self) -> asyncio.Future:
        return self._invoke(CONSTS.LOG.DISABLE)

    @command(CONSTS.LOG.SET_PATTERN)
    def log_set_pattern(self, pattern: str) -> asyncio.Future:
        return self._invoke(CONSTS.LOG.SET_PATTERN, pattern)

    @command(CONSTS.LOG.SET_VERBOSITY)
    def log_set_verbosity(self, verbosity: int) -> asyncio.Future:
        return self._invoke(CONSTS.LOG.SET_VERBOSITY, verbosity)

    @command(CONSTS.LOG.SET_SERVICES)
    def log_set_services(self, mask: int, services: Sequence[str]) -> asyncio.Future:
        return self._invoke(CONSTS.LOG.SET_SERVICES, mask, services)
