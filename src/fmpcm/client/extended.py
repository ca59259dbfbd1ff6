# -*- coding: utf-8 -*-
"""
Extended capability: procedures and events of the full FreeMASTER application.

The FreeMASTER Lite service only answers the base procedures. Scripts and
control pages running against the full application call `activate()` once to
get an `ExtendedClient`, which adds the extra procedures and the four server
events. Activation is a latch: it cannot be undone within a session.

```python
ext = pcm.activate()
ext.on_variable_changed = lambda name, sub_id, value: print(name, value)
await ext.enable_events(True)
await ext.subscribe_variable("speed", 100)
```
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Callable, Optional

import simplejson as json
from loguru import logger

from fmpcm.types import (
    CONSTS,
    EVENTS,
    EXTENDED_EVENTS,
    CapabilityLatchError,
    CapabilityState,
)

from .client import Address, BaseClient, command

if TYPE_CHECKING:
    from .session import Session

EventHandler = Callable[..., Any]


def default_event_handler(event: str) -> EventHandler:
    """Logging stub used for event slots the user did not assign."""

    def _log_event(*args: Any) -> None:
        logger.info(
            "FreeMASTER Event received: {}({})",
            event,
            ", ".join(json.dumps(arg, default=repr) for arg in args),
        )

    _log_event.__qualname__ = f"default_event_handler.<{event}>"
    _log_event._default_for = event
    return _log_event


def is_default_event_handler(handler: Any) -> bool:
    return getattr(handler, "_default_for", None) is not None


class CapabilityExtender:
    """Owns the BASE -> EXTENDED latch of one session.

    On the first activation the four event names are registered with the
    session's JSON-RPC peer. Each registration routes to whatever handler the
    session's slot holds when the notification arrives, so handlers can be
    swapped at any time.
    """

    def __init__(self, session: Session):
        self._session = session
        self.state = CapabilityState()
        self._client: Optional[ExtendedClient] = None

    @property
    def extended(self) -> bool:
        return self.state.extended

    def activate(self, enable: bool = True) -> Optional[ExtendedClient]:
        if not enable:
            if self.state.extended:
                raise CapabilityLatchError(
                    "Can't disable extended features after enabled once"
                )
            return None

        if self._client is not None:
            return self._client

        for event in EXTENDED_EVENTS:
            self._session.peer.dispatch(event, self._router(event))
        self.state.extend()
        self._client = ExtendedClient(self._session)
        logger.info("Extended features activated.")
        return self._client

    def _router(self, event: str) -> Callable[[list], Any]:
        session = self._session

        def route(params: list) -> Any:
            logger.trace("*NOTIF* (client<-): {}{}", event, tuple(params))
            return session.event_handlers[event](*params)

        return route


class _HandlerSlot:
    """Property exposing one of the session's event handler slots.

    Assigning None puts the logging stub back.
    """

    def __init__(self, event: str):
        self.event = event

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.session.event_handlers[self.event]

    def __set__(self, obj, handler: Optional[EventHandler]):
        if handler is None:
            handler = default_event_handler(self.event)
        elif not callable(handler):
            raise TypeError(f"{self.name} handler must be callable, got {handler!r}")
        obj.session.event_handlers[self.event] = handler


class ExtendedClient(BaseClient):
    """Base procedures plus those only the full FreeMASTER application offers.

    Only obtainable from `activate()`. Events are delivered to the handler
    properties once `enable_events(True)` has been called.
    """

    on_board_detected = _HandlerSlot(EVENTS.BOARD_DETECTED)
    on_comm_port_state_changed = _HandlerSlot(EVENTS.COMM_PORT_STATE_CHANGED)
    on_variable_changed = _HandlerSlot(EVENTS.VARIABLE_CHANGED)
    on_recorder_done = _HandlerSlot(EVENTS.RECORDER_DONE)

    @command(CONSTS.EXT.START_STOP_COMM)
    def start_stop_comm(self, start: bool) -> asyncio.Future:
        """Open or close the communication port of the current project."""
        return self._invoke(CONSTS.EXT.START_STOP_COMM, start)

    @command(CONSTS.EXT.ENABLE_EVENTS)
    def enable_events(self, enable: bool) -> asyncio.Future:
        """Switch server event notifications on or off."""
        return self._invoke(CONSTS.EXT.ENABLE_EVENTS, enable)

    @command(CONSTS.EXT.SUBSCRIBE_VARIABLE)
    def subscribe_variable(self, name: str, interval: int) -> asyncio.Future:
        """Watch a variable for changes.

        Parameters
        ----------
        name : str
            Project variable name
        interval : int
            Sampling period in milliseconds

        Returns
        -------
        asyncio.Future
            Resolves with the subscription id passed to `on_variable_changed`.
        """
        return self._invoke(CONSTS.EXT.SUBSCRIBE_VARIABLE, name, interval)

    @command(CONSTS.EXT.UNSUBSCRIBE_VARIABLE)
    def unsubscribe_variable(self, name_or_id: Any) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.UNSUBSCRIBE_VARIABLE, name_or_id)

    @command(CONSTS.EXT.DEFINE_SYMBOL)
    def define_symbol(
        self, name: str, address: Address, type: str, size: int
    ) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.DEFINE_SYMBOL, name, address, type, size)

    @command(CONSTS.EXT.GET_STRUCT_MEMBER_INFO)
    def get_struct_member_info(self, type: str, member: str) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.GET_STRUCT_MEMBER_INFO, type, member)

    @command(CONSTS.EXT.DELETE_ALL_SCRIPT_SYMBOLS)
    def delete_all_script_symbols(self) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.DELETE_ALL_SCRIPT_SYMBOLS)

    @command(CONSTS.EXT.RUN_STIMULATORS)
    def run_stimulators(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.RUN_STIMULATORS, name)

    @command(CONSTS.EXT.STOP_STIMULATORS)
    def stop_stimulators(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.STOP_STIMULATORS, name)

    @command(CONSTS.EXT.EXIT)
    def exit(self) -> asyncio.Future:
        """Exit the FreeMASTER application."""
        return self._invoke(CONSTS.EXT.EXIT)

    @command(CONSTS.EXT.ACTIVATE_WINDOW)
    def activate_window(self) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.ACTIVATE_WINDOW)

    @command(CONSTS.EXT.SELECT_ITEM)
    def select_item(self, name: str, tab: str) -> asyncio.Future:
        """Select a project tree item and a view tab (e.g. "osc")."""
        return self._invoke(CONSTS.EXT.SELECT_ITEM, name, tab)

    @command(CONSTS.EXT.OPEN_PROJECT)
    def open_project(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.OPEN_PROJECT, name)

    @command(CONSTS.EXT.IS_BOARD_WITH_ACTIVE_CONTENT)
    def is_board_with_active_content(self) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.IS_BOARD_WITH_ACTIVE_CONTENT)

    @command(CONSTS.EXT.ENUM_HREF_LINKS)
    def enum_href_links(self, index: int) -> asyncio.Future:
        """Active content hyperlink by index, fails past the last one."""
        return self._invoke(CONSTS.EXT.ENUM_HREF_LINKS, index)

    @command(CONSTS.EXT.ENUM_PROJECT_FILES)
    def enum_project_files(self, index: int) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.ENUM_PROJECT_FILES, index)

    @command(CONSTS.EXT.SET_PAGE_RELOAD_ON_PORT_OPEN)
    def set_page_reload_on_port_open(self, value: bool) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.SET_PAGE_RELOAD_ON_PORT_OPEN, value)

    @command(CONSTS.EXT.GET_PAGE_RELOAD_ON_PORT_OPEN)
    def get_page_reload_on_port_open(self) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.GET_PAGE_RELOAD_ON_PORT_OPEN)

    @command(CONSTS.EXT.PIPE_SET_DEFAULT_TX_MODE)
    def pipe_set_default_tx_mode(self, tx_all_or_nothing: bool) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.PIPE_SET_DEFAULT_TX_MODE, tx_all_or_nothing)

    @command(CONSTS.EXT.GET_ADDRESS_INFO)
    def get_address_info(self, addr: Address, size: int) -> asyncio.Future:
        """Symbol information for an address range."""
        return self._invoke(CONSTS.EXT.GET_ADDRESS_INFO, addr, size)

    @command(CONSTS.EXT.DEFINE_OSCILLOSCOPE)
    def define_oscilloscope(self, name: str, def_str: str) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.DEFINE_OSCILLOSCOPE, name, def_str)

    @command(CONSTS.EXT.DEFINE_RECORDER)
    def define_recorder(self, name: str, def_str: str) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.DEFINE_RECORDER, name, def_str)

    @command(CONSTS.EXT.SEND_COMMAND)
    def send_command(self, send: str, wait: Optional[bool] = None) -> asyncio.Future:
        """Send an application command to the board, optionally waiting for its result."""
        return self._invoke(CONSTS.EXT.SEND_COMMAND, send, wait)

    @command(CONSTS.EXT.GET_CURRENT_RECORDER_STATE)
    def get_current_recorder_state(self) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.GET_CURRENT_RECORDER_STATE)

    @command(CONSTS.EXT.GET_CURRENT_RECORDER_DATA)
    def get_current_recorder_data(self) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.GET_CURRENT_RECORDER_DATA)

    @command(CONSTS.EXT.GET_CURRENT_RECORDER_SERIES)
    def get_current_recorder_series(self, name: str) -> asyncio.Future:
        return self._invoke(CONSTS.EXT.GET_CURRENT_RECORDER_SERIES, name)
