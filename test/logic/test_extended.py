"""Tests for capability activation and server event routing."""

import asyncio

import pytest
import pytest_asyncio
from loguru import logger

import fmpcm.util
from fmpcm.client import (
    BaseClient,
    ExtendedClient,
    Session,
    is_default_event_handler,
)
from fmpcm.rpc import MockTransport
from fmpcm.types import (
    CAPABILITY,
    EVENTS,
    EXTENDED_EVENTS,
    CapabilityLatchError,
    CommsError,
    FatalError,
)
from fmpcm.util import TEST_LOGLEVEL


class TestCapabilityExtender:
    @pytest.fixture(autouse=True, scope="class")
    def client_log(self):
        fmpcm.util.start_client_log(
            log_level=TEST_LOGLEVEL, log_to_stdout=True, log_to_file=False
        )
        yield
        fmpcm.util.shutdown_client_log()

    @pytest.fixture(autouse=True)
    def log(self, request):
        logger.warning("STARTED Test '{}'".format(request.node.originalname))

        def fin():
            logger.warning("COMPLETED Test '{}' \n".format(request.node.originalname))

        request.addfinalizer(fin)

    @pytest_asyncio.fixture
    async def mock(self):
        return MockTransport()

    @pytest_asyncio.fixture
    async def session(self, mock):
        session = Session("mock:41000", transport=mock)
        await session.open()
        yield session
        await session.close()

    @pytest.mark.asyncio
    async def test_base_client_has_no_extended_surface(self, session):
        pcm = session.client
        assert isinstance(pcm, BaseClient)
        assert not isinstance(pcm, ExtendedClient)
        assert not hasattr(pcm, "enable_events")
        assert not hasattr(pcm, "on_variable_changed")
        assert session.peer.registered() == []

    @pytest.mark.asyncio
    async def test_activate(self, session):
        ext = session.client.activate()
        assert isinstance(ext, ExtendedClient)
        assert ext.capability.state == CAPABILITY.EXTENDED
        assert sorted(session.peer.registered()) == sorted(EXTENDED_EVENTS)

    @pytest.mark.asyncio
    async def test_double_activation_registers_once(self, session, mock):
        ext = session.client.activate(True)
        assert session.client.activate(True) is ext
        assert ext.activate() is ext

        calls = []
        ext.on_variable_changed = lambda *args: calls.append(args)
        mock.notify(EVENTS.VARIABLE_CHANGED, "x", 1, 2)
        assert calls == [("x", 1, 2)]

    @pytest.mark.asyncio
    async def test_deactivate_before_activation_is_noop(self, session):
        assert session.client.activate(False) is None
        assert session.extender.state.state == CAPABILITY.BASE
        assert session.peer.registered() == []

        # still activatable afterwards
        assert isinstance(session.client.activate(), ExtendedClient)

    @pytest.mark.asyncio
    async def test_deactivate_after_activation_raises(self, session, mock):
        ext = session.client.activate()
        with pytest.raises(CapabilityLatchError) as exc_info:
            session.client.activate(False)
        assert isinstance(exc_info.value, FatalError)
        assert not isinstance(exc_info.value, CommsError)

        # state unchanged, events still routed
        assert session.extender.extended
        assert session.client.activate() is ext
        calls = []
        ext.on_board_detected = lambda: calls.append("detected")
        mock.notify(EVENTS.BOARD_DETECTED)
        assert calls == ["detected"]

    @pytest.mark.asyncio
    async def test_handler_reassignment(self, session, mock):
        ext = session.client.activate()
        first, second = [], []
        ext.on_variable_changed = lambda name, sub_id, value: first.append(value)
        mock.notify(EVENTS.VARIABLE_CHANGED, "speed", 7, 100)

        ext.on_variable_changed = lambda name, sub_id, value: second.append(value)
        mock.notify(EVENTS.VARIABLE_CHANGED, "speed", 7, 200)

        assert first == [100]
        assert second == [200]

    @pytest.mark.asyncio
    async def test_handler_set_through_session_slot(self, session, mock):
        ext = session.client.activate()
        calls = []
        handler = calls.append
        session.event_handlers[EVENTS.COMM_PORT_STATE_CHANGED] = handler
        assert ext.on_comm_port_state_changed is handler
        mock.notify(EVENTS.COMM_PORT_STATE_CHANGED, True)
        assert calls == [True]

    @pytest.mark.asyncio
    async def test_recorder_done_without_arguments(self, session, mock):
        ext = session.client.activate()
        calls = []
        ext.on_recorder_done = lambda *args: calls.append(args)
        mock.notify(EVENTS.RECORDER_DONE)
        assert calls == [()]

    @pytest.mark.asyncio
    async def test_events_before_activation_ignored(self, session, mock):
        calls = []
        session.event_handlers[EVENTS.RECORDER_DONE] = lambda: calls.append(1)
        mock.notify(EVENTS.RECORDER_DONE)
        assert calls == []

        session.client.activate()
        mock.notify(EVENTS.RECORDER_DONE)
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_default_handlers_log(self, session, mock):
        ext = session.client.activate()
        for event in EXTENDED_EVENTS:
            assert is_default_event_handler(session.event_handlers[event])

        messages = []
        sink_id = logger.add(messages.append, format="{message}", level="INFO")
        try:
            mock.notify(EVENTS.VARIABLE_CHANGED, "x", 1, 2)
            mock.notify(EVENTS.BOARD_DETECTED)
        finally:
            logger.remove(sink_id)

        text = "".join(messages)
        assert 'FreeMASTER Event received: OnVariableChanged("x", 1, 2)' in text
        assert "FreeMASTER Event received: OnBoardDetected()" in text
        assert is_default_event_handler(ext.on_variable_changed)

    @pytest.mark.asyncio
    async def test_none_restores_default_handler(self, session):
        ext = session.client.activate()
        ext.on_recorder_done = lambda: None
        assert not is_default_event_handler(ext.on_recorder_done)
        ext.on_recorder_done = None
        assert is_default_event_handler(ext.on_recorder_done)

    @pytest.mark.asyncio
    async def test_non_callable_handler_rejected(self, session):
        ext = session.client.activate()
        with pytest.raises(TypeError):
            ext.on_board_detected = "not a function"

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_routing(self, session, mock):
        ext = session.client.activate()
        calls = []

        def handler(name, sub_id, value):
            calls.append(value)
            if value == 1:
                raise RuntimeError("handler failed")

        ext.on_variable_changed = handler
        mock.notify(EVENTS.VARIABLE_CHANGED, "a", 1, 1)
        mock.notify(EVENTS.VARIABLE_CHANGED, "a", 1, 2)
        assert calls == [1, 2]

    @pytest.mark.asyncio
    async def test_async_handler(self, session, mock):
        ext = session.client.activate()
        done = asyncio.Event()
        seen = []

        async def handler():
            seen.append("done")
            done.set()

        ext.on_recorder_done = handler
        mock.notify(EVENTS.RECORDER_DONE)
        await asyncio.wait_for(done.wait(), 1)
        assert seen == ["done"]

    @pytest.mark.asyncio
    async def test_extended_calls(self, session, mock):
        ext = session.client.activate()

        fut = ext.subscribe_variable("speed", 100)
        req = mock.last_request()
        assert req["method"] == "SubscribeVariable"
        assert req["params"] == ["speed", 100]
        mock.reply_last({"success": True, "data": 5})
        assert await fut == 5

        ext.enable_events(True)
        assert mock.last_request()["params"] == [True]

        ext.send_command("reset")
        assert mock.last_request()["params"] == ["reset", None]

        ext.get_current_recorder_data()
        assert "params" not in mock.last_request()

        # base procedures are still there
        ext.get_app_version()
        assert mock.last_request()["method"] == "GetAppVersion"


class TestEventHandlerConfiguration:
    @pytest.mark.asyncio
    async def test_initial_handlers(self):
        mock = MockTransport()
        calls = []
        session = Session(
            "mock:41000",
            event_handlers={EVENTS.BOARD_DETECTED: lambda: calls.append("board")},
            transport=mock,
        )
        await session.open()
        assert is_default_event_handler(session.event_handlers[EVENTS.RECORDER_DONE])
        assert not is_default_event_handler(
            session.event_handlers[EVENTS.BOARD_DETECTED]
        )

        session.client.activate()
        mock.notify(EVENTS.BOARD_DETECTED)
        assert calls == ["board"]
        await session.close()

    def test_unknown_event_rejected(self):
        with pytest.raises(ValueError):
            Session(
                "mock:41000",
                event_handlers={"OnSomethingElse": print},
                transport=MockTransport(),
            )

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            Session(
                "mock:41000",
                event_handlers={EVENTS.RECORDER_DONE: 42},
                transport=MockTransport(),
            )
