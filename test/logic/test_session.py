"""Tests for Session lifecycle forwarding and the basic call scenario."""

import pytest
import pytest_asyncio
from loguru import logger

import fmpcm.util
from fmpcm.client import Session
from fmpcm.rpc import MockTransport
from fmpcm.types import CallError, ConnectionEvent, SessionClosedError
from fmpcm.util import TEST_LOGLEVEL


class Recorder:
    def __init__(self):
        self.events = []

    def on_open(self, event):
        self.events.append(("open", event))

    def on_close(self, event):
        self.events.append(("close", event))

    def on_error(self, exc):
        self.events.append(("error", exc))

    def kinds(self):
        return [kind for kind, _ in self.events]


class TestSession:
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

    @pytest.fixture
    def recorder(self):
        return Recorder()

    @pytest_asyncio.fixture
    async def mock(self):
        return MockTransport()

    @pytest_asyncio.fixture
    async def session(self, mock, recorder):
        session = Session(
            "mock:41000",
            recorder.on_open,
            recorder.on_close,
            recorder.on_error,
            transport=mock,
        )
        yield session
        await session.close()

    def test_url(self, session):
        assert session.url == "ws://mock:41000"

    def test_bad_address(self):
        with pytest.raises(ValueError):
            Session("http://localhost:41000", transport=MockTransport())

    @pytest.mark.asyncio
    async def test_scenario(self, session, mock, recorder):
        await session.open()
        assert recorder.kinds() == ["open"]
        assert session.is_open()
        pcm = session.client

        fut = pcm.get_app_version()
        mock.reply_last({"success": True, "data": "3.2"})
        assert await fut == "3.2"

        fut = pcm.get_comm_port_info("bad")
        mock.reply_last({"success": False, "error": {"message": "Port not found"}})
        with pytest.raises(CallError) as exc_info:
            await fut
        assert exc_info.value.error == {"message": "Port not found"}

        assert [req["method"] for req in mock.sent_requests()] == [
            "GetAppVersion",
            "GetCommPortInfo",
        ]

    @pytest.mark.asyncio
    async def test_lifecycle_forwarded_once_each(self, session, mock, recorder):
        await session.open()
        err = ConnectionResetError("reset by peer")
        mock.simulate_error(err)
        mock.simulate_close(1006, "abnormal")

        assert recorder.kinds() == ["open", "error", "close"]
        _, open_event = recorder.events[0]
        assert isinstance(open_event, ConnectionEvent)
        assert open_event.type == "open"
        assert open_event.url == mock.url
        assert recorder.events[1][1] is err
        _, close_event = recorder.events[2]
        assert close_event.type == "close"
        assert close_event.code == 1006
        assert close_event.reason == "abnormal"
        assert session.closed
        assert not session.is_open()

    @pytest.mark.asyncio
    async def test_callbacks_bound_late(self, session, mock):
        seen = []
        session.on_open = lambda event: seen.append(event.type)
        await session.open()
        assert seen == ["open"]

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_break_close(self, session, mock):
        def explode(event):
            raise RuntimeError("on_close failed")

        session.on_close = explode
        await session.open()
        mock.simulate_close()
        assert session.closed

    @pytest.mark.asyncio
    async def test_close(self, session, mock, recorder):
        await session.open()
        await session.close()
        assert recorder.kinds() == ["open", "close"]
        assert recorder.events[1][1].code == 1000

        # idempotent
        await session.close()
        assert recorder.kinds() == ["open", "close"]

    @pytest.mark.asyncio
    async def test_reopen_after_close(self, session):
        await session.open()
        await session.close()
        with pytest.raises(SessionClosedError):
            await session.open()

    @pytest.mark.asyncio
    async def test_open_twice(self, session, recorder):
        await session.open()
        await session.open()
        assert recorder.kinds() == ["open"]

    @pytest.mark.asyncio
    async def test_context_manager(self, mock, recorder):
        async with Session(
            "mock:41000", recorder.on_open, recorder.on_close, transport=mock
        ) as session:
            assert session.is_open()
            fut = session.client.is_comm_port_open()
            mock.reply_last({"success": True, "data": False})
            assert await fut is False
        assert session.closed
        assert recorder.kinds() == ["open", "close"]
