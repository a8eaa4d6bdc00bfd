"""Test configuration and fixtures."""

import asyncio
import json
from typing import Any
from typing import List
from typing import Optional
from unittest.mock import AsyncMock

import httpx
import pytest

from socketlink.config import SocketlinkConfig
from socketlink.http import SocketlinkHTTPClient


@pytest.fixture
def socketlink_config():
    """SDK configuration fixture with both keys."""
    return SocketlinkConfig(
        connection_url="https://example.com",
        client_api_key="sl_client_key",
        admin_api_key="sl_admin_key",
        uid="alice",
        auto_reconnect=True,
        reconnect_interval=20,
        auto_connect=False,
        timeout=5000,
    )


@pytest.fixture
def no_key_config():
    """SDK configuration fixture without any API key."""
    return SocketlinkConfig(
        connection_url="https://example.com",
        uid="alice",
        auto_connect=False,
    )


class RecordingTransport:
    """httpx mock transport that records requests and replays one response."""

    def __init__(self, status_code: int = 200, json_body: Any = None, text: Optional[str] = None):
        self.requests: List[httpx.Request] = []
        self.status_code = status_code
        self.json_body = {"success": True} if json_body is None and text is None else json_body
        self.text = text
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recording_transport():
    """Recording httpx transport fixture."""
    return RecordingTransport()


@pytest.fixture
async def http_client(socketlink_config, recording_transport):
    """HTTP client wired to the recording transport."""
    async with SocketlinkHTTPClient(socketlink_config, transport=recording_transport.transport) as client:
        yield client


@pytest.fixture
def request_spy():
    """Stand-in for the HTTP client that records calls without any I/O."""
    spy = AsyncMock(spec=SocketlinkHTTPClient)
    spy.request.return_value = {"success": True}
    return spy


class FakeWebSocket:
    """In-memory WebSocket: frames are fed by the test, sends are recorded."""

    def __init__(self, frames=()):
        self.sent: List[str] = []
        self.closed = False
        self._frames: asyncio.Queue = asyncio.Queue()
        for frame in frames:
            self._frames.put_nowait(frame)

    def feed(self, frame) -> None:
        self._frames.put_nowait(frame)

    def drop(self) -> None:
        """Simulate the server closing the connection."""
        self._frames.put_nowait(None)

    async def send(self, data: str) -> None:
        self.sent.append(data)

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._frames.put_nowait(None)

    def __aiter__(self):
        return self

    async def __anext__(self):
        frame = await self._frames.get()
        if frame is None:
            raise StopAsyncIteration
        return frame


async def settle(rounds: int = 10) -> None:
    """Let pending tasks on the loop run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
