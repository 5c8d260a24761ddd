"""
Test doubles and builders shared across the test suite
"""
import asyncio
import json

from logstream.stream.entry import LogEntry

_CLOSE = object()


class FakeSocket:
    """Async iterable standing in for a websocket connection"""

    def __init__(self):
        self.inbox = asyncio.Queue()

    def send(self, message) -> None:
        """Queue a raw message, or an exception to raise from the stream"""
        self.inbox.put_nowait(message)

    def close(self) -> None:
        self.inbox.put_nowait(_CLOSE)

    def __aiter__(self):
        return self

    async def __anext__(self):
        message = await self.inbox.get()
        if message is _CLOSE:
            raise StopAsyncIteration
        if isinstance(message, BaseException):
            raise message
        return message


class FakeConnection:
    def __init__(self, connector: "FakeConnector"):
        self.connector = connector

    async def __aenter__(self) -> FakeSocket:
        if self.connector.refuse > 0:
            self.connector.refuse -= 1
            raise ConnectionRefusedError("connection refused")
        socket = FakeSocket()
        self.connector.sockets.append(socket)
        return socket

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeConnector:
    """Drop-in for websockets.connect that records every attempt"""

    def __init__(self, refuse: int = 0):
        self.refuse = refuse
        self.urls = []
        self.sockets = []

    def __call__(self, url: str) -> FakeConnection:
        self.urls.append(url)
        return FakeConnection(self)

    @property
    def attempts(self) -> int:
        return len(self.urls)


def make_entry(id="1", project="web", level="info", message="boot ok", **extra) -> LogEntry:
    extra.setdefault("timestamp", "2024-05-01T12:30:01.123456Z")
    return LogEntry(id=id, project=project, level=level, message=message, **extra)


def log_envelope(**data) -> str:
    payload = {
        "id": "1",
        "timestamp": "2024-05-01T12:30:01.123Z",
        "project": "web",
        "level": "info",
        "message": "boot ok",
    }
    payload.update(data)
    return json.dumps({"type": "log", "data": payload})
