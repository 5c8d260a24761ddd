"""
Connection Manager Module - Live websocket subscription with automatic recovery

Handles:
- Subscribing to the log stream endpoint
- Connectivity status reporting
- Fixed-delay reconnect after close or transport errors
- Decoding inbound messages and dropping malformed ones
- Deterministic teardown (no reconnect timers fire after close)
"""
import asyncio
import logging
from typing import Callable, Optional

import websockets
from websockets.exceptions import WebSocketException

from .entry import DecodeError, LogEntry, decode_envelope

RECONNECT_DELAY = 2.0  # seconds


def build_stream_url(host: str, secure: bool = False) -> str:
    """Subscription endpoint for a host, e.g. ws://localhost:3000/ws?mode=subscribe"""
    scheme = "wss" if secure else "ws"
    return f"{scheme}://{host}/ws?mode=subscribe"


class ConnectionManager:
    """Owns one live subscription to the log stream"""

    def __init__(
        self,
        url: str,
        on_entry: Callable[[LogEntry], None],
        on_status: Optional[Callable[[bool], None]] = None,
        is_paused: Callable[[], bool] = lambda: False,
        reconnect_delay: float = RECONNECT_DELAY,
        connector: Optional[Callable] = None,
    ):
        """
        Initialize the connection manager

        Args:
            url: Websocket endpoint to subscribe to
            on_entry: Called with every decoded log entry
            on_status: Called with the new status whenever connectivity changes
            is_paused: Pause gate, read when each message arrives
            reconnect_delay: Seconds to wait before reconnecting
            connector: Factory returning an async context manager that yields
                an async iterable of messages (default: websockets.connect)
        """
        self.url = url
        self.on_entry = on_entry
        self.on_status = on_status
        self.is_paused = is_paused
        self.reconnect_delay = reconnect_delay
        self.connector = connector or websockets.connect
        self.logger = logging.getLogger(__name__)

        self.connected = False
        self.closed = False

        # Diagnostics
        self.attempts = 0
        self.decode_failures = 0
        self.discarded = 0

        self._task: Optional[asyncio.Task] = None
        self._reconnect_handle: Optional[asyncio.TimerHandle] = None

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_handle is not None

    def start(self) -> None:
        """Open the subscription on the running event loop"""
        if self.closed or self._task is not None:
            return
        self._spawn()

    def _spawn(self) -> None:
        self.attempts += 1
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        """Connection task: subscribe, pump messages, then schedule a reconnect"""
        self.logger.info(f"Connecting to {self.url} (attempt {self.attempts})")
        try:
            async with self.connector(self.url) as websocket:
                self._set_connected(True)
                self.logger.info(f"Connected to {self.url}")
                async for raw in websocket:
                    self.handle_message(raw)
            self.logger.warning("Log stream closed by server")
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            self.logger.warning(f"Log stream transport error: {e}")
        except Exception as e:
            self.logger.error(f"Log stream task failed: {e}", exc_info=True)
        finally:
            # Also runs on cancellation; closed suppresses the reconnect then
            self._set_connected(False)
            self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        if self.closed or self._reconnect_handle is not None:
            return

        self.logger.info(f"Reconnecting in {self.reconnect_delay:.1f}s")
        loop = asyncio.get_running_loop()
        self._reconnect_handle = loop.call_later(self.reconnect_delay, self._reconnect)

    def _reconnect(self) -> None:
        self._reconnect_handle = None
        # The timer may fire after teardown began
        if self.closed:
            return
        self._spawn()

    def _set_connected(self, connected: bool) -> None:
        if connected == self.connected:
            return
        self.connected = connected
        if self.on_status:
            self.on_status(connected)

    def handle_message(self, raw) -> None:
        """
        Process one inbound message. Never raises.

        Messages arriving while paused are discarded, not queued. Malformed
        payloads are logged and dropped; the stream carries on.
        """
        if self.is_paused():
            self.discarded += 1
            return

        try:
            envelope = decode_envelope(raw)
        except DecodeError as e:
            self.decode_failures += 1
            self.logger.warning(f"Dropping malformed message: {e}")
            return

        if envelope.type != "log":
            self.logger.debug(f"Ignoring envelope of type {envelope.type!r}")
            return

        self.on_entry(envelope.data)

    async def close(self) -> None:
        """Tear down the subscription and cancel any pending reconnect"""
        if self.closed:
            return
        self.closed = True

        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
            self._reconnect_handle = None

        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        self._set_connected(False)
        self.logger.info("Log stream connection closed")
