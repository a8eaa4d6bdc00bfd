"""WebSocket connection to Socketlink with auto-reconnect."""

from __future__ import annotations

import asyncio
import inspect
import logging
from datetime import datetime
from typing import Any
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

import websockets
from pydantic import ValidationError
from websockets.exceptions import ConnectionClosed

from socketlink.config import SocketlinkConfig
from socketlink.errors import SocketlinkConfigurationError
from socketlink.errors import SocketlinkDataError
from socketlink.errors import SocketlinkError
from socketlink.errors import SocketlinkWebSocketError
from socketlink.models import ConnectionEvent
from socketlink.models import ConnectionState
from socketlink.models import InboundEnvelope
from socketlink.models import MessageSource
from socketlink.models import OutboundEnvelope
from socketlink.utils import build_ssl_context
from socketlink.utils import https_to_wss
from socketlink.utils import utc_now

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class SocketlinkConnection:
    """Owns the live WebSocket to a Socketlink instance.

    At most one transport and at most one pending reconnect timer exist at a
    time. Inbound messages are routed by their ``source`` to the ``message``,
    ``server_broadcast`` or ``admin_broadcast`` listeners. All state changes
    happen on the event loop that called :meth:`connect`.
    """

    def __init__(self, config: SocketlinkConfig) -> None:
        """Initialize connection.

        Args:
            config: SDK configuration
        """
        self.config = config

        # Connection state
        self._websocket: Optional[Any] = None
        self._state = ConnectionState.DISCONNECTED
        self._connected_at: Optional[datetime] = None
        self._auto_reconnect = config.auto_reconnect
        self._closed_by_user = False

        # Background tasks
        self._runner_task: Optional[asyncio.Task[None]] = None
        self._reconnect_task: Optional[asyncio.Task[None]] = None

        # Event handling
        self._listeners: Dict[ConnectionEvent, List[Listener]] = {}

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def connected(self) -> bool:
        """Check if the socket is open."""
        return self._state == ConnectionState.OPEN and self._websocket is not None

    @property
    def auto_reconnect(self) -> bool:
        return self._auto_reconnect

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_task is not None and not self._reconnect_task.done()

    @property
    def websocket_url(self) -> str:
        """WebSocket URL derived from the connection URL.

        Raises:
            SocketlinkConfigurationError: Connection URL is not HTTPS
        """
        return https_to_wss(self.config.connection_url)

    # Listener registration

    def on(self, event: Union[ConnectionEvent, str], handler: Listener) -> Listener:
        """Register a listener.

        Handlers may be plain functions or coroutine functions. Arguments per
        event: ``open()``, ``message(data, rid)``, ``server_broadcast(data)``,
        ``admin_broadcast(data, rid)``, ``close()``, ``error(err)``.

        Args:
            event: Event to listen for
            handler: Listener

        Returns:
            The handler, so this can be used as a decorator helper
        """
        event = ConnectionEvent(event)
        self._listeners.setdefault(event, []).append(handler)
        return handler

    def off(
        self,
        event: Union[ConnectionEvent, str],
        handler: Optional[Listener] = None,
    ) -> None:
        """Unregister a listener.

        Args:
            event: Event
            handler: Specific handler to remove (if None, removes all)
        """
        event = ConnectionEvent(event)
        if event not in self._listeners:
            return

        if handler is None:
            self._listeners[event].clear()
        else:
            try:
                self._listeners[event].remove(handler)
            except ValueError:
                pass

    def listeners(self, event: Union[ConnectionEvent, str]) -> List[Listener]:
        return list(self._listeners.get(ConnectionEvent(event), []))

    def on_open(self, handler: Listener) -> Listener:
        return self.on(ConnectionEvent.OPEN, handler)

    def on_message(self, handler: Listener) -> Listener:
        return self.on(ConnectionEvent.MESSAGE, handler)

    def on_server_broadcast(self, handler: Listener) -> Listener:
        return self.on(ConnectionEvent.SERVER_BROADCAST, handler)

    def on_admin_broadcast(self, handler: Listener) -> Listener:
        return self.on(ConnectionEvent.ADMIN_BROADCAST, handler)

    def on_close(self, handler: Listener) -> Listener:
        return self.on(ConnectionEvent.CLOSE, handler)

    def on_error(self, handler: Listener) -> Listener:
        return self.on(ConnectionEvent.ERROR, handler)

    # Lifecycle

    def connect(self) -> None:
        """Start connecting to the WebSocket server.

        Returns immediately; the handshake runs in a background task and its
        outcome is reported through the ``open``, ``error`` and ``close``
        listeners. Does nothing while a connection is open or being opened.

        Raises:
            SocketlinkConfigurationError: Client API key missing, connection
                URL not HTTPS, or no running event loop
        """
        if not self.config.client_api_key:
            raise SocketlinkConfigurationError("client_api_key is required")

        if self._state in (ConnectionState.OPEN, ConnectionState.CONNECTING):
            logger.debug(f"connect() ignored, connection is {self._state.value}")
            return

        uri = self.websocket_url

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise SocketlinkConfigurationError(
                "connect() must be called from a running event loop"
            ) from None

        # A manual connect supersedes a pending reconnect
        self._cancel_reconnect()

        self._closed_by_user = False
        self._state = ConnectionState.CONNECTING
        self._runner_task = loop.create_task(self._run(uri))

    async def close(self) -> None:
        """Close the connection and stop reconnecting.

        Disables auto-reconnect for good, cancels a pending reconnect timer
        and an in-flight handshake, and closes the socket. :meth:`connect`
        may still be called afterwards.
        """
        self._auto_reconnect = False
        self._closed_by_user = True
        self._cancel_reconnect()

        runner = self._runner_task
        current = asyncio.current_task()

        if (
            self._state == ConnectionState.CONNECTING
            and runner
            and runner is not current
            and not runner.done()
        ):
            runner.cancel()
            # Collects the runner's cancellation; a cancel of this task still propagates
            await asyncio.gather(runner, return_exceptions=True)
            await self._handle_close()

        elif self._websocket is not None:
            try:
                await self._websocket.close()
            except Exception as e:
                logger.warning(f"Error closing WebSocket: {e}")

            # Let the reader emit the close event before returning
            if runner and runner is not current and not runner.done():
                await runner

        self._state = ConnectionState.CLOSED
        logger.info("WebSocket closed by client")

    async def send(self, message: str, rid: Optional[str] = None) -> bool:
        """Send a message over the live connection.

        Fire-and-forget: nothing is queued or retried. When the socket is not
        open a warning is logged and the message is dropped.

        Args:
            message: Message text
            rid: Target room

        Returns:
            True if a frame was written
        """
        if not self.connected:
            logger.warning("Cannot send message, socket not open")
            return False

        envelope = OutboundEnvelope(message=message, rid=rid)
        try:
            await self._websocket.send(envelope.model_dump_json(exclude_none=True))
        except ConnectionClosed as e:
            logger.warning(f"Cannot send message, socket closed while sending: {e}")
            return False

        logger.debug(f"Sent message to room {rid}")
        return True

    def get_status(self) -> Dict[str, Any]:
        """Get connection status."""
        return {
            "state": self._state.value,
            "connected": self.connected,
            "connected_at": self._connected_at.isoformat() if self._connected_at else None,
            "auto_reconnect": self._auto_reconnect,
            "reconnect_pending": self.reconnect_pending,
        }

    # Internals

    async def _open_transport(self, uri: str) -> Any:
        """Open the WebSocket with the handshake headers."""
        headers = {
            "api-key": self.config.client_api_key,
            "uid": self.config.uid,
        }
        connect_kwargs: Dict[str, Any] = {}
        ssl_context = build_ssl_context(self.config.reject_unauthorized)
        if ssl_context is not None:
            connect_kwargs["ssl"] = ssl_context

        try:
            return await websockets.connect(uri, additional_headers=headers, **connect_kwargs)
        except TypeError as e:
            if "additional_headers" not in str(e):
                raise
            # websockets < 14 legacy client
            logger.debug("Falling back to extra_headers for the WebSocket handshake")
            return await websockets.connect(uri, extra_headers=headers, **connect_kwargs)

    async def _run(self, uri: str) -> None:
        """Open the transport and read frames until it closes."""
        logger.info(f"Connecting to WebSocket: {uri}")
        try:
            websocket = await self._open_transport(uri)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Failed to connect to WebSocket: {e}")
            self._state = ConnectionState.DISCONNECTED
            await self._emit(
                ConnectionEvent.ERROR,
                SocketlinkWebSocketError(f"Connection failed: {e}"),
            )
            await self._handle_close()
            return

        self._websocket = websocket
        self._state = ConnectionState.OPEN
        self._connected_at = utc_now()
        logger.info("WebSocket connected successfully")
        await self._emit(ConnectionEvent.OPEN)

        try:
            async for frame in websocket:
                await self._handle_frame(frame)
        except ConnectionClosed as e:
            close_frame = getattr(e, "rcvd", None)
            code = getattr(close_frame, "code", None)
            reason = getattr(close_frame, "reason", None)
            logger.warning(f"WebSocket connection lost: {e}")
            await self._emit(
                ConnectionEvent.ERROR,
                SocketlinkWebSocketError("Connection lost", code=code, reason=reason),
            )
        finally:
            self._websocket = None
            self._connected_at = None

        await self._handle_close()

    async def _handle_frame(self, frame: Union[str, bytes]) -> None:
        """Parse one inbound frame and dispatch it by source."""
        try:
            envelope = InboundEnvelope.model_validate_json(frame)
        except ValidationError as e:
            logger.warning(f"Dropping malformed frame: {e.error_count()} validation error(s)")
            await self._emit(
                ConnectionEvent.ERROR,
                SocketlinkDataError("Malformed inbound frame", data=frame),
            )
            return

        source = envelope.message_source
        if source == MessageSource.USER:
            await self._emit(ConnectionEvent.MESSAGE, envelope.data, envelope.rid)
        elif source == MessageSource.SERVER:
            await self._emit(ConnectionEvent.SERVER_BROADCAST, envelope.data)
        elif source == MessageSource.ADMIN:
            await self._emit(ConnectionEvent.ADMIN_BROADCAST, envelope.data, envelope.rid)
        else:
            logger.debug(f"Ignoring message with unknown source: {envelope.source}")

    async def _handle_close(self) -> None:
        """Record the close, notify listeners and schedule a reconnect."""
        self._state = (
            ConnectionState.CLOSED if self._closed_by_user else ConnectionState.DISCONNECTED
        )
        logger.info("WebSocket disconnected")
        await self._emit(ConnectionEvent.CLOSE)

        if self._auto_reconnect:
            self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        if self.reconnect_pending:
            return

        delay = self.config.reconnect_interval_seconds
        logger.info(f"Reconnecting in {delay:.1f}s")
        self._reconnect_task = asyncio.get_running_loop().create_task(
            self._reconnect_after(delay)
        )

    async def _reconnect_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self._reconnect_task = None

        try:
            self.connect()
        except SocketlinkError as e:
            logger.error(f"Reconnect failed: {e}")
            await self._emit(ConnectionEvent.ERROR, e)

    def _cancel_reconnect(self) -> None:
        task = self._reconnect_task
        self._reconnect_task = None
        if task and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def _emit(self, event: ConnectionEvent, *args: Any) -> None:
        """Call every listener of an event.

        A failing listener is logged and does not stop the others.
        """
        for handler in list(self._listeners.get(event, [])):
            try:
                result = handler(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Listener error for {event.value}: {e}")
