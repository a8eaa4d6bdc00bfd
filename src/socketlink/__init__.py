"""Socketlink Python SDK - WebSocket and REST client for Socketlink."""

__version__ = "1.0.0"

from .client import SocketlinkClient
from .config import SocketlinkConfig
from .connection import SocketlinkConnection
from .errors import (
    SocketlinkConfigurationError,
    SocketlinkDataError,
    SocketlinkError,
    SocketlinkHTTPError,
    SocketlinkTimeoutError,
    SocketlinkValidationError,
    SocketlinkWebSocketError,
)
from .models import ConnectionEvent, ConnectionState, MessageSource, MessagingAction

__all__ = [
    "SocketlinkClient",
    "SocketlinkConfig",
    "SocketlinkConnection",
    "SocketlinkError",
    "SocketlinkConfigurationError",
    "SocketlinkDataError",
    "SocketlinkHTTPError",
    "SocketlinkTimeoutError",
    "SocketlinkValidationError",
    "SocketlinkWebSocketError",
    "ConnectionEvent",
    "ConnectionState",
    "MessageSource",
    "MessagingAction",
    "__version__",
]
