"""Pydantic models for Socketlink wire messages and API payloads."""

from __future__ import annotations

from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from socketlink.utils import now_ms


class SocketlinkBaseModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        # Use enum values instead of enum objects
        use_enum_values=True,
        # Allow population by field name and alias
        populate_by_name=True,
        # The backend may add fields we do not know about
        extra="ignore",
    )


# ============================================================================
# Enums
# ============================================================================

class MessageSource(str, Enum):
    """Origin of an inbound WebSocket message."""
    USER = "user"
    SERVER = "server"
    ADMIN = "admin"


class MessagingAction(str, Enum):
    """Action accepted by the messaging toggle endpoints."""
    ENABLE = "enable"
    DISABLE = "disable"


class ConnectionState(str, Enum):
    """Live connection state."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class ConnectionEvent(str, Enum):
    """Events a listener can register for."""
    OPEN = "open"
    MESSAGE = "message"
    SERVER_BROADCAST = "server_broadcast"
    ADMIN_BROADCAST = "admin_broadcast"
    CLOSE = "close"
    ERROR = "error"


# ============================================================================
# WebSocket Envelopes
# ============================================================================

class InboundEnvelope(SocketlinkBaseModel):
    """Message received over the live connection."""
    source: str = Field(..., description="Who produced the message")
    data: Any = Field(None, description="Message payload")
    rid: Optional[str] = Field(None, description="Room the message belongs to")

    @property
    def message_source(self) -> Optional[MessageSource]:
        """Known source of the message, None for sources this SDK does not handle."""
        try:
            return MessageSource(self.source)
        except ValueError:
            return None


class OutboundEnvelope(SocketlinkBaseModel):
    """Message sent over the live connection.

    The outbound payload lives under ``message`` while inbound envelopes
    carry it under ``data``.
    """
    message: str = Field(..., description="Message text")
    rid: Optional[str] = Field(None, description="Target room")
    timestamp: int = Field(default_factory=now_ms, description="Epoch milliseconds at send time")


# ============================================================================
# REST Payloads
# ============================================================================

class RoomUsers(SocketlinkBaseModel):
    """Room and users pair used by ban and messaging endpoints."""
    rid: str = Field(..., description="Room ID, or 'global' for the whole server")
    uid: List[str] = Field(..., description="User IDs")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for a request body."""
        return self.model_dump()
