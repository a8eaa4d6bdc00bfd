"""Server-wide administration API."""

from __future__ import annotations

from typing import Any
from typing import Union

from socketlink.models import MessagingAction
from socketlink.rest.base import BaseAPI
from socketlink.routes import Route


class ServerAPI(BaseAPI):
    """Metrics, storage and server-level messaging controls."""

    async def get_usage_metrics(self) -> Any:
        """Get usage metrics of the Socketlink instance.

        Returns:
            Metrics as reported by the server

        Raises:
            SocketlinkConfigurationError: Admin API key missing
            SocketlinkHTTPError: Request failed
        """
        self._require_admin_key()
        return await self._call(Route.GET_METRICS)

    async def sync_mysql(self) -> Any:
        """Trigger a sync of the server's local store to MySQL."""
        self._require_admin_key()
        return await self._call(Route.MYSQL_SYNC)

    async def broadcast_message_to_everyone(self, message: str) -> Any:
        """Broadcast a message to every connected user.

        Args:
            message: Message text

        Raises:
            SocketlinkValidationError: Message is empty or not a string
        """
        self._require_admin_key()
        message = self._require_string(message, "message")
        return await self._call(Route.BROADCAST_TO_EVERYONE, json={"message": message})

    async def enable_disable_messaging_in_server(
        self,
        action: Union[MessagingAction, str],
    ) -> Any:
        """Enable or disable messaging for the whole server.

        Args:
            action: ``"enable"`` or ``"disable"``

        Raises:
            SocketlinkValidationError: Unknown action
        """
        self._require_admin_key()
        action = self._require_action(action)
        return await self._call(Route.SERVER_MESSAGING, action=action)

    async def delete_local_database(self) -> Any:
        """Wipe the server's local data."""
        self._require_admin_key()
        return await self._call(Route.DELETE_LOCAL_DATABASE)

    async def ping_the_server(self) -> Any:
        """Ping the server. Needs no API key."""
        return await self._call(Route.PING_SERVER)
