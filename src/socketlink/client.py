"""Socketlink Python SDK - Main client implementation.

One object gives access to:
- The live WebSocket connection (listeners, send, auto-reconnect)
- The REST administration API (rooms, users, server, messages)
"""

import dataclasses
import logging
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv

from .config import SocketlinkConfig
from .connection import Listener, SocketlinkConnection
from .env_config import load_config_from_env
from .errors import SocketlinkConfigurationError
from .http import SocketlinkHTTPClient
from .models import ConnectionEvent, MessagingAction
from .rest import MessagesAPI, RoomsAPI, ServerAPI, UsersAPI

logger = logging.getLogger(__name__)


class SocketlinkClient:
    """Main Socketlink SDK client.

    Example:
        ```python
        from socketlink import SocketlinkClient

        async def main():
            client = SocketlinkClient(
                client_api_key="sl_client_key",
                admin_api_key="sl_admin_key",
                connection_url="https://example.socketlink.io",
                uid="alice",
            )

            @client.on_message
            def handle(data, rid):
                print(f"{rid}: {data}")

            await client.subscribe_to_room("pub-chatroom")
            await client.send("hello", "pub-chatroom")

            await client.close()
        ```

    The client connects as soon as it is created, so it has to be created
    inside a running event loop unless ``auto_connect=False`` is passed.
    """

    def __init__(
        self,
        config: Optional[SocketlinkConfig] = None,
        *,
        client_api_key: Optional[str] = None,
        admin_api_key: Optional[str] = None,
        connection_url: Optional[str] = None,
        uid: Optional[str] = None,
        auto_reconnect: Optional[bool] = None,
        reconnect_interval: Optional[int] = None,
        reject_unauthorized: Optional[bool] = None,
        auto_connect: Optional[bool] = None,
        timeout: Optional[int] = None,
        http_transport: Optional[Any] = None,
    ):
        """Initialize Socketlink client.

        Args:
            config: Complete configuration object; loaded from the
                environment (and a ``.env`` file) when omitted
            client_api_key: Client API key
            admin_api_key: Admin API key
            connection_url: HTTPS URL of the Socketlink instance
            uid: User ID, random when omitted
            auto_reconnect: Reconnect after the socket closes
            reconnect_interval: Reconnect delay in milliseconds
            reject_unauthorized: Verify TLS certificates
            auto_connect: Connect immediately
            timeout: HTTP timeout in milliseconds
            http_transport: Optional httpx transport for the REST client
        """
        if config is None:
            load_dotenv()
            config = load_config_from_env()

        overrides = {
            'client_api_key': client_api_key,
            'admin_api_key': admin_api_key,
            'connection_url': connection_url,
            'uid': uid,
            'auto_reconnect': auto_reconnect,
            'reconnect_interval': reconnect_interval,
            'reject_unauthorized': reject_unauthorized,
            'auto_connect': auto_connect,
            'timeout': timeout,
        }
        # Private copy, the identity must not change after construction
        config = dataclasses.replace(
            config,
            **{name: value for name, value in overrides.items() if value is not None},
        )

        try:
            config.validate()
        except ValueError as e:
            raise SocketlinkConfigurationError(str(e)) from e

        self.config = config
        logging.getLogger("socketlink").setLevel(config.log_level.upper())

        # Connect before the HTTP pool exists, a failed connect() leaves nothing open
        self.connection = SocketlinkConnection(config)
        if config.auto_connect:
            self.connect()

        # Initialize HTTP client
        self.http = SocketlinkHTTPClient(config, transport=http_transport)

        # Initialize REST API modules
        self.server = ServerAPI(self.http, config)
        self.rooms = RoomsAPI(self.http, config)
        self.users = UsersAPI(self.http, config)
        self.messages = MessagesAPI(self.http, config)

    async def __aenter__(self) -> 'SocketlinkClient':
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def uid(self) -> str:
        return self.config.uid

    # Connection

    def connect(self) -> None:
        """Start connecting the live socket. See :meth:`SocketlinkConnection.connect`."""
        self.connection.connect()

    async def send(self, message: str, rid: Optional[str] = None) -> bool:
        """Send a message to a room over the live socket."""
        return await self.connection.send(message, rid)

    async def close(self) -> None:
        """Close the live socket for good and release the HTTP client."""
        await self.connection.close()
        await self.http.close()
        logger.info("Socketlink client closed")

    def on(self, event: Union[ConnectionEvent, str], handler: Listener) -> Listener:
        return self.connection.on(event, handler)

    def off(self, event: Union[ConnectionEvent, str], handler: Optional[Listener] = None) -> None:
        self.connection.off(event, handler)

    def on_open(self, handler: Listener) -> Listener:
        return self.connection.on_open(handler)

    def on_message(self, handler: Listener) -> Listener:
        return self.connection.on_message(handler)

    def on_server_broadcast(self, handler: Listener) -> Listener:
        return self.connection.on_server_broadcast(handler)

    def on_admin_broadcast(self, handler: Listener) -> Listener:
        return self.connection.on_admin_broadcast(handler)

    def on_close(self, handler: Listener) -> Listener:
        return self.connection.on_close(handler)

    def on_error(self, handler: Listener) -> Listener:
        return self.connection.on_error(handler)

    def get_status(self) -> Dict[str, Any]:
        """Get client status.

        Returns:
            Dictionary with configuration and connection status
        """
        return {
            "config": self.config.to_dict(),
            "connection": self.connection.get_status(),
        }

    # Server API

    async def get_usage_metrics(self) -> Any:
        return await self.server.get_usage_metrics()

    async def sync_mysql(self) -> Any:
        return await self.server.sync_mysql()

    async def broadcast_message_to_everyone(self, message: str) -> Any:
        return await self.server.broadcast_message_to_everyone(message)

    async def enable_disable_messaging_in_server(self, action: Union[MessagingAction, str]) -> Any:
        return await self.server.enable_disable_messaging_in_server(action)

    async def delete_local_database(self) -> Any:
        return await self.server.delete_local_database()

    async def ping_the_server(self) -> Any:
        return await self.server.ping_the_server()

    # Rooms API

    async def fetch_all_rooms(self) -> Any:
        return await self.rooms.fetch_all_rooms()

    async def get_all_users_in_given_rooms(self, rids: List[str]) -> Any:
        return await self.rooms.get_all_users_in_given_rooms(rids)

    async def broadcast_message_to_given_rooms(self, message: str, rids: List[str]) -> Any:
        return await self.rooms.broadcast_message_to_given_rooms(message, rids)

    async def ban_users_in_given_rooms(self, rid: str, uids: List[str]) -> Any:
        return await self.rooms.ban_users_in_given_rooms(rid, uids)

    async def ban_users_from_the_server(self, uids: List[str]) -> Any:
        return await self.rooms.ban_users_from_the_server(uids)

    async def unban_users_from_given_rooms(self, rid: str, uids: List[str]) -> Any:
        return await self.rooms.unban_users_from_given_rooms(rid, uids)

    async def unban_users_from_the_server(self, uids: List[str]) -> Any:
        return await self.rooms.unban_users_from_the_server(uids)

    async def enable_disable_messaging_globally_for_given_users(
        self,
        action: Union[MessagingAction, str],
        uids: List[str],
    ) -> Any:
        return await self.rooms.enable_disable_messaging_globally_for_given_users(action, uids)

    async def enable_disable_messaging_in_rooms_for_given_users(
        self,
        action: Union[MessagingAction, str],
        rid: str,
        uids: List[str],
    ) -> Any:
        return await self.rooms.enable_disable_messaging_in_rooms_for_given_users(action, rid, uids)

    # Users API

    async def get_orphan_users(self) -> Any:
        return await self.users.get_orphan_users()

    async def subscribe_to_room(self, rid: str) -> Any:
        return await self.users.subscribe_to_room(rid)

    async def unsubscribe_from_room(self, rid: str) -> Any:
        return await self.users.unsubscribe_from_room(rid)

    async def get_subscriptions_for_all_users(self) -> Any:
        return await self.users.get_subscriptions_for_all_users()

    async def get_subscriptions_for_given_users(self, uids: List[str]) -> Any:
        return await self.users.get_subscriptions_for_given_users(uids)

    async def broadcast_message_to_given_users(self, message: str, uids: List[str]) -> Any:
        return await self.users.broadcast_message_to_given_users(message, uids)

    async def get_banned_users(self) -> Any:
        return await self.users.get_banned_users()

    async def get_users_with_messaging_disabled(self) -> Any:
        return await self.users.get_users_with_messaging_disabled()

    # Messages API

    async def get_message_for_cache_room(self, rid: str, uid: str) -> Any:
        return await self.messages.get_message_for_cache_room(rid, uid)
