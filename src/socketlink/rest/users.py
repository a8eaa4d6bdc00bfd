"""Users API: subscriptions, user broadcasts and moderation lists."""

from __future__ import annotations

from typing import Any
from typing import List

from socketlink.rest.base import BaseAPI
from socketlink.routes import Route


class UsersAPI(BaseAPI):
    """User-scoped operations.

    Subscribing and unsubscribing act on the client's own ``uid`` and are
    authorized with the client API key; everything else needs the admin key.
    """

    async def get_orphan_users(self) -> Any:
        """List connected users that are not subscribed to any room."""
        self._require_admin_key()
        return await self._call(Route.GET_ORPHAN_USERS)

    async def subscribe_to_room(self, rid: str) -> Any:
        """Subscribe this client's user to a room.

        Args:
            rid: Room ID

        Raises:
            SocketlinkConfigurationError: Client API key missing
            SocketlinkValidationError: rid is empty or not a string
        """
        self._require_client_key()
        rid = self._require_string(rid, "rid")
        return await self._call(Route.SUBSCRIBE_TO_ROOM, rid=rid)

    async def unsubscribe_from_room(self, rid: str) -> Any:
        """Unsubscribe this client's user from a room.

        Args:
            rid: Room ID
        """
        self._require_client_key()
        rid = self._require_string(rid, "rid")
        return await self._call(Route.UNSUBSCRIBE_FROM_ROOM, rid=rid)

    async def get_subscriptions_for_all_users(self) -> Any:
        self._require_admin_key()
        return await self._call(Route.GET_ALL_SUBSCRIPTIONS)

    async def get_subscriptions_for_given_users(self, uids: List[str]) -> Any:
        """List the room subscriptions of the given users.

        Args:
            uids: User IDs
        """
        self._require_admin_key()
        uids = self._require_string_list(uids, "uids")
        return await self._call(Route.GET_SUBSCRIPTIONS, json={"uid": uids})

    async def broadcast_message_to_given_users(self, message: str, uids: List[str]) -> Any:
        """Send a message directly to the given users.

        Args:
            message: Message text
            uids: User IDs
        """
        self._require_admin_key()
        message = self._require_string(message, "message")
        uids = self._require_string_list(uids, "uids")
        return await self._call(
            Route.BROADCAST_TO_USERS,
            json={"message": message, "uid": uids},
        )

    async def get_banned_users(self) -> Any:
        self._require_admin_key()
        return await self._call(Route.GET_BANNED_USERS)

    async def get_users_with_messaging_disabled(self) -> Any:
        self._require_admin_key()
        return await self._call(Route.GET_MESSAGING_DISABLED_USERS)
