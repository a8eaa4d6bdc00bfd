"""Rooms API: membership, room broadcasts, bans and messaging controls."""

from __future__ import annotations

from typing import Any
from typing import List
from typing import Union

from socketlink.models import MessagingAction
from socketlink.rest.base import GLOBAL_ROOM
from socketlink.rest.base import BaseAPI
from socketlink.routes import Route


class RoomsAPI(BaseAPI):
    """Room-scoped administration."""

    async def fetch_all_rooms(self) -> Any:
        """List every room with its users."""
        self._require_admin_key()
        return await self._call(Route.FETCH_ALL_ROOMS)

    async def get_all_users_in_given_rooms(self, rids: List[str]) -> Any:
        """List the users of the given rooms.

        Args:
            rids: Room IDs

        Raises:
            SocketlinkValidationError: rids missing, not a list or empty
        """
        self._require_admin_key()
        rids = self._require_string_list(rids, "rids")
        return await self._call(Route.GET_USERS_IN_ROOMS, json={"rid": rids})

    async def broadcast_message_to_given_rooms(self, message: str, rids: List[str]) -> Any:
        """Broadcast a message to every user in the given rooms.

        Args:
            message: Message text
            rids: Room IDs
        """
        self._require_admin_key()
        message = self._require_string(message, "message")
        rids = self._require_string_list(rids, "rids")
        return await self._call(
            Route.BROADCAST_IN_ROOMS,
            json={"message": message, "rid": rids},
        )

    async def ban_users_in_given_rooms(self, rid: str, uids: List[str]) -> Any:
        """Ban users from one room.

        Args:
            rid: Room ID
            uids: User IDs to ban
        """
        self._require_admin_key()
        rid = self._require_string(rid, "rid")
        uids = self._require_string_list(uids, "uids")
        return await self._call(Route.BAN_USERS, json=self._room_users_body(rid, uids))

    async def ban_users_from_the_server(self, uids: List[str]) -> Any:
        """Ban users from the whole server.

        Args:
            uids: User IDs to ban
        """
        self._require_admin_key()
        uids = self._require_string_list(uids, "uids")
        return await self._call(Route.BAN_USERS, json=self._room_users_body(GLOBAL_ROOM, uids))

    async def unban_users_from_given_rooms(self, rid: str, uids: List[str]) -> Any:
        """Lift a room ban.

        Args:
            rid: Room ID
            uids: User IDs to unban
        """
        self._require_admin_key()
        rid = self._require_string(rid, "rid")
        uids = self._require_string_list(uids, "uids")
        return await self._call(Route.UNBAN_USERS, json=self._room_users_body(rid, uids))

    async def unban_users_from_the_server(self, uids: List[str]) -> Any:
        """Lift a server-wide ban."""
        self._require_admin_key()
        uids = self._require_string_list(uids, "uids")
        return await self._call(Route.UNBAN_USERS, json=self._room_users_body(GLOBAL_ROOM, uids))

    async def enable_disable_messaging_globally_for_given_users(
        self,
        action: Union[MessagingAction, str],
        uids: List[str],
    ) -> Any:
        """Enable or disable messaging for users in every room.

        Args:
            action: ``"enable"`` or ``"disable"``
            uids: User IDs
        """
        self._require_admin_key()
        action = self._require_action(action)
        uids = self._require_string_list(uids, "uids")
        return await self._call(
            Route.ROOM_MESSAGING,
            json=self._room_users_body(GLOBAL_ROOM, uids),
            action=action,
        )

    async def enable_disable_messaging_in_rooms_for_given_users(
        self,
        action: Union[MessagingAction, str],
        rid: str,
        uids: List[str],
    ) -> Any:
        """Enable or disable messaging for users in one room.

        Args:
            action: ``"enable"`` or ``"disable"``
            rid: Room ID
            uids: User IDs
        """
        self._require_admin_key()
        action = self._require_action(action)
        rid = self._require_string(rid, "rid")
        uids = self._require_string_list(uids, "uids")
        return await self._call(
            Route.ROOM_MESSAGING,
            json=self._room_users_body(rid, uids),
            action=action,
        )
