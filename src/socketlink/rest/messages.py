"""Messages API."""

from __future__ import annotations

from typing import Any

from socketlink.rest.base import BaseAPI
from socketlink.routes import Route


class MessagesAPI(BaseAPI):
    """Message history kept by the server for cache rooms."""

    async def get_message_for_cache_room(self, rid: str, uid: str) -> Any:
        """Fetch the cached messages of a room.

        The request is made as this client's own user; ``uid`` is validated
        but the ``uid`` header always carries the client's identity.

        Args:
            rid: Room ID
            uid: User ID

        Raises:
            SocketlinkConfigurationError: Client API key missing
            SocketlinkValidationError: rid or uid is empty or not a string
        """
        self._require_client_key()
        rid = self._require_string(rid, "rid")
        self._require_string(uid, "uid")
        return await self._call(Route.GET_MESSAGES_FOR_ROOM, rid=rid)
