"""REST API endpoints for Socketlink."""

from socketlink.rest.messages import MessagesAPI
from socketlink.rest.rooms import RoomsAPI
from socketlink.rest.server import ServerAPI
from socketlink.rest.users import UsersAPI

__all__ = [
    "MessagesAPI",
    "RoomsAPI",
    "ServerAPI",
    "UsersAPI",
]
