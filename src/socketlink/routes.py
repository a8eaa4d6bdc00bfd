"""Route table for the Socketlink REST API."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from string import Formatter
from typing import FrozenSet

from socketlink.utils import encode_path_segment

API_PREFIX = "/api/v1"


class Scope(str, Enum):
    """Which API key a route is authorized with."""
    ADMIN = "admin"
    CLIENT = "client"
    PUBLIC = "public"


@dataclass(frozen=True)
class RouteSpec:
    """HTTP method, path template and auth scope of one endpoint."""
    method: str
    template: str
    scope: Scope
    # Send the caller's own uid header along with the API key
    with_uid: bool = False

    @property
    def placeholders(self) -> FrozenSet[str]:
        return frozenset(
            name for _, name, _, _ in Formatter().parse(self.template) if name
        )

    def build_path(self, **params: str) -> str:
        """Build the request path, percent-encoding every placeholder value.

        Raises:
            KeyError: A placeholder has no value, or an unknown one was given
        """
        unknown = set(params) - self.placeholders
        if unknown:
            raise KeyError(f"Unknown path parameters: {sorted(unknown)}")

        encoded = {name: encode_path_segment(str(value)) for name, value in params.items()}
        return API_PREFIX + self.template.format(**encoded)


class Route(Enum):
    """Every endpoint the SDK calls."""

    GET_METRICS = RouteSpec("GET", "/metrics", Scope.ADMIN)
    MYSQL_SYNC = RouteSpec("GET", "/mysql/sync", Scope.ADMIN)
    FETCH_ALL_ROOMS = RouteSpec("GET", "/rooms/users/all", Scope.ADMIN)
    GET_ORPHAN_USERS = RouteSpec("GET", "/users/orphan", Scope.ADMIN)
    GET_USERS_IN_ROOMS = RouteSpec("POST", "/rooms/users", Scope.ADMIN)
    SUBSCRIBE_TO_ROOM = RouteSpec("GET", "/users/subscribe/room/{rid}", Scope.CLIENT, with_uid=True)
    UNSUBSCRIBE_FROM_ROOM = RouteSpec("GET", "/users/unsubscribe/room/{rid}", Scope.CLIENT, with_uid=True)
    GET_ALL_SUBSCRIPTIONS = RouteSpec("GET", "/users/subscriptions/all", Scope.ADMIN)
    GET_SUBSCRIPTIONS = RouteSpec("POST", "/users/subscriptions", Scope.ADMIN)
    BROADCAST_TO_EVERYONE = RouteSpec("POST", "/broadcast", Scope.ADMIN)
    BROADCAST_IN_ROOMS = RouteSpec("POST", "/rooms/broadcast", Scope.ADMIN)
    BROADCAST_TO_USERS = RouteSpec("POST", "/users/broadcast", Scope.ADMIN)
    BAN_USERS = RouteSpec("POST", "/rooms/users/ban", Scope.ADMIN)
    UNBAN_USERS = RouteSpec("POST", "/rooms/users/unban", Scope.ADMIN)
    SERVER_MESSAGING = RouteSpec("PUT", "/server/messaging/{action}", Scope.ADMIN)
    ROOM_MESSAGING = RouteSpec("POST", "/rooms/messaging/{action}", Scope.ADMIN)
    GET_BANNED_USERS = RouteSpec("GET", "/users/banned", Scope.ADMIN)
    GET_MESSAGING_DISABLED_USERS = RouteSpec("GET", "/users/messaging/disabled", Scope.ADMIN)
    GET_MESSAGES_FOR_ROOM = RouteSpec("GET", "/messages/room/{rid}", Scope.CLIENT, with_uid=True)
    DELETE_LOCAL_DATABASE = RouteSpec("DELETE", "/database", Scope.ADMIN)
    PING_SERVER = RouteSpec("GET", "/ping", Scope.PUBLIC)

    @property
    def method(self) -> str:
        return self.value.method

    @property
    def scope(self) -> Scope:
        return self.value.scope

    @property
    def with_uid(self) -> bool:
        return self.value.with_uid

    def path(self, **params: str) -> str:
        return self.value.build_path(**params)
