"""Base class for REST API endpoints."""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

from socketlink.config import SocketlinkConfig
from socketlink.errors import SocketlinkConfigurationError
from socketlink.errors import SocketlinkValidationError
from socketlink.http import JSONBody
from socketlink.http import SocketlinkHTTPClient
from socketlink.models import MessagingAction
from socketlink.models import RoomUsers
from socketlink.routes import Route
from socketlink.routes import Scope

GLOBAL_ROOM = "global"


class BaseAPI:
    """Base class for REST API endpoints."""

    def __init__(self, http_client: SocketlinkHTTPClient, config: SocketlinkConfig) -> None:
        """Initialize base API.

        Args:
            http_client: HTTP client instance
            config: SDK configuration holding the API keys and uid
        """
        self.http_client = http_client
        self.config = config

    # Credential checks

    def _require_client_key(self) -> str:
        if not self.config.client_api_key:
            raise SocketlinkConfigurationError("client_api_key is required")
        return self.config.client_api_key

    def _require_admin_key(self) -> str:
        if not self.config.admin_api_key:
            raise SocketlinkConfigurationError("admin_api_key is required")
        return self.config.admin_api_key

    def _auth_headers(self, route: Route) -> Dict[str, str]:
        """Build the auth headers for a route, checking the key is present."""
        if route.scope == Scope.ADMIN:
            return {"api-key": self._require_admin_key()}

        if route.scope == Scope.CLIENT:
            headers = {"api-key": self._require_client_key()}
            if route.with_uid:
                headers["uid"] = self.config.uid
            return headers

        return {}

    # Argument validation

    @staticmethod
    def _require_string(value: Any, name: str) -> str:
        if not value or not isinstance(value, str):
            raise SocketlinkValidationError(f"{name} must be a non-empty string", field=name)
        return value

    @staticmethod
    def _require_string_list(value: Any, name: str) -> List[str]:
        if value is None:
            raise SocketlinkValidationError(f"{name} is required", field=name)

        if not isinstance(value, (list, tuple)):
            raise SocketlinkValidationError(f"{name} must be an array of strings", field=name)

        if len(value) == 0:
            raise SocketlinkValidationError(f"{name} array cannot be empty", field=name)

        if not all(isinstance(item, str) for item in value):
            raise SocketlinkValidationError(f"{name} must be an array of strings", field=name)

        return list(value)

    @staticmethod
    def _require_action(action: Union[MessagingAction, str]) -> str:
        allowed = [member.value for member in MessagingAction]
        value = action.value if isinstance(action, MessagingAction) else action
        if value not in allowed:
            raise SocketlinkValidationError(
                f'Invalid action "{action}". Allowed actions are : {", ".join(allowed)}',
                field="action",
            )
        return value

    @staticmethod
    def _room_users_body(rid: str, uids: List[str]) -> List[Dict[str, Any]]:
        return [RoomUsers(rid=rid, uid=uids).to_payload()]

    # Dispatch

    async def _call(
        self,
        route: Route,
        *,
        json: Optional[JSONBody] = None,
        **path_params: str,
    ) -> Any:
        """Check credentials for the route and issue the request.

        Args:
            route: Endpoint to call
            json: JSON body
            **path_params: Values for the route's path placeholders

        Returns:
            Decoded response body
        """
        headers = self._auth_headers(route)
        return await self.http_client.request(
            route.method,
            route.path(**path_params),
            headers=headers or None,
            json=json,
        )
