"""
Configuration for the Socketlink SDK.

A single dataclass carries the client identity, the connection settings and
the ambient HTTP/logging settings. It can be built directly, from a dict, or
from environment variables (see ``socketlink.env_config``).
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from urllib.parse import urlsplit


def _new_uid() -> str:
    return str(uuid.uuid4())


@dataclass
class SocketlinkConfig:
    """Main SDK configuration."""
    # Connection
    connection_url: Optional[str] = None
    auto_reconnect: bool = True
    reconnect_interval: int = 3000  # milliseconds
    reject_unauthorized: bool = True
    auto_connect: bool = True

    # Identity
    client_api_key: Optional[str] = None
    admin_api_key: Optional[str] = None
    uid: str = field(default_factory=_new_uid)

    # HTTP
    timeout: int = 30000  # milliseconds
    user_agent: str = 'socketlink-python-sdk/1.0.0'

    # Logging
    log_level: str = 'INFO'

    def validate(self) -> None:
        """Validate the complete configuration."""
        if not self.connection_url:
            raise ValueError("connection_url is required")

        parts = urlsplit(self.connection_url)
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise ValueError("connection_url must be an absolute http(s) URL")

        if not self.uid:
            raise ValueError("uid must be a non-empty string")

        if self.reconnect_interval < 0:
            raise ValueError("reconnect_interval must not be negative")

        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @property
    def timeout_seconds(self) -> float:
        """HTTP timeout in seconds."""
        return self.timeout / 1000

    @property
    def reconnect_interval_seconds(self) -> float:
        """Reconnect delay in seconds."""
        return self.reconnect_interval / 1000

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'connection_url': self.connection_url,
            'auto_reconnect': self.auto_reconnect,
            'reconnect_interval': self.reconnect_interval,
            'reject_unauthorized': self.reject_unauthorized,
            'auto_connect': self.auto_connect,
            'uid': self.uid,
            # Don't include key material
            'has_client_api_key': bool(self.client_api_key),
            'has_admin_api_key': bool(self.admin_api_key),
            'timeout': self.timeout,
            'user_agent': self.user_agent,
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SocketlinkConfig':
        """Create configuration from dictionary."""
        config = cls()

        for name in (
            'connection_url',
            'auto_reconnect',
            'reconnect_interval',
            'reject_unauthorized',
            'auto_connect',
            'client_api_key',
            'admin_api_key',
            'timeout',
            'user_agent',
            'log_level',
        ):
            if name in data:
                setattr(config, name, data[name])

        # Keep the generated default when no uid is supplied
        if data.get('uid'):
            config.uid = data['uid']

        return config
