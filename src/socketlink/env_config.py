"""
Environment variable configuration loader for Socketlink SDK.

This module loads SDK configuration from environment variables, so the same
code can point at different Socketlink deployments without changes.
"""

import os
import logging
from typing import Optional
from .config import SocketlinkConfig

logger = logging.getLogger(__name__)


def load_config_from_env() -> SocketlinkConfig:
    """
    Load SDK configuration from environment variables.

    Environment variables:
        Connection:
            SOCKETLINK_CONNECTION_URL: HTTPS URL of the Socketlink instance
            SOCKETLINK_AUTO_RECONNECT: Reconnect after the socket closes (true/false)
            SOCKETLINK_RECONNECT_INTERVAL: Reconnect delay in milliseconds
            SOCKETLINK_REJECT_UNAUTHORIZED: Verify TLS certificates (true/false)
            SOCKETLINK_AUTO_CONNECT: Connect when the client is created (true/false)

        Identity:
            SOCKETLINK_CLIENT_API_KEY: Client API key
            SOCKETLINK_ADMIN_API_KEY: Admin API key
            SOCKETLINK_UID: User ID (random when unset)

        HTTP:
            SOCKETLINK_TIMEOUT: Request timeout in milliseconds
            SOCKETLINK_USER_AGENT: User agent string

        Logging:
            SOCKETLINK_LOG_LEVEL: Log level (DEBUG/INFO/WARNING/ERROR)

    Returns:
        SocketlinkConfig: Configuration object loaded from environment
    """
    config = SocketlinkConfig()

    # Connection
    if connection_url := os.getenv('SOCKETLINK_CONNECTION_URL'):
        config.connection_url = connection_url.strip()

    if (auto_reconnect := os.getenv('SOCKETLINK_AUTO_RECONNECT')) is not None:
        config.auto_reconnect = _parse_bool(auto_reconnect)

    if reconnect_interval := os.getenv('SOCKETLINK_RECONNECT_INTERVAL'):
        try:
            config.reconnect_interval = int(reconnect_interval)
        except ValueError:
            logger.warning(
                f"Invalid reconnect interval: {reconnect_interval}, using default: {config.reconnect_interval}"
            )

    if (reject_unauthorized := os.getenv('SOCKETLINK_REJECT_UNAUTHORIZED')) is not None:
        config.reject_unauthorized = _parse_bool(reject_unauthorized)

    if (auto_connect := os.getenv('SOCKETLINK_AUTO_CONNECT')) is not None:
        config.auto_connect = _parse_bool(auto_connect)

    # Identity
    if client_api_key := os.getenv('SOCKETLINK_CLIENT_API_KEY'):
        config.client_api_key = client_api_key

    if admin_api_key := os.getenv('SOCKETLINK_ADMIN_API_KEY'):
        config.admin_api_key = admin_api_key

    if uid := os.getenv('SOCKETLINK_UID'):
        config.uid = uid

    # HTTP
    if timeout := os.getenv('SOCKETLINK_TIMEOUT'):
        try:
            config.timeout = int(timeout)
        except ValueError:
            logger.warning(f"Invalid timeout value: {timeout}, using default: {config.timeout}")

    if user_agent := os.getenv('SOCKETLINK_USER_AGENT'):
        config.user_agent = user_agent

    # Logging
    if log_level := os.getenv('SOCKETLINK_LOG_LEVEL'):
        config.log_level = log_level.upper()

    return config


def _parse_bool(value: Optional[str]) -> bool:
    """Parse boolean from string."""
    if not value:
        return False
    return value.lower() in ('true', '1', 'yes', 'on')


def save_config_to_env_file(config: SocketlinkConfig, filepath: str = '.env') -> None:
    """
    Save configuration to environment file.

    Args:
        config: Configuration to save
        filepath: Path to environment file
    """
    lines = []

    # Connection
    if config.connection_url:
        lines.append(f"SOCKETLINK_CONNECTION_URL={config.connection_url}")
    lines.append(f"SOCKETLINK_AUTO_RECONNECT={str(config.auto_reconnect).lower()}")
    lines.append(f"SOCKETLINK_RECONNECT_INTERVAL={config.reconnect_interval}")
    lines.append(f"SOCKETLINK_REJECT_UNAUTHORIZED={str(config.reject_unauthorized).lower()}")
    lines.append(f"SOCKETLINK_AUTO_CONNECT={str(config.auto_connect).lower()}")

    # Identity
    if config.client_api_key:
        lines.append(f"SOCKETLINK_CLIENT_API_KEY={config.client_api_key}")
    if config.admin_api_key:
        lines.append(f"SOCKETLINK_ADMIN_API_KEY={config.admin_api_key}")
    lines.append(f"SOCKETLINK_UID={config.uid}")

    # HTTP
    lines.append(f"SOCKETLINK_TIMEOUT={config.timeout}")
    lines.append(f"SOCKETLINK_USER_AGENT={config.user_agent}")

    # Logging
    lines.append(f"SOCKETLINK_LOG_LEVEL={config.log_level}")

    # Write to file
    with open(filepath, 'w') as f:
        f.write('\n'.join(lines))
        f.write('\n')
