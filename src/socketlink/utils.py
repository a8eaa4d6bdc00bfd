"""Utility functions for Socketlink SDK."""

from __future__ import annotations

import ssl
import time
from datetime import datetime
from datetime import timezone
from typing import Optional
from urllib.parse import quote
from urllib.parse import urlsplit
from urllib.parse import urlunsplit

from socketlink.errors import SocketlinkConfigurationError


def https_to_wss(url: str) -> str:
    """Derive the WebSocket URL from the HTTPS connection URL.

    Args:
        url: Connection URL, must use the ``https`` scheme

    Returns:
        The same URL with a ``wss`` scheme and at least a ``/`` path

    Raises:
        SocketlinkConfigurationError: URL is not HTTPS
    """
    parts = urlsplit(url or "")
    if parts.scheme.lower() != "https" or not parts.netloc:
        raise SocketlinkConfigurationError(f"Provided URL is not HTTPS: {url!r}")

    return urlunsplit(("wss", parts.netloc, parts.path or "/", parts.query, parts.fragment))


def encode_path_segment(value: str) -> str:
    """Percent-encode a value for use as a single URL path segment."""
    # Same unreserved set as encodeURIComponent
    return quote(value, safe="!*'()")


def build_ssl_context(reject_unauthorized: bool) -> Optional[ssl.SSLContext]:
    """Build the TLS context for the WebSocket handshake.

    Returns None when the library default (full verification) applies.
    """
    if reject_unauthorized:
        return None

    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


# Timing utilities

def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)
