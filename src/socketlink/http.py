"""Async HTTP client for the Socketlink REST API."""

from __future__ import annotations

import logging
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Union
from urllib.parse import urljoin

import httpx

from socketlink.config import SocketlinkConfig
from socketlink.errors import SocketlinkHTTPError
from socketlink.errors import SocketlinkTimeoutError

logger = logging.getLogger(__name__)

JSONBody = Union[Dict[str, Any], List[Any]]


class SocketlinkHTTPClient:
    """Issues single authenticated requests and normalizes their failures.

    Every call is one attempt. There is no retry, no rate limiting and no
    idempotency handling; failures surface to the caller as
    :class:`SocketlinkHTTPError`.
    """

    def __init__(
        self,
        config: SocketlinkConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            config: SDK configuration
            transport: Optional httpx transport, mainly for tests
        """
        self.config = config

        timeout = httpx.Timeout(config.timeout_seconds)
        limits = httpx.Limits(
            max_keepalive_connections=20,
            max_connections=100,
            keepalive_expiry=30.0,
        )

        self._client = httpx.AsyncClient(
            timeout=timeout,
            limits=limits,
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> SocketlinkHTTPClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    def build_url(self, path: str) -> str:
        """Resolve an API path against the connection URL."""
        return urljoin(self.config.connection_url, path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[JSONBody] = None,
    ) -> Any:
        """Make one HTTP request and decode the response body.

        Args:
            method: HTTP method
            path: API path, resolved against the connection URL
            params: Query parameters
            headers: Additional headers
            json: JSON body

        Returns:
            Decoded JSON body, response text for non-JSON bodies, or None
            for an empty body

        Raises:
            SocketlinkHTTPError: Non-2xx response or network failure
            SocketlinkTimeoutError: Request timeout
        """
        url = self.build_url(path)

        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                headers=headers,
                json=json,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out: {e}")
            raise SocketlinkTimeoutError(
                f"API request error: {str(e) or 'request timed out'}",
                timeout=self.config.timeout_seconds,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise SocketlinkHTTPError(
                f"API request error: {str(e) or e.__class__.__name__}",
                status_code=0,
                error_code="NETWORK_ERROR",
            ) from e

        logger.debug(f"{method} {url} -> {response.status_code}")

        if not response.is_success:
            self._handle_http_error(response)

        return self._decode_body(response)

    def _decode_body(self, response: httpx.Response) -> Any:
        """Decode response body, preferring JSON."""
        if not response.content:
            return None

        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            try:
                return response.json()
            except ValueError:
                logger.debug("Response declared JSON but could not be decoded")

        return response.text

    def _handle_http_error(self, response: httpx.Response) -> None:
        """Raise the normalized error for a non-2xx response.

        The message comes from ``error.message`` in the body, then
        ``message``, then a generic status line.

        Raises:
            SocketlinkHTTPError: Always
        """
        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        error_message = None
        error_code = "HTTP_ERROR"
        if isinstance(error_data, dict):
            error = error_data.get("error")
            if isinstance(error, dict):
                error_message = error.get("message")
                error_code = error.get("code") or error_code
            if not error_message:
                error_message = error_data.get("message")

        if not error_message:
            error_message = f"HTTP {response.status_code}"

        raise SocketlinkHTTPError(
            f"API request error: {error_message}",
            status_code=response.status_code,
            response_text=response.text,
            error_code=str(error_code),
            details=error_data if isinstance(error_data, dict) else {},
        )
