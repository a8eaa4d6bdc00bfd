"""Tests for HTTP client."""

import httpx
import pytest

from socketlink.errors import SocketlinkHTTPError
from socketlink.errors import SocketlinkTimeoutError
from socketlink.http import SocketlinkHTTPClient

from conftest import RecordingTransport


class TestSocketlinkHTTPClient:
    """Test HTTP client functionality."""

    def test_build_url_replaces_path(self, socketlink_config):
        """Test API paths resolve against the connection URL."""
        client = SocketlinkHTTPClient(socketlink_config)

        assert client.build_url("/api/v1/ping") == "https://example.com/api/v1/ping"

    @pytest.mark.asyncio
    async def test_context_manager(self, socketlink_config):
        """Test using client as context manager."""
        async with SocketlinkHTTPClient(socketlink_config) as client:
            assert isinstance(client, SocketlinkHTTPClient)

    @pytest.mark.asyncio
    async def test_successful_json_request(self, http_client, recording_transport):
        """Test a JSON response is decoded."""
        recording_transport.json_body = {"rooms": ["a", "b"]}

        result = await http_client.request(
            "POST",
            "/api/v1/rooms/users",
            headers={"api-key": "sl_admin_key"},
            json={"rid": ["a"]},
        )

        assert result == {"rooms": ["a", "b"]}
        request = recording_transport.last
        assert request.method == "POST"
        assert str(request.url) == "https://example.com/api/v1/rooms/users"
        assert request.headers["api-key"] == "sl_admin_key"
        assert request.headers["User-Agent"] == "socketlink-python-sdk/1.0.0"
        assert recording_transport.last_json() == {"rid": ["a"]}

    @pytest.mark.asyncio
    async def test_query_parameters(self, http_client, recording_transport):
        """Test query parameters are sent."""
        await http_client.request("GET", "/api/v1/ping", params={"verbose": "1"})

        assert recording_transport.last.url.params["verbose"] == "1"

    @pytest.mark.asyncio
    async def test_text_response(self, socketlink_config):
        """Test a non-JSON response is returned as text."""
        transport = RecordingTransport(text="pong")

        async with SocketlinkHTTPClient(socketlink_config, transport=transport.transport) as client:
            assert await client.request("GET", "/api/v1/ping") == "pong"

    @pytest.mark.asyncio
    async def test_empty_response(self, socketlink_config):
        """Test an empty body decodes to None."""
        transport = RecordingTransport(status_code=204, text="")

        async with SocketlinkHTTPClient(socketlink_config, transport=transport.transport) as client:
            assert await client.request("DELETE", "/api/v1/database") is None

    @pytest.mark.asyncio
    async def test_error_message_from_error_field(self, socketlink_config):
        """Test the structured error message wins."""
        transport = RecordingTransport(
            status_code=403,
            json_body={"error": {"message": "Invalid admin key"}, "message": "Forbidden"},
        )

        async with SocketlinkHTTPClient(socketlink_config, transport=transport.transport) as client:
            with pytest.raises(SocketlinkHTTPError) as exc_info:
                await client.request("GET", "/api/v1/metrics")

        error = exc_info.value
        assert error.status_code == 403
        assert error.message == "API request error: Invalid admin key"
        assert "HTTP 403" in str(error)

    @pytest.mark.asyncio
    async def test_error_message_falls_back_to_message(self, socketlink_config):
        """Test the top-level message is used when there is no error field."""
        transport = RecordingTransport(status_code=400, json_body={"message": "rid is required"})

        async with SocketlinkHTTPClient(socketlink_config, transport=transport.transport) as client:
            with pytest.raises(SocketlinkHTTPError) as exc_info:
                await client.request("POST", "/api/v1/rooms/users", json={})

        assert exc_info.value.message == "API request error: rid is required"
        assert exc_info.value.details == {"message": "rid is required"}

    @pytest.mark.asyncio
    async def test_error_message_generic(self, socketlink_config):
        """Test a body without a message yields a generic one."""
        transport = RecordingTransport(status_code=500, text="Internal Server Error")

        async with SocketlinkHTTPClient(socketlink_config, transport=transport.transport) as client:
            with pytest.raises(SocketlinkHTTPError) as exc_info:
                await client.request("GET", "/api/v1/metrics")

        assert exc_info.value.message == "API request error: HTTP 500"
        assert exc_info.value.response_text == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_network_error(self, socketlink_config):
        """Test transport failures are normalized."""
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        transport = httpx.MockTransport(refuse)

        async with SocketlinkHTTPClient(socketlink_config, transport=transport) as client:
            with pytest.raises(SocketlinkHTTPError) as exc_info:
                await client.request("GET", "/api/v1/ping")

        error = exc_info.value
        assert error.status_code == 0
        assert error.message == "API request error: Connection refused"
        assert isinstance(error.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_error(self, socketlink_config):
        """Test timeouts raise the timeout error."""
        def hang(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport = httpx.MockTransport(hang)

        async with SocketlinkHTTPClient(socketlink_config, transport=transport) as client:
            with pytest.raises(SocketlinkTimeoutError) as exc_info:
                await client.request("GET", "/api/v1/ping")

        assert exc_info.value.timeout == 5.0
        assert isinstance(exc_info.value, SocketlinkHTTPError)

    @pytest.mark.asyncio
    async def test_no_retry(self, socketlink_config):
        """Test a failed request is attempted exactly once."""
        transport = RecordingTransport(status_code=503, json_body={"message": "busy"})

        async with SocketlinkHTTPClient(socketlink_config, transport=transport.transport) as client:
            with pytest.raises(SocketlinkHTTPError):
                await client.request("GET", "/api/v1/metrics")

        assert len(transport.requests) == 1
