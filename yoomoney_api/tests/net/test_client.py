"""Unit tests for yoomoney_api.net.client module."""

import httpx
import pytest
from pydantic import BaseModel
from unittest.mock import AsyncMock

from yoomoney_api.net import ApiClient, PostApiRequest
from yoomoney_api.types import ApiClientConfig


class Echo(BaseModel):
    value: str


class EchoRequest(PostApiRequest[Echo]):
    def __init__(self, value):
        super().__init__(Echo)
        self.add_parameter("value", value)
        self.add_header("X-Trace", "trace-1")

    def request_url_base(self, hosts):
        return f"{hosts.money_api}/echo"


class TestApiClient:
    """Test ApiClient request building and execution."""

    def test_build_request_headers(self):
        """Test user agent, authorization and request headers."""
        client = ApiClient(ApiClientConfig(access_token="abc"))
        request = client.build_request(EchoRequest("1"))

        assert request.method == "POST"
        assert str(request.url) == "https://yoomoney.ru/api/echo"
        assert request.headers["Authorization"] == "Bearer abc"
        assert request.headers["User-Agent"] == client.config.user_agent
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.headers["X-Trace"] == "trace-1"
        assert request.content == b"value=1"

    def test_unauthorized_client_sends_no_token(self):
        """Test that no Authorization header is sent without a token."""
        client = ApiClient()
        request = client.build_request(EchoRequest("1"))

        assert not client.is_authorized()
        assert "Authorization" not in request.headers

    def test_set_access_token(self):
        """Test replacing and clearing the token."""
        client = ApiClient()
        client.set_access_token("new-token")
        assert client.access_token == "new-token"
        assert client.is_authorized()

        client.set_access_token(None)
        assert not client.is_authorized()

    @pytest.mark.asyncio
    async def test_execute(self, make_client):
        """Test that execute sends the request and parses the response."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"value": request.content.decode()})

        client = make_client(handler)
        result = await client.execute(EchoRequest("hello"))

        assert result == Echo(value="value=hello")
        assert len(seen) == 1
        assert seen[0].headers["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, make_client):
        """Test that transport failures reach the caller unchanged."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(httpx.ConnectError):
            await client.execute(EchoRequest("1"))

    @pytest.mark.asyncio
    async def test_context_manager_closes_owned_client(self):
        """Test that only an owned HTTP client is closed."""
        client = ApiClient()
        client._http_client = AsyncMock()
        async with client:
            pass
        client._http_client.aclose.assert_awaited_once()

        external = AsyncMock()
        shared = ApiClient(http_client=external)
        await shared.close()
        external.aclose.assert_not_awaited()
