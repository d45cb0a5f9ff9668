"""Tests for the Home Assistant REST client."""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
from aiohttp import test_utils, web

from ha_tool_server.config import HubConfig
from ha_tool_server.ha_client.client import (
    HomeAssistantAPIError,
    HomeAssistantClient,
    HubRequest,
)


class TestHomeAssistantClient:
    """Test the HomeAssistantClient class."""

    @pytest.fixture
    def client(self, hub_config, mock_session):
        """Create a client with a mock session."""
        return HomeAssistantClient(hub_config, session=mock_session)

    def test_init(self, hub_config, mock_session):
        """Test client initialization with a given session."""
        client = HomeAssistantClient(hub_config, session=mock_session)

        assert client.config == hub_config
        assert client.session is mock_session
        assert client._owns_session is False

    def test_session_lazy_initialization(self, hub_config):
        """Test that the session is created on first access."""
        client = HomeAssistantClient(hub_config)
        assert client._session is None

        with patch("ha_tool_server.ha_client.client.aiohttp.ClientSession") as mock_cls:
            session1 = client.session
            session2 = client.session

        assert session1 is session2
        mock_cls.assert_called_once_with()

    async def test_get_request(self, client, mock_session):
        """Test a GET request without a body."""
        result = await client.async_request(
            HubRequest(method="GET", path="/api/states/sensor.temperature")
        )

        assert result == {"state": "on"}
        mock_session.request.assert_called_once_with(
            "GET",
            "http://homeassistant.local:8123/api/states/sensor.temperature",
            headers={"Authorization": "Bearer test_token"},
        )

    async def test_post_request_with_body(self, client, mock_session):
        """Test that a body is sent as JSON with a content type."""
        await client.async_request(
            HubRequest(
                method="POST",
                path="/api/services/light/turn_on",
                body={"entity_id": "light.kitchen"},
            )
        )

        mock_session.request.assert_called_once_with(
            "POST",
            "http://homeassistant.local:8123/api/services/light/turn_on",
            headers={
                "Authorization": "Bearer test_token",
                "Content-Type": "application/json",
            },
            json={"entity_id": "light.kitchen"},
        )

    async def test_json_parsed_regardless_of_content_type(
        self, client, mock_session
    ):
        """Test that the body is decoded without a content type check."""
        resp = mock_session.request.return_value.__aenter__.return_value

        await client.async_request(HubRequest(method="GET", path="/api/events/x"))

        resp.json.assert_awaited_once_with(content_type=None)

    async def test_error_status(self, client, mock_session, response_factory):
        """Test that a failed status raises with status, reason and body."""
        mock_session.request.return_value.__aenter__.return_value = response_factory(
            status=500, reason="Internal Server Error", text="boom"
        )

        with pytest.raises(HomeAssistantAPIError) as exc_info:
            await client.async_request(HubRequest(method="GET", path="/api/states/x"))

        err = exc_info.value
        assert err.status == 500
        assert err.reason == "Internal Server Error"
        assert err.body == "boom"
        assert str(err) == "Home Assistant API error: 500 Internal Server Error\nboom"

    async def test_error_status_does_not_parse_json(
        self, client, mock_session, response_factory
    ):
        """Test that the JSON body of a failed response is not decoded."""
        resp = response_factory(status=401, reason="Unauthorized", text="401: Unauthorized")
        mock_session.request.return_value.__aenter__.return_value = resp

        with pytest.raises(HomeAssistantAPIError, match="401"):
            await client.async_request(HubRequest(method="GET", path="/api/states/x"))

        resp.json.assert_not_awaited()

    async def test_error_body_decoded_leniently(self, client, mock_session):
        """Test that the error body is read without strict decoding."""
        resp = mock_session.request.return_value.__aenter__.return_value
        resp.ok = False
        resp.status = 502

        with pytest.raises(HomeAssistantAPIError):
            await client.async_request(HubRequest(method="GET", path="/api/states/x"))

        resp.text.assert_awaited_once_with(errors="replace")

    async def test_non_utf8_error_body(self, hub_config):
        """Test that an undecodable error body keeps the status and body."""

        async def handler(request):
            return web.Response(status=500, body=b"\xff\xfeboom")

        app = web.Application()
        app.router.add_get("/api/states/sensor.broken", handler)

        async with test_utils.TestServer(app) as server:
            config = HubConfig(base_url=f"http://{server.host}:{server.port}", token="test_token")
            client = HomeAssistantClient(config)
            try:
                with pytest.raises(HomeAssistantAPIError) as exc_info:
                    await client.async_request(
                        HubRequest(method="GET", path="/api/states/sensor.broken")
                    )
            finally:
                await client.async_close()

        err = exc_info.value
        assert err.status == 500
        assert "boom" in err.body
        assert "500" in str(err)

    async def test_connection_error_propagates(self, client, mock_session):
        """Test that transport errors are raised to the caller."""
        mock_session.request.return_value.__aenter__.side_effect = (
            aiohttp.ClientConnectionError("Cannot connect")
        )

        with pytest.raises(aiohttp.ClientError, match="Cannot connect"):
            await client.async_request(HubRequest(method="GET", path="/api/states/x"))

    async def test_invalid_json_propagates(self, client, mock_session):
        """Test that a malformed body raises ValueError."""
        resp = mock_session.request.return_value.__aenter__.return_value
        resp.json = AsyncMock(side_effect=ValueError("Expecting value"))

        with pytest.raises(ValueError, match="Expecting value"):
            await client.async_request(HubRequest(method="GET", path="/api/states/x"))

    async def test_close_borrowed_session(self, client, mock_session):
        """Test that a session passed in is left open."""
        await client.async_close()

        mock_session.close.assert_not_called()

    async def test_close_owned_session(self, hub_config):
        """Test that a session created by the client is closed."""
        client = HomeAssistantClient(hub_config)
        session = MagicMock()
        session.close = AsyncMock()
        client._session = session

        await client.async_close()

        session.close.assert_awaited_once()
        assert client._session is None

    async def test_close_error_is_logged(self, hub_config):
        """Test that a failing close does not raise."""
        client = HomeAssistantClient(hub_config)
        session = MagicMock()
        session.close = AsyncMock(side_effect=RuntimeError("already closed"))
        client._session = session

        await client.async_close()

        assert client._session is None
