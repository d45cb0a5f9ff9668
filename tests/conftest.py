"""Shared pytest fixtures for Home Assistant tool server tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from ha_tool_server.config import HubConfig
from ha_tool_server.dispatcher import ToolDispatcher


@pytest.fixture
def hub_config():
    """Configuration for a test Home Assistant instance."""
    return HubConfig(base_url="http://homeassistant.local:8123", token="test_token")


@pytest.fixture
def mock_api():
    """Mock Home Assistant REST client."""
    api = MagicMock()
    api.async_request = AsyncMock(return_value={"result": "ok"})
    api.async_close = AsyncMock()
    return api


@pytest.fixture
def dispatcher(hub_config, mock_api):
    """Dispatcher that sends requests to the mock client."""
    return ToolDispatcher(hub_config, api=mock_api)


def make_response(
    status: int = 200,
    json_data: Any = None,
    text: str = "",
    reason: str = "OK",
) -> MagicMock:
    """Mock aiohttp response."""
    resp = MagicMock()
    resp.status = status
    resp.reason = reason
    resp.ok = status < 400
    resp.json = AsyncMock(return_value=json_data)
    resp.text = AsyncMock(return_value=text)
    return resp


@pytest.fixture
def response_factory():
    """Factory for mock aiohttp responses."""
    return make_response


@pytest.fixture
def mock_session():
    """Mock aiohttp session whose request() yields a 200 JSON response."""
    session = MagicMock()
    session.request.return_value.__aenter__.return_value = make_response(
        json_data={"state": "on"}
    )
    session.request.return_value.__aexit__.return_value = False
    session.close = AsyncMock()
    return session
