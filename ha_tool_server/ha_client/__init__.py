"""Home Assistant API client for tool calls."""

from .client import HomeAssistantAPIError, HomeAssistantClient, HubRequest
from .tools import TOOLS, ArgumentError, ToolDescriptor, get_tool, get_tools

__all__ = [
    "ArgumentError",
    "HomeAssistantAPIError",
    "HomeAssistantClient",
    "HubRequest",
    "TOOLS",
    "ToolDescriptor",
    "get_tool",
    "get_tools",
]
