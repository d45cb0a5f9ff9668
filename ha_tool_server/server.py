"""MCP server exposing the Home Assistant tools over stdio."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .const import SERVER_NAME, SERVER_VERSION
from .dispatcher import ResponseEnvelope, ToolDispatcher

if TYPE_CHECKING:
    from .config import HubConfig
    from .ha_client import ToolDescriptor

_LOGGER = logging.getLogger(__name__)


def to_mcp_tool(tool: ToolDescriptor) -> types.Tool:
    """Convert a tool descriptor to an MCP tool listing."""
    return types.Tool(
        name=tool.name,
        description=tool.description,
        inputSchema=tool.input_schema,
    )


def to_call_tool_result(envelope: ResponseEnvelope) -> types.CallToolResult:
    """Convert a response envelope to an MCP tool result."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text) for text in envelope.content],
        isError=envelope.is_error,
    )


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Create an MCP server that routes requests to the dispatcher."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(tool) for tool in dispatcher.list_tools()]

    # Argument errors are reported by the dispatcher
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        envelope = await dispatcher.invoke(name, arguments)
        return to_call_tool_result(envelope)

    return server


async def run_stdio(config: HubConfig) -> None:
    """Serve the tools over stdio until the client disconnects."""
    dispatcher = ToolDispatcher(config)
    server = create_server(dispatcher)

    try:
        async with stdio_server() as (read_stream, write_stream):
            _LOGGER.info("Home Assistant MCP Server running on stdio")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await dispatcher.async_close()
        _LOGGER.info("Home Assistant MCP Server stopped")
