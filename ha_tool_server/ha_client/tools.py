"""Tool definitions for Home Assistant interaction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import voluptuous as vol
from voluptuous_openapi import convert

from ..const import (
    TOOL_AUTOMATION_MANAGEMENT,
    TOOL_DEVICE_CONTROL,
    TOOL_EVENT_LISTENING,
    TOOL_NOTIFICATION_HANDLING,
    TOOL_SENSOR_DATA_RETRIEVAL,
    TOOL_SERVICE_CALL,
    TOOL_STATE_MONITORING,
)


class ArgumentError(ValueError):
    """Raised when tool arguments do not match the tool's schema."""


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and argument schema of a tool."""

    name: str
    description: str
    schema: vol.Schema

    @property
    def required_fields(self) -> frozenset[str]:
        """Names of the arguments a caller must provide."""
        return frozenset(
            str(key.schema) for key in self.schema.schema if isinstance(key, vol.Required)
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the arguments, as advertised to callers."""
        return convert(self.schema)

    def validate(self, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
        """Validate raw arguments and return only the declared fields.

        Null values are treated as absent.

        Raises:
            ArgumentError: If a required field is missing or a field has the
                wrong type.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ArgumentError(
                f"Invalid arguments for {self.name}: expected an object"
            )

        present = {key: value for key, value in arguments.items() if value is not None}
        try:
            return self.schema(present)
        except vol.Invalid as err:
            raise ArgumentError(f"Invalid arguments for {self.name}: {err}") from err


def _schema(fields: dict[Any, Any]) -> vol.Schema:
    """Build an argument schema that drops undeclared fields."""
    return vol.Schema(fields, extra=vol.REMOVE_EXTRA)


DEVICE_CONTROL_TOOL = ToolDescriptor(
    name=TOOL_DEVICE_CONTROL,
    description="Control Home Assistant devices such as lights, switches, and thermostats",
    schema=_schema(
        {
            vol.Required("entity_id", description="Entity ID of the device"): str,
            vol.Required(
                "service",
                description="Service to call as domain.service (e.g., 'light.turn_on')",
            ): str,
            vol.Optional("service_data", description="Additional service data"): dict,
        }
    ),
)

SENSOR_DATA_RETRIEVAL_TOOL = ToolDescriptor(
    name=TOOL_SENSOR_DATA_RETRIEVAL,
    description="Retrieve sensor data from Home Assistant",
    schema=_schema(
        {
            vol.Required("entity_id", description="Entity ID of the sensor"): str,
        }
    ),
)

AUTOMATION_MANAGEMENT_TOOL = ToolDescriptor(
    name=TOOL_AUTOMATION_MANAGEMENT,
    description="Manage Home Assistant automations (create, modify, delete)",
    schema=_schema(
        {
            vol.Required(
                "action", description="Action to perform (create, modify, delete)"
            ): str,
            vol.Optional(
                "automation_id",
                description="ID of the automation (required for modify and delete)",
            ): str,
            vol.Optional(
                "automation_data",
                description="Automation data (required for create and modify)",
            ): dict,
        }
    ),
)

STATE_MONITORING_TOOL = ToolDescriptor(
    name=TOOL_STATE_MONITORING,
    description="Monitor the state of Home Assistant entities",
    schema=_schema(
        {
            vol.Required(
                "entity_id", description="Entity ID of the entity to monitor"
            ): str,
        }
    ),
)

NOTIFICATION_HANDLING_TOOL = ToolDescriptor(
    name=TOOL_NOTIFICATION_HANDLING,
    description="Send notifications through Home Assistant's notification system",
    schema=_schema(
        {
            vol.Required("message", description="Notification message"): str,
            vol.Optional("title", description="Notification title"): str,
            vol.Optional("target", description="Notification target"): str,
        }
    ),
)

SERVICE_CALL_TOOL = ToolDescriptor(
    name=TOOL_SERVICE_CALL,
    description="Call Home Assistant services to perform various actions",
    schema=_schema(
        {
            vol.Required(
                "service",
                description="Service to call as domain.service (e.g., 'scene.turn_on')",
            ): str,
            vol.Optional("service_data", description="Additional service data"): dict,
        }
    ),
)

EVENT_LISTENING_TOOL = ToolDescriptor(
    name=TOOL_EVENT_LISTENING,
    description="Listen for and respond to events within Home Assistant",
    schema=_schema(
        {
            vol.Required("event_type", description="Type of event to listen for"): str,
        }
    ),
)

# Order is the order tools are listed to callers
TOOLS: tuple[ToolDescriptor, ...] = (
    DEVICE_CONTROL_TOOL,
    SENSOR_DATA_RETRIEVAL_TOOL,
    AUTOMATION_MANAGEMENT_TOOL,
    STATE_MONITORING_TOOL,
    NOTIFICATION_HANDLING_TOOL,
    SERVICE_CALL_TOOL,
    EVENT_LISTENING_TOOL,
)


def get_tools() -> tuple[ToolDescriptor, ...]:
    """Get all tool definitions.

    Returns:
        The tool descriptors in listing order.
    """
    return TOOLS


def get_tool(name: str) -> ToolDescriptor | None:
    """Get a tool definition by name."""
    for tool in TOOLS:
        if tool.name == name:
            return tool
    return None
