"""Dispatch of tool invocations to Home Assistant REST calls.

Each tool has one handler in the HANDLERS table. A handler decodes the raw
arguments into the tool's argument record, maps the record to a single
HubRequest and labels the JSON result. ToolDispatcher.invoke() wraps every
outcome, success or failure, in a ResponseEnvelope.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping
from urllib.parse import quote

from .const import (
    API_AUTOMATION,
    API_EVENTS,
    API_NOTIFY,
    API_SERVICES,
    API_STATES,
    AUTOMATION_ACTIONS,
    AUTOMATION_CREATE,
    AUTOMATION_MODIFY,
    LABEL_AUTOMATION_MANAGEMENT,
    LABEL_DEVICE_CONTROL,
    LABEL_EVENT_LISTENING,
    LABEL_NOTIFICATION_HANDLING,
    LABEL_SENSOR_DATA,
    LABEL_SERVICE_CALL,
    LABEL_STATE_MONITORING,
)
from .ha_client import (
    ArgumentError,
    HomeAssistantClient,
    HubRequest,
    ToolDescriptor,
    get_tools,
)
from .ha_client.tools import (
    AUTOMATION_MANAGEMENT_TOOL,
    DEVICE_CONTROL_TOOL,
    EVENT_LISTENING_TOOL,
    NOTIFICATION_HANDLING_TOOL,
    SENSOR_DATA_RETRIEVAL_TOOL,
    SERVICE_CALL_TOOL,
    STATE_MONITORING_TOOL,
)

if TYPE_CHECKING:
    from .config import HubConfig

_LOGGER = logging.getLogger(__name__)


class UnknownToolError(LookupError):
    """Raised when no handler is registered for a tool name."""

    def __init__(self, name: str) -> None:
        """Initialize the error."""
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidActionError(ValueError):
    """Raised for an automation action outside create, modify and delete."""

    def __init__(self, action: str) -> None:
        """Initialize the error."""
        super().__init__(f"Invalid action: {action}")
        self.action = action


@dataclass(frozen=True)
class ResponseEnvelope:
    """Uniform result of a tool invocation."""

    content: tuple[str, ...]
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> ResponseEnvelope:
        """Create a success envelope with one text block."""
        return cls(content=(text,))

    @classmethod
    def error(cls, text: str) -> ResponseEnvelope:
        """Create an error envelope with one text block."""
        return cls(content=(text,), is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(self.content)


# Argument records, one per argument shape


@dataclass(frozen=True)
class DeviceControlArgs:
    entity_id: str
    service: str
    service_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EntityArgs:
    entity_id: str


@dataclass(frozen=True)
class AutomationArgs:
    action: str
    automation_id: str | None = None
    automation_data: dict[str, Any] | None = None


@dataclass(frozen=True)
class NotificationArgs:
    message: str
    title: str | None = None
    target: str | None = None


@dataclass(frozen=True)
class ServiceCallArgs:
    service: str
    service_data: dict[str, Any] | None = None


@dataclass(frozen=True)
class EventArgs:
    event_type: str


def _segment(value: str) -> str:
    """Quote a value for use as a single path segment."""
    return quote(value, safe="")


def split_service(service: str) -> tuple[str, str]:
    """Split 'domain.service' on the first dot.

    Raises:
        ArgumentError: If either part is missing.
    """
    domain, _, action = service.partition(".")
    if not domain or not action:
        raise ArgumentError(
            f"Invalid service: '{service}' (expected domain.service, e.g. light.turn_on)"
        )
    return domain, action


def _service_path(service: str) -> str:
    domain, action = split_service(service)
    return f"{API_SERVICES}/{_segment(domain)}/{_segment(action)}"


def _build_device_control(args: DeviceControlArgs) -> HubRequest:
    return HubRequest(
        method="POST",
        path=_service_path(args.service),
        body={"entity_id": args.entity_id, **args.service_data},
    )


def _build_entity_state(args: EntityArgs) -> HubRequest:
    return HubRequest(method="GET", path=f"{API_STATES}/{_segment(args.entity_id)}")


def _build_automation(args: AutomationArgs) -> HubRequest:
    """Map an automation action to its sub-route and body."""
    if args.action not in AUTOMATION_ACTIONS:
        raise InvalidActionError(args.action)

    # An absent automation_id is left out of the body
    id_field = {} if args.automation_id is None else {"automation_id": args.automation_id}

    body: dict[str, Any] | None
    if args.action == AUTOMATION_CREATE:
        body = args.automation_data
    elif args.action == AUTOMATION_MODIFY:
        body = {**id_field, **(args.automation_data or {})}
    else:
        body = id_field

    return HubRequest(method="POST", path=f"{API_AUTOMATION}{args.action}", body=body)


def _build_notification(args: NotificationArgs) -> HubRequest:
    body = {"message": args.message, "title": args.title, "target": args.target}
    return HubRequest(
        method="POST",
        path=API_NOTIFY,
        body={key: value for key, value in body.items() if value is not None},
    )


def _build_service_call(args: ServiceCallArgs) -> HubRequest:
    return HubRequest(method="POST", path=_service_path(args.service), body=args.service_data)


def _build_event(args: EventArgs) -> HubRequest:
    return HubRequest(method="GET", path=f"{API_EVENTS}/{_segment(args.event_type)}")


@dataclass(frozen=True)
class ToolHandler:
    """Binds a tool to its argument record, request mapping and result label."""

    tool: ToolDescriptor
    record: type
    build: Callable[[Any], HubRequest]
    label: str

    def decode(self, arguments: Mapping[str, Any] | None) -> Any:
        """Validate raw arguments into the tool's argument record."""
        return self.record(**self.tool.validate(arguments))

    def request_for(self, arguments: Mapping[str, Any] | None) -> HubRequest:
        """Build the request for raw arguments."""
        return self.build(self.decode(arguments))


HANDLERS: dict[str, ToolHandler] = {
    handler.tool.name: handler
    for handler in (
        ToolHandler(DEVICE_CONTROL_TOOL, DeviceControlArgs, _build_device_control, LABEL_DEVICE_CONTROL),
        ToolHandler(SENSOR_DATA_RETRIEVAL_TOOL, EntityArgs, _build_entity_state, LABEL_SENSOR_DATA),
        ToolHandler(AUTOMATION_MANAGEMENT_TOOL, AutomationArgs, _build_automation, LABEL_AUTOMATION_MANAGEMENT),
        ToolHandler(STATE_MONITORING_TOOL, EntityArgs, _build_entity_state, LABEL_STATE_MONITORING),
        ToolHandler(NOTIFICATION_HANDLING_TOOL, NotificationArgs, _build_notification, LABEL_NOTIFICATION_HANDLING),
        ToolHandler(SERVICE_CALL_TOOL, ServiceCallArgs, _build_service_call, LABEL_SERVICE_CALL),
        ToolHandler(EVENT_LISTENING_TOOL, EventArgs, _build_event, LABEL_EVENT_LISTENING),
    )
}


class ToolDispatcher:
    """Executes cataloged tools against Home Assistant."""

    def __init__(
        self,
        config: HubConfig,
        api: HomeAssistantClient | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Base URL and token of the Home Assistant instance.
            api: Optional client to send requests with. Defaults to a
                HomeAssistantClient for the given config.
        """
        self.api = api if api is not None else HomeAssistantClient(config)

    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        """Get the tool catalog."""
        return get_tools()

    def build_request(
        self, tool_name: str, arguments: Mapping[str, Any] | None
    ) -> HubRequest:
        """Build the request a tool invocation would send, without sending it.

        Raises:
            UnknownToolError: If the tool is not cataloged.
            ArgumentError: If the arguments do not match the tool's schema.
            InvalidActionError: For an unsupported automation action.
        """
        handler = HANDLERS.get(tool_name)
        if handler is None:
            raise UnknownToolError(tool_name)
        return handler.request_for(arguments)

    async def invoke(
        self, tool_name: str, arguments: Mapping[str, Any] | None
    ) -> ResponseEnvelope:
        """Execute a tool and return the result envelope.

        Args:
            tool_name: The name of the tool to execute.
            arguments: The tool arguments.

        Returns:
            A success envelope with the labelled JSON result, or an error
            envelope with the failure message. Never raises.
        """
        handler = HANDLERS.get(tool_name)
        if handler is None:
            _LOGGER.warning("Unknown tool requested: %s", tool_name)
            return ResponseEnvelope.error(str(UnknownToolError(tool_name)))

        _LOGGER.info("Invoking tool %s", tool_name)
        try:
            request = handler.request_for(arguments)
            result = await self.api.async_request(request)
            text = f"{handler.label}: {json.dumps(result)}"
        except Exception as err:
            _LOGGER.error("Tool execution error (%s): %s", tool_name, err)
            return ResponseEnvelope.error(str(err) or type(err).__name__)

        return ResponseEnvelope.success(text)

    async def async_close(self) -> None:
        """Release the client's resources."""
        await self.api.async_close()
