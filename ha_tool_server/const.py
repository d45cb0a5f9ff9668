"""Constants for the Home Assistant tool server."""

SERVER_NAME = "home-assistant"
SERVER_VERSION = "0.1.0"

# Environment variables
ENV_API_URL = "HOME_ASSISTANT_API_URL"
ENV_API_TOKEN = "HOME_ASSISTANT_API_TOKEN"
ENV_LOG_LEVEL = "HOME_ASSISTANT_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"

# Tool names
TOOL_DEVICE_CONTROL = "device_control"
TOOL_SENSOR_DATA_RETRIEVAL = "sensor_data_retrieval"
TOOL_AUTOMATION_MANAGEMENT = "automation_management"
TOOL_STATE_MONITORING = "state_monitoring"
TOOL_NOTIFICATION_HANDLING = "notification_handling"
TOOL_SERVICE_CALL = "service_call"
TOOL_EVENT_LISTENING = "event_listening"

# Automation actions, each one maps to a sub-route of the automation service
AUTOMATION_CREATE = "create"
AUTOMATION_MODIFY = "modify"
AUTOMATION_DELETE = "delete"

AUTOMATION_ACTIONS = [
    AUTOMATION_CREATE,
    AUTOMATION_MODIFY,
    AUTOMATION_DELETE,
]

# Hub REST endpoints
API_SERVICES = "/api/services"
API_STATES = "/api/states"
API_EVENTS = "/api/events"
API_AUTOMATION = f"{API_SERVICES}/automation/"
API_NOTIFY = f"{API_SERVICES}/notify"

# Prefixes for successful tool results
LABEL_DEVICE_CONTROL = "Device control result"
LABEL_SENSOR_DATA = "Sensor data"
LABEL_AUTOMATION_MANAGEMENT = "Automation management result"
LABEL_STATE_MONITORING = "State monitoring result"
LABEL_NOTIFICATION_HANDLING = "Notification handling result"
LABEL_SERVICE_CALL = "Service call result"
LABEL_EVENT_LISTENING = "Event listening result"
