"""Home Assistant tools served over the Model Context Protocol."""

from __future__ import annotations

from .config import ConfigError, HubConfig, load_config
from .dispatcher import (
    InvalidActionError,
    ResponseEnvelope,
    ToolDispatcher,
    UnknownToolError,
)

__all__ = [
    "ConfigError",
    "HubConfig",
    "InvalidActionError",
    "ResponseEnvelope",
    "ToolDispatcher",
    "UnknownToolError",
    "load_config",
]
