"""Startup configuration for the Home Assistant tool server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

import voluptuous as vol

from .const import ENV_API_TOKEN, ENV_API_URL

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(ENV_API_URL): vol.All(str, vol.Strip, vol.Url()),
        vol.Required(ENV_API_TOKEN): vol.All(str, vol.Strip, vol.Length(min=1)),
    },
    extra=vol.REMOVE_EXTRA,
)


class ConfigError(Exception):
    """Raised when the server cannot be configured."""


@dataclass(frozen=True)
class HubConfig:
    """Connection settings for the Home Assistant instance."""

    base_url: str
    token: str


def load_config(environ: Mapping[str, str] | None = None) -> HubConfig:
    """Load the configuration from environment variables.

    Args:
        environ: Variables to read from. Defaults to os.environ.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If a variable is missing or invalid.
    """
    if environ is None:
        environ = os.environ

    values = {
        key: environ[key] for key in (ENV_API_URL, ENV_API_TOKEN) if environ.get(key)
    }
    if len(values) < 2:
        raise ConfigError(
            f"{ENV_API_URL} and {ENV_API_TOKEN} environment variables are required"
        )

    try:
        validated = CONFIG_SCHEMA(values)
    except vol.Invalid as err:
        raise ConfigError(f"Invalid configuration: {err}") from err

    return HubConfig(
        base_url=validated[ENV_API_URL].rstrip("/"),
        token=validated[ENV_API_TOKEN],
    )
