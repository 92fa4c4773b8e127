"""Configuration validation for the iSmartGate Light client."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from .const import (
    CONF_DEBUG,
    CONF_HOSTNAME,
    CONF_NAME,
    CONF_PASSWORD,
    CONF_TIMEOUT,
    CONF_USERNAME,
    DEFAULT_NAME,
    DEFAULT_TIMEOUT,
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Required(CONF_HOSTNAME): vol.All(str, vol.Length(min=1)),
        vol.Required(CONF_USERNAME): str,
        vol.Required(CONF_PASSWORD): str,
        vol.Optional(CONF_DEBUG, default=False): bool,
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class Credentials:
    """Login details for one controller."""

    hostname: str
    username: str
    password: str

    @property
    def base_url(self) -> str:
        """Return the controller base URL."""
        return f"http://{self.hostname}"


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Validate host supplied configuration and fill in defaults.

    Raises:
        voluptuous.MultipleInvalid: if a required key is missing or a value
            has the wrong type.
    """
    return CONFIG_SCHEMA(dict(config))


def credentials_from_config(config: dict[str, Any]) -> Credentials:
    """Build credentials from a validated configuration."""
    return Credentials(
        hostname=config[CONF_HOSTNAME],
        username=config[CONF_USERNAME],
        password=config[CONF_PASSWORD],
    )
