"""Light accessory for the iSmartGate controller."""
from __future__ import annotations

import logging
from typing import Any

import aiohttp

from .api import ISmartGateLightAPI
from .config import credentials_from_config, validate_config
from .const import CONF_DEBUG, CONF_NAME, CONF_TIMEOUT, DEFAULT_NAME

_LOGGER = logging.getLogger(__name__)


async def async_setup_light(
    config: dict[str, Any],
    session: aiohttp.ClientSession | None = None,
) -> ISmartGateLight:
    """Set up an iSmartGate light from host configuration.

    Validates the configuration, logs in once and returns the accessory. A
    failed login is logged but does not prevent setup; the next command
    retries it.
    """
    config = validate_config(config)
    api = ISmartGateLightAPI(
        credentials_from_config(config),
        session=session,
        debug=config[CONF_DEBUG],
        timeout=config[CONF_TIMEOUT],
    )
    light = ISmartGateLight(api, name=config[CONF_NAME])
    await light.async_setup()
    return light


class ISmartGateLight:
    """Representation of the iSmartGate light relay.

    The on/off state is the last state requested by the host. The controller
    offers no way to read the relay back, so it is never polled.
    """

    def __init__(self, api: ISmartGateLightAPI, name: str = DEFAULT_NAME) -> None:
        """Initialize the light."""
        self.api = api
        self.name = name
        self._is_on = False

    async def async_setup(self) -> bool:
        """Perform the initial login."""
        result = await self.api.login()
        _LOGGER.info("%s finished initializing", self.name)
        return result

    async def async_close(self) -> None:
        """Release the HTTP session."""
        await self.api.close()

    def get_on(self) -> bool:
        """Return the last commanded state without contacting the controller."""
        _LOGGER.info("Current state of %s was returned: %s", self.name, "ON" if self._is_on else "OFF")
        return self._is_on

    async def set_on(self, value: bool) -> bool:
        """Set the light state.

        The reported state changes immediately, before the controller
        answers, and is kept even if the command fails.

        Returns:
            True if the controller confirmed the command
        """
        self._is_on = bool(value)
        _LOGGER.info("%s state was set to: %s", self.name, "ON" if self._is_on else "OFF")
        return await self.api.set_light(self._is_on)

    def identify(self) -> None:
        """Handle an identify request from the host."""
        _LOGGER.info("Identify %s", self.name)
