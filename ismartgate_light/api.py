"""API Client for the iSmartGate light relay.

The controller has no documented API. Its web UI is driven the same way a
browser drives it:

1. POST /index.php with the login form -> PHP session cookie
2. GET /index.php?op=config -> HTML page with a hidden ``webtoken`` input
3. GET /isg/light.php?op=activate&light=N&webtoken=T -> plain text reply

The reply to step 3 is a single digit confirming the new relay state, or the
literal ``Restricted Access`` once the webtoken has expired. An expired token
is refreshed by repeating steps 1 and 2, then the command is sent again.
"""
from __future__ import annotations

import asyncio
import logging

import aiohttp
from bs4 import BeautifulSoup

from .config import Credentials
from .const import (
    CONFIG_PATH,
    CONFIRM_OFF,
    CONFIRM_ON,
    DEFAULT_TIMEOUT,
    FORM_SEND_LOGIN,
    FORM_SESSION_OPEN,
    LIGHT_OFF,
    LIGHT_ON,
    LIGHT_PATH,
    LOGIN_PATH,
    MAX_LOGIN_RETRIES,
    OP_ACTIVATE,
    RESTRICTED_ACCESS,
    WEBTOKEN_ID,
)

_LOGGER = logging.getLogger(__name__)


def create_session() -> aiohttp.ClientSession:
    """Create a client session able to keep cookies from an IP address host.

    aiohttp's default cookie jar drops cookies set by hosts addressed by IP,
    which is how controllers on the local network are usually reached.
    """
    return aiohttp.ClientSession(cookie_jar=aiohttp.CookieJar(unsafe=True))


def extract_webtoken(html: str) -> str | None:
    """Return the value of the ``webtoken`` element, or None if absent."""
    soup = BeautifulSoup(html, "html.parser")
    element = soup.find(id=WEBTOKEN_ID)
    if element is None:
        return None
    value = element.get("value")
    if not value:
        return None
    return value.strip() or None


class ISmartGateLightAPI:
    """API Client for an iSmartGate controller's light relay."""

    def __init__(
        self,
        credentials: Credentials,
        session: aiohttp.ClientSession | None = None,
        debug: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the API client.

        Args:
            credentials: Controller hostname and login details
            session: aiohttp client session; one with an IP-safe cookie jar
                is created (and owned) when not provided
            debug: Log each command attempt and the raw response body
            timeout: Total timeout in seconds for each HTTP request
        """
        self._credentials = credentials
        self._session = session
        self._owns_session = session is None
        self._debug = debug
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._base_url = credentials.base_url
        self._webtoken = ""
        self._login_task: asyncio.Task[bool] | None = None

    @property
    def webtoken(self) -> str:
        """Return the current session token ("" until the first login)."""
        return self._webtoken

    @property
    def session(self) -> aiohttp.ClientSession:
        """Return the HTTP session, creating it on first use."""
        if self._session is not None and self._session.closed:
            _LOGGER.debug("HTTP session is closed, creating a new one")
            self._session = None
        if self._session is None:
            self._session = create_session()
            self._owns_session = True
        return self._session

    @property
    def cookie_jar(self) -> aiohttp.abc.AbstractCookieJar:
        """Return the cookie jar shared by every request."""
        return self.session.cookie_jar

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def login(self) -> bool:
        """Log in and refresh the webtoken.

        Only one login exchange runs at a time. Callers arriving while one is
        in flight wait for that exchange and share its result.

        Returns:
            True if a new webtoken was stored
        """
        if self._login_task is None or self._login_task.done():
            self._login_task = asyncio.ensure_future(self._async_login())
        return await asyncio.shield(self._login_task)

    async def _async_login(self) -> bool:
        login_url = f"{self._base_url}{LOGIN_PATH}"
        login_data = {
            "login": self._credentials.username,
            "pass": self._credentials.password,
            "send-login": FORM_SEND_LOGIN,
            "sesion-abierta": FORM_SESSION_OPEN,
        }

        try:
            _LOGGER.debug("Logging in to %s as %s", login_url, self._credentials.username)
            # aiohttp form-encodes a dict body and sets the
            # application/x-www-form-urlencoded content type
            async with self.session.post(
                login_url,
                data=login_data,
                timeout=self._timeout,
            ) as response:
                response.raise_for_status()
                await response.read()
            _LOGGER.info("Login successful")

            async with self.session.get(
                f"{self._base_url}{CONFIG_PATH}",
                timeout=self._timeout,
            ) as response:
                response.raise_for_status()
                html = await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as ex:
            _LOGGER.error("Login to %s failed: %s", self._credentials.hostname, ex)
            return False

        webtoken = extract_webtoken(html)
        if webtoken is None:
            _LOGGER.error("No %s element found on the configuration page", WEBTOKEN_ID)
            return False

        self._webtoken = webtoken
        _LOGGER.info("Webtoken identified")
        return True

    async def set_light(self, on: bool, retries: int = MAX_LOGIN_RETRIES) -> bool:
        """Switch the light on or off.

        If the controller answers ``Restricted Access`` the client logs in
        again and repeats the command, at most ``retries`` times.

        Returns:
            True if the controller confirmed the new state
        """
        action = "on" if on else "off"
        params = {
            "op": OP_ACTIVATE,
            "light": LIGHT_ON if on else LIGHT_OFF,
            "webtoken": self._webtoken,
        }
        expected = CONFIRM_ON if on else CONFIRM_OFF

        try:
            if self._debug:
                _LOGGER.info("Attempting to turn %s light", action)
            async with self.session.get(
                f"{self._base_url}{LIGHT_PATH}",
                params=params,
                timeout=self._timeout,
            ) as response:
                body = (await response.text(errors="replace")).strip()
        except (aiohttp.ClientError, asyncio.TimeoutError) as ex:
            _LOGGER.error("Error turning %s light: %s", action, ex)
            return False

        if self._debug:
            _LOGGER.info("Light response: %s", body)

        if body == expected:
            _LOGGER.info("Light turned %s", action)
            return True

        if body == RESTRICTED_ACCESS:
            if retries <= 0:
                _LOGGER.error("Light turn %s rejected after refreshing the token", action)
                return False
            _LOGGER.warning("Login token expired, refreshing token")
            await self.login()
            return await self.set_light(on, retries - 1)

        _LOGGER.error("Light did not respond (got %r)", body)
        return False
