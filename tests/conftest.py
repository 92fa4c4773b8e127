"""Pytest configuration and fixtures for iSmartGate light tests."""

import asyncio
import secrets

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ismartgate_light.api import ISmartGateLightAPI
from ismartgate_light.config import Credentials

USERNAME = "admin"
PASSWORD = "secret"

CONFIG_PAGE = """<html><body>
<form id="light-val">
  <input type="hidden" name="webtoken" id="webtoken" value="{token}">
  <input type="text" name="light-name" value="Garage">
</form>
</body></html>"""

LOGIN_PAGE = """<html><body>
<form method="post" action="index.php">
  <input type="text" name="login"><input type="password" name="pass">
</form>
</body></html>"""


class FakeController:
    """In-process stand-in for the controller's PHP pages.

    Keeps one valid session cookie and one valid webtoken at a time and
    counts the requests made against it.
    """

    def __init__(self):
        self.session_id = None
        self.token = None
        self.relay_on = False
        self.login_count = 0
        self.command_count = 0
        self.login_forms = []
        self.command_params = []
        # When set, light.php answers with this body instead of the normal logic
        self.forced_response = None
        # When set, the config page is served as these raw bytes
        self.config_body = None
        # When set, the config page omits the webtoken input
        self.hide_token = False
        self.token_sequence = 0

    def expire(self):
        """Invalidate the current webtoken, as the controller does over time."""
        self.token = None

    def _authenticated(self, request):
        return self.session_id is not None and request.cookies.get("PHPSESSID") == self.session_id

    async def handle_login(self, request):
        form = await request.post()
        self.login_count += 1
        self.login_forms.append(dict(form))
        response = web.Response(text=LOGIN_PAGE, content_type="text/html")
        if form.get("login") == USERNAME and form.get("pass") == PASSWORD:
            self.session_id = secrets.token_hex(8)
            response.set_cookie("PHPSESSID", self.session_id)
        return response

    async def handle_index(self, request):
        if request.query.get("op") != "config" or not self._authenticated(request):
            return web.Response(text=LOGIN_PAGE, content_type="text/html")
        if self.config_body is not None:
            self.token = "raw"
            return web.Response(body=self.config_body, content_type="text/html")
        if self.hide_token:
            return web.Response(text="<html><body>maintenance</body></html>", content_type="text/html")
        self.token_sequence += 1
        self.token = f"token-{self.token_sequence}"
        return web.Response(text=CONFIG_PAGE.format(token=self.token), content_type="text/html")

    async def handle_light(self, request):
        self.command_count += 1
        self.command_params.append(dict(request.query))
        if self.forced_response is not None:
            if isinstance(self.forced_response, bytes):
                return web.Response(body=self.forced_response)
            return web.Response(text=self.forced_response)
        if (
            not self._authenticated(request)
            or self.token is None
            or request.query.get("webtoken") != self.token
            or request.query.get("op") != "activate"
        ):
            return web.Response(text="Restricted Access")
        if request.query.get("light") == "0":
            self.relay_on = True
            return web.Response(text="1")
        self.relay_on = False
        return web.Response(text="0")

    def make_app(self):
        app = web.Application()
        app.router.add_post("/index.php", self.handle_login)
        app.router.add_get("/index.php", self.handle_index)
        app.router.add_get("/isg/light.php", self.handle_light)
        return app


@pytest.fixture
def controller():
    """Return a fresh fake controller."""
    return FakeController()


@pytest.fixture
def run_against(controller):
    """Return a runner executing ``scenario(api)`` against a served controller.

    Each call starts the fake controller on a free local port, builds an
    ``ISmartGateLightAPI`` pointing at it and closes both afterwards.
    """

    def run(scenario, username=USERNAME, password=PASSWORD, **api_kwargs):
        async def main():
            async with TestServer(controller.make_app()) as server:
                credentials = Credentials(
                    hostname=f"{server.host}:{server.port}",
                    username=username,
                    password=password,
                )
                api = ISmartGateLightAPI(credentials, **api_kwargs)
                try:
                    return await scenario(api)
                finally:
                    await api.close()

        return asyncio.run(main())

    return run
