"""Command line for driving an iSmartGate light from a terminal.

Useful for checking a controller's on/off numbering before wiring the
client into a host.
"""
from __future__ import annotations

import asyncio
import logging
import sys

import click

from .const import DEFAULT_TIMEOUT
from .light import async_setup_light


async def _run(config: dict, action: str) -> bool:
    light = await async_setup_light(config)
    try:
        if action == "login":
            return bool(light.api.webtoken)
        return await light.set_on(action == "on")
    finally:
        await light.async_close()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--hostname", required=True, help="Controller address, e.g. 192.168.1.20")
@click.option("--username", required=True)
@click.option("--password", required=True, prompt=True, hide_input=True)
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True,
              help="Per request timeout in seconds")
@click.option("--debug", is_flag=True, help="Log each request and raw response")
@click.argument("action", type=click.Choice(["on", "off", "login"]))
def cli(hostname, username, password, timeout, debug, action):
    """Switch the light ON or OFF, or just LOGIN and fetch a webtoken."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = {
        "hostname": hostname,
        "username": username,
        "password": password,
        "timeout": timeout,
        "debug": debug,
    }
    if asyncio.run(_run(config, action)):
        click.secho(f"✓ {action} succeeded", fg="green")
        sys.exit(0)
    click.secho(f"✗ {action} failed", fg="red", err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
