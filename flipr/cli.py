"""Command line tool to try the Flipr client against the real API."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import os
import sys

from dotenv import load_dotenv

from .const import COMMERCIAL_TYPE_HUB
from .exceptions import FliprError
from .flipr import FliprClient
from .models import Module

_LOGGER = logging.getLogger(__name__)

# Pause between two hub commands
HUB_COMMAND_DELAY = 2


def get_credentials(args: argparse.Namespace) -> tuple[str, str]:
    """Return credentials from flags, then environment, then an interactive prompt."""
    username = args.username or os.environ.get("FLIPR_USERNAME")
    password = args.password or os.environ.get("FLIPR_PASSWORD")
    if username and password:
        return username, password

    print("Please enter your Flipr credentials:")
    username = username or input("Username: ")
    password = password or getpass.getpass("Password: ")
    return username, password


def _print_module(index: int, module: Module) -> None:
    print(f"  {index}. Serial: {module.serial}")
    print(f"     Type: {module.commercial_type or 'N/A'}")
    print(f"     Status: {module.status or 'Unknown'}")
    print(f"     Last Measure: {module.last_measure or 'N/A'}")


async def show_modules(client: FliprClient) -> None:
    """List the modules and show the last survey of the first active reader."""
    modules = await client.list_modules()
    print(f"Found {len(modules)} module(s):")
    for index, module in enumerate(modules, 1):
        _print_module(index, module)

    active = next(
        (m for m in modules if m.status == "Activated" and m.last_measure),
        None,
    )
    if active is None:
        print("No activated modules with recent measurements found.")
        return

    survey = await client.last_survey(active.serial)
    if survey is None:
        print(f"No survey data available for module {active.serial}.")
        return

    print(f"Last survey of module {active.serial} ({survey.measured_at}):")
    print(f"  Temperature: {survey.temperature}°C")
    print(f"  pH: {survey.ph} ({survey.ph_sector})")
    print(f"  ORP: {survey.orp} mV")
    print(f"  Conductivity: {survey.conductivity}")
    print(f"  UV Index: {survey.uv_index}")
    print(f"  Battery: {survey.battery}")
    print(f"  Disinfectant: {survey.disinfectant} ({survey.disinfectant_sector})")


async def exercise_hub(client: FliprClient, delay: float = HUB_COMMAND_DELAY) -> bool:
    """Read the state of the first hub, then cycle its power and modes."""
    modules = await client.list_modules()
    hub = next((m for m in modules if m.commercial_type == COMMERCIAL_TYPE_HUB), None)
    if hub is None:
        print("No hub modules found.")
        return False

    print(f"Hub {hub.serial} state: {await client.get_hub_state(hub.serial)}")

    results = []
    steps = (
        ("Start", client.start_hub),
        ("Stop", client.stop_hub),
        ("Auto mode", client.set_hub_auto),
        ("Manual mode", client.set_hub_manual),
        ("Scheduled mode", client.set_hub_scheduled),
    )
    for label, command in steps:
        success = await command(hub.serial)
        results.append(success)
        print(f"{label}: {'Success' if success else 'Failed'}")
        await asyncio.sleep(delay)
    return all(results)


async def run(args: argparse.Namespace) -> int:
    """Authenticate and run the selected command."""
    username, password = get_credentials(args)
    async with FliprClient() as client:
        try:
            await client.authenticate(username, password)
            print("Authentication successful!")
            if args.command == "hub":
                return 0 if await exercise_hub(client) else 1
            await show_modules(client)
        except FliprError as err:
            _LOGGER.error("Flipr test failed: %s", err)
            return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flipr", description=__doc__)
    parser.add_argument("command", nargs="?", choices=("modules", "hub"), default="modules")
    parser.add_argument("--username", help="Flipr account, defaults to $FLIPR_USERNAME")
    parser.add_argument("--password", help="Flipr password, defaults to $FLIPR_PASSWORD")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
