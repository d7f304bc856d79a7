"""Accessories polling the Flipr API and feeding host characteristics."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Awaitable

from .const import (
    CHAR_CURRENT_AMBIENT_LIGHT_LEVEL,
    CHAR_CURRENT_TEMPERATURE,
    CHAR_MANUFACTURER,
    CHAR_MODEL,
    CHAR_ON,
    CHAR_SERIAL_NUMBER,
    COMMERCIAL_TYPE_HUB,
    COMMERCIAL_TYPE_READER,
    HUB_MODE_AUTO,
    HUB_MODE_MANUAL,
    MANUFACTURER,
    POLL_INTERVAL,
    SERVICE_ACCESSORY_INFORMATION,
    SERVICE_LIGHT_SENSOR,
    SERVICE_SWITCH,
    SERVICE_TEMPERATURE_SENSOR,
    SUBTYPE_AUTO_MODE,
    SUBTYPE_POWER,
)
from .flipr import FliprClient
from .host import HostAccessory, HostService
from .models import HubState, HubStatus, Module, Survey

_LOGGER = logging.getLogger(__name__)


class DeviceKind(Enum):
    """Kind of accessory built for a module."""

    READER = "reader"
    HUB = "hub"


def classify(module: Module) -> DeviceKind | None:
    """Return the accessory kind of a module, None if it is not supported."""
    if module.commercial_type == COMMERCIAL_TYPE_READER:
        return DeviceKind.READER
    if module.commercial_type == COMMERCIAL_TYPE_HUB:
        return DeviceKind.HUB
    return None


class FliprAccessory(ABC):
    """Base class for an accessory polled on a fixed interval."""

    def __init__(
        self,
        client: FliprClient,
        accessory: HostAccessory,
        module: Module,
        interval: float = POLL_INTERVAL,
    ) -> None:
        self.client = client
        self.accessory = accessory
        self.module = module
        self.interval = interval
        self._task: asyncio.Task | None = None

        info = self._get_or_add_service(SERVICE_ACCESSORY_INFORMATION)
        info.set_characteristic(CHAR_MANUFACTURER, MANUFACTURER)
        info.set_characteristic(CHAR_MODEL, module.commercial_type)
        info.set_characteristic(CHAR_SERIAL_NUMBER, module.serial)

    @property
    def serial(self) -> str:
        """Serial of the polled module."""
        return self.module.serial

    @property
    def running(self) -> bool:
        """Check if the poll loop is active."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Poll once now, then every interval until stopped."""
        if self.running:
            return
        self._task = asyncio.create_task(self._poll_loop(), name=f"flipr-poll-{self.serial}")
        _LOGGER.debug("Started polling %s every %ss", self.serial, self.interval)

    async def stop(self) -> None:
        """Cancel the poll loop and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        _LOGGER.debug("Stopped polling %s", self.serial)

    async def _poll_loop(self) -> None:
        while True:
            await self.poll()
            await asyncio.sleep(self.interval)

    async def poll(self) -> None:
        """Run one update cycle. Failures are logged and never propagate."""
        try:
            await self.update()
        except Exception as err:
            _LOGGER.warning("Update of %s failed: %s", self.serial, err)

    @abstractmethod
    async def update(self) -> Any:
        """Fetch fresh data and push it to the host."""

    def _get_or_add_service(
        self, service_type: str, name: str | None = None, subtype: str | None = None
    ) -> HostService:
        service = self.accessory.get_service(service_type, subtype)
        if service is None:
            service = self.accessory.add_service(service_type, name, subtype)
        return service


class FliprReaderAccessory(FliprAccessory):
    """AnalysR reader exposing water temperature and pH."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.temperature_service = self._get_or_add_service(SERVICE_TEMPERATURE_SENSOR)
        # The host has no pH service, the light level carries the value
        self.ph_service = self._get_or_add_service(SERVICE_LIGHT_SENSOR)

    async def update(self) -> Survey | None:
        """Refresh temperature and pH from the last survey."""
        return await self.fetch_last_survey()

    async def fetch_last_survey(self) -> Survey | None:
        """Push the last survey of the reader to the host.

        A value missing from the survey leaves its characteristic untouched.
        """
        survey = await self.client.last_survey(self.serial)
        if survey is None:
            _LOGGER.debug("No survey for %s, keeping previous values", self.serial)
            return None

        if survey.temperature is None:
            _LOGGER.debug("No temperature for %s, keeping previous value", self.serial)
        else:
            self.temperature_service.update_characteristic(
                CHAR_CURRENT_TEMPERATURE, survey.temperature
            )
            _LOGGER.info("Setting water temp to %s", survey.temperature)

        if survey.ph is None:
            _LOGGER.debug("No pH for %s, keeping previous value", self.serial)
        else:
            self.ph_service.update_characteristic(CHAR_CURRENT_AMBIENT_LIGHT_LEVEL, survey.ph)
            _LOGGER.info("Setting PH to %s", survey.ph)
        return survey


class FliprHubAccessory(FliprAccessory):
    """Start hub exposing equipment power and auto mode as switches."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state = HubState()
        self.status = HubStatus.UNKNOWN

        self.power_service = self._get_or_add_service(
            SERVICE_SWITCH, f"{self.accessory.display_name} Power", SUBTYPE_POWER
        )
        self.mode_service = self._get_or_add_service(
            SERVICE_SWITCH, f"{self.accessory.display_name} Auto", SUBTYPE_AUTO_MODE
        )
        self.power_service.on_set(CHAR_ON, self._set_power)
        self.mode_service.on_set(CHAR_ON, self._set_auto_mode)

    async def update(self) -> HubState | None:
        """Refresh the switches from the vendor hub state."""
        return await self.fetch_hub_state()

    async def fetch_hub_state(self) -> HubState | None:
        """Mirror the vendor hub state into the switches."""
        state = await self.client.get_hub_state(self.serial)
        if state is None:
            _LOGGER.debug("No hub state for %s, keeping previous values", self.serial)
            return None

        self.state = state
        self.status = HubStatus.CONFIRMED
        self._push_state()
        _LOGGER.debug(
            "Hub %s is %s in %s mode", self.serial, "on" if state.is_on else "off", state.mode
        )
        return state

    async def handle_hub_switch(self, value: bool) -> bool:
        """Switch the equipment on or off."""
        label = "on" if value else "off"
        if not await self._write(self.client.set_hub_manual_state(self.serial, value)):
            _LOGGER.warning("Could not switch hub %s %s", self.serial, label)
            return False

        self.state.is_on = value
        self._push_state()
        _LOGGER.info("Hub %s switched %s", self.serial, label)
        return True

    async def handle_hub_mode(self, mode: str) -> bool:
        """Change the hub behaviour."""
        if not await self._write(self.client.set_hub_mode(self.serial, mode)):
            _LOGGER.warning("Could not set hub %s to %s mode", self.serial, mode)
            return False

        self.state.mode = mode
        self._push_state()
        _LOGGER.info("Hub %s set to %s mode", self.serial, mode)
        return True

    async def _write(self, command: Awaitable[bool]) -> bool:
        """Await a control command, tracking the status while it runs."""
        previous = self.status
        self.status = HubStatus.PENDING_WRITE
        success = False
        try:
            success = await command
        finally:
            self.status = HubStatus.CONFIRMED if success else previous
        return success

    async def _set_power(self, value: Any) -> None:
        await self.handle_hub_switch(bool(value))

    async def _set_auto_mode(self, value: Any) -> None:
        await self.handle_hub_mode(HUB_MODE_AUTO if value else HUB_MODE_MANUAL)

    def _push_state(self) -> None:
        self.power_service.update_characteristic(CHAR_ON, self.state.is_on)
        self.mode_service.update_characteristic(CHAR_ON, self.state.mode == HUB_MODE_AUTO)


ACCESSORY_TYPES: dict[DeviceKind, type[FliprAccessory]] = {
    DeviceKind.READER: FliprReaderAccessory,
    DeviceKind.HUB: FliprHubAccessory,
}
