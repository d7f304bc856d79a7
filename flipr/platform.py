"""Discovery and registration of Flipr accessories on the host."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .accessory import ACCESSORY_TYPES, DeviceKind, FliprAccessory, classify
from .config import FliprConfig
from .const import POLL_INTERVAL
from .exceptions import FliprAuthenticationError
from .flipr import FliprClient
from .host import HostAccessory, HostApi
from .models import Module

_LOGGER = logging.getLogger(__name__)


class FliprPlatform:
    """Bridge between the Flipr account and the host accessories."""

    def __init__(
        self,
        api: HostApi,
        config: Mapping[str, Any],
        client: FliprClient | None = None,
        interval: float = POLL_INTERVAL,
    ) -> None:
        """Initialize the platform.

        Args:
            api: Registration interface of the host
            config: Host configuration object holding the credentials
            client: Optional client. If not provided, one will be created.
            interval: Seconds between two polls of an accessory
        """
        self.api = api
        self.config = FliprConfig.from_mapping(config)
        self.client = client or FliprClient()
        self.interval = interval

        # Accessories restored by the host from its cache
        self.accessories: list[HostAccessory] = []
        self.handlers: dict[str, FliprAccessory] = {}

        _LOGGER.debug("Finished initializing platform: %s", self.config.name)

    def configure_accessory(self, accessory: HostAccessory) -> None:
        """Keep track of an accessory restored from the host cache."""
        _LOGGER.info("Loading accessory from cache: %s", accessory.display_name)
        self.accessories.append(accessory)

    async def did_finish_launching(self) -> list[FliprAccessory]:
        """Authenticate and discover devices once the host cache is restored."""
        try:
            await self.client.authenticate(self.config.username, self.config.password)
        except FliprAuthenticationError as err:
            _LOGGER.error("Could not authenticate on Flipr API: %s", err)
            raise
        _LOGGER.info("Successfully authenticated on Flipr API")
        return await self.discover_devices()

    async def discover_devices(self) -> list[FliprAccessory]:
        """Create or restore an accessory for every supported module."""
        discovered = []
        for module in await self.client.list_modules():
            handler = self._setup_module(module)
            if handler is not None:
                discovered.append(handler)
        return discovered

    def _setup_module(self, module: Module) -> FliprAccessory | None:
        kind = classify(module)
        if kind is None:
            _LOGGER.info("Skipping module %s of type %s", module.serial, module.commercial_type)
            return None
        if module.serial in self.handlers:
            return self.handlers[module.serial]

        _LOGGER.info("Discovered %s module %s", module.commercial_type, module.serial)
        uuid = self.api.generate_uuid(module.serial)
        accessory = next((acc for acc in self.accessories if acc.uuid == uuid), None)

        if accessory is not None:
            _LOGGER.info("Restoring existing accessory from cache: %s", accessory.display_name)
            handler = self._create_handler(kind, accessory, module)
        else:
            _LOGGER.info("Adding new accessory: %s", module.serial)
            accessory = self.api.create_accessory(module.serial, uuid)
            accessory.context["module"] = module.raw
            handler = self._create_handler(kind, accessory, module)
            self.api.register_accessories([accessory])
            self.accessories.append(accessory)

        self.handlers[module.serial] = handler
        handler.start()
        return handler

    def _create_handler(
        self, kind: DeviceKind, accessory: HostAccessory, module: Module
    ) -> FliprAccessory:
        return ACCESSORY_TYPES[kind](self.client, accessory, module, interval=self.interval)

    async def shutdown(self) -> None:
        """Stop polling and release the HTTP session."""
        for handler in self.handlers.values():
            await handler.stop()
        self.handlers.clear()
        await self.client.close_connection()
