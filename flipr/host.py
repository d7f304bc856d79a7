"""Interface of the home-automation host the bridge plugs into."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol

SetHandler = Callable[[Any], Awaitable[Any]]


class HostService(Protocol):
    """A service (sensor, switch...) of a host accessory."""

    def set_characteristic(self, name: str, value: Any) -> HostService:
        """Set a static characteristic value."""

    def update_characteristic(self, name: str, value: Any) -> HostService:
        """Push a new characteristic value to the host."""

    def on_set(self, name: str, handler: SetHandler) -> HostService:
        """Register the coroutine called when the host writes a characteristic."""


class HostAccessory(Protocol):
    """An accessory object owned by the host."""

    uuid: str
    display_name: str
    context: dict[str, Any]

    def get_service(self, service_type: str, subtype: str | None = None) -> HostService | None:
        """Return the service of that type and subtype, if present."""

    def add_service(
        self, service_type: str, name: str | None = None, subtype: str | None = None
    ) -> HostService:
        """Create a service on the accessory."""


class HostApi(Protocol):
    """Registration calls exposed by the host."""

    def generate_uuid(self, seed: str) -> str:
        """Derive a stable accessory identifier."""

    def create_accessory(self, display_name: str, uuid: str) -> HostAccessory:
        """Create a new, unregistered accessory."""

    def register_accessories(self, accessories: list[HostAccessory]) -> None:
        """Link new accessories to the platform."""
