"""Fakes of the HTTP session and of the host platform."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlparse

MODULE_READER = {
    "Serial": "AB12CD",
    "CommercialType": {"Id": "2", "Value": "AnalysR"},
    "Status": {"Comment": None, "DateTime": "2024-06-01T10:00:00", "Status": "Activated"},
    "LastMeasureDateTime": "2024-06-01T10:00:00",
    "Version": "3",
}

MODULE_HUB = {
    "Serial": "HUB001",
    "CommercialType": {"Id": "4", "Value": "Start"},
    "Status": {"Comment": None, "DateTime": "2024-06-01T10:00:00", "Status": "Activated"},
    "LastMeasureDateTime": None,
}

MODULE_OTHER = {
    "Serial": "ZZ999",
    "CommercialType": {"Id": "9", "Value": "SomethingElse"},
}

SURVEY = {
    "MeasureId": 405698,
    "Source": "Sigfox",
    "DateTime": "2024-06-01T10:00:00Z",
    "Temperature": 24.5,
    "PH": {
        "Label": "PH",
        "Message": "Parfait",
        "Deviation": -0.47,
        "Value": 7.2,
        "DeviationSector": "Medium",
    },
    "OxydoReductionPotentiel": {"Label": "Potentiel Redox.", "Value": 474},
    "Conductivity": {"Label": "Conductivité", "Level": "Low"},
    "UvIndex": 0,
    "Battery": {"Label": "Batterie", "Deviation": 0.75},
    "Desinfectant": {
        "Label": "Chlore",
        "Message": "Trop faible",
        "Deviation": -1.01,
        "Value": 0.31986785186370315,
        "DeviationSector": "TooLow",
    },
}

HUB_STATE = {"stateEquipment": 1, "behavior": "auto", "planning": ""}


class FakeResponse:
    """Minimal aiohttp response used as an async context manager."""

    def __init__(self, status: int, body: Any = None) -> None:
        self.status = status
        self._body = body

    async def json(self, content_type: str | None = "application/json") -> Any:
        if isinstance(self._body, str):
            return json.loads(self._body) if self._body.strip() else None
        return self._body

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None


class FakeSession:
    """Minimal aiohttp session answering from a routing table."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = FakeResponse(status, body)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.routes[(method, path)] = error

    def request(self, method: str, url: str, headers=None, data=None) -> FakeResponse:
        path = urlparse(url).path
        self.requests.append({"method": method, "path": path, "headers": headers, "data": data})
        route = self.routes.get((method, path), FakeResponse(404, {"Message": "Not found"}))
        if isinstance(route, Exception):
            raise route
        return route

    async def close(self) -> None:
        self.closed = True


class FakeService:
    """Host service recording every characteristic write."""

    def __init__(self, service_type: str, name: str | None = None, subtype: str | None = None):
        self.service_type = service_type
        self.name = name
        self.subtype = subtype
        self.static: dict[str, Any] = {}
        self.updates: list[tuple[str, Any]] = []
        self.handlers: dict[str, Any] = {}

    def set_characteristic(self, name: str, value: Any) -> FakeService:
        self.static[name] = value
        return self

    def update_characteristic(self, name: str, value: Any) -> FakeService:
        self.updates.append((name, value))
        return self

    def on_set(self, name: str, handler) -> FakeService:
        self.handlers[name] = handler
        return self


class FakeAccessory:
    """Host accessory holding fake services."""

    def __init__(self, display_name: str, uuid: str) -> None:
        self.display_name = display_name
        self.uuid = uuid
        self.context: dict[str, Any] = {}
        self.services: dict[tuple[str, str | None], FakeService] = {}

    def get_service(self, service_type: str, subtype: str | None = None) -> FakeService | None:
        return self.services.get((service_type, subtype))

    def add_service(self, service_type: str, name=None, subtype=None) -> FakeService:
        service = FakeService(service_type, name, subtype)
        self.services[(service_type, subtype)] = service
        return service

    def service_types(self) -> set[str]:
        return {service_type for service_type, _ in self.services}


class FakeHost:
    """Host API recording created and registered accessories."""

    def __init__(self) -> None:
        self.created: list[FakeAccessory] = []
        self.registered: list[FakeAccessory] = []

    def generate_uuid(self, seed: str) -> str:
        return f"uuid-{seed}"

    def create_accessory(self, display_name: str, uuid: str) -> FakeAccessory:
        accessory = FakeAccessory(display_name, uuid)
        self.created.append(accessory)
        return accessory

    def register_accessories(self, accessories) -> None:
        self.registered.extend(accessories)
