"""Data models for Flipr library."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .const import HUB_MODE_MANUAL
from .exceptions import FliprDataError


def _nested(data: dict[str, Any], key: str, sub_key: str) -> Any:
    """Return data[key][sub_key], or None when any level is missing."""
    value = data.get(key)
    if isinstance(value, dict):
        return value.get(sub_key)
    return None


@dataclass
class Module:
    """A device reported by the Flipr API."""

    serial: str
    commercial_type: str | None = None
    status: str | None = None
    last_measure: str | None = None
    version: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> Module:
        """Build a module from the vendor JSON."""
        if not isinstance(data, dict) or not data.get("Serial"):
            raise FliprDataError(f"Invalid module data: {data}")
        return cls(
            serial=str(data["Serial"]),
            commercial_type=_nested(data, "CommercialType", "Value"),
            status=_nested(data, "Status", "Status"),
            last_measure=data.get("LastMeasureDateTime") or None,
            version=data.get("Version"),
            raw=data,
        )


@dataclass
class Survey:
    """A single reading of an AnalysR module."""

    temperature: float | None = None
    ph: float | None = None
    ph_sector: str | None = None
    orp: float | None = None
    conductivity: str | None = None
    uv_index: float | None = None
    battery: float | None = None
    disinfectant: float | None = None
    disinfectant_sector: str | None = None
    measured_at: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> Survey:
        """Build a survey from the vendor JSON."""
        if not isinstance(data, dict):
            raise FliprDataError(f"Invalid survey data: {data}")
        return cls(
            temperature=data.get("Temperature"),
            ph=_nested(data, "PH", "Value"),
            ph_sector=_nested(data, "PH", "DeviationSector"),
            orp=_nested(data, "OxydoReductionPotentiel", "Value"),
            conductivity=_nested(data, "Conductivity", "Level"),
            uv_index=data.get("UvIndex"),
            battery=_nested(data, "Battery", "Deviation"),
            disinfectant=_nested(data, "Desinfectant", "Value"),
            disinfectant_sector=_nested(data, "Desinfectant", "DeviationSector"),
            measured_at=data.get("DateTime"),
            raw=data,
        )

    @property
    def has_data(self) -> bool:
        """Whether the survey carries a temperature or a pH value."""
        return self.temperature is not None or self.ph is not None


@dataclass
class HubState:
    """Equipment state of a Start hub."""

    is_on: bool = False
    mode: str = HUB_MODE_MANUAL
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> HubState:
        """Build a hub state from the vendor JSON."""
        if not isinstance(data, dict):
            raise FliprDataError(f"Invalid hub state data: {data}")
        return cls(
            is_on=data.get("stateEquipment") in (1, True, "1"),
            mode=data.get("behavior") or HUB_MODE_MANUAL,
            raw=data,
        )


class HubStatus(Enum):
    """How far the locally mirrored hub state can be trusted."""

    UNKNOWN = "unknown"
    PENDING_WRITE = "pending_write"
    CONFIRMED = "confirmed"
