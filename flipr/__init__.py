"""Python library bridging Flipr pool analysers and hubs to a home-automation host."""

from .accessory import (
    DeviceKind,
    FliprAccessory,
    FliprHubAccessory,
    FliprReaderAccessory,
    classify,
)
from .config import FliprConfig
from .exceptions import (
    FliprAuthenticationError,
    FliprConfigError,
    FliprConnectionError,
    FliprDataError,
    FliprError,
)
from .flipr import FliprClient
from .models import HubState, HubStatus, Module, Survey
from .platform import FliprPlatform

__all__ = [
    "DeviceKind",
    "FliprAccessory",
    "FliprAuthenticationError",
    "FliprClient",
    "FliprConfig",
    "FliprConfigError",
    "FliprConnectionError",
    "FliprDataError",
    "FliprError",
    "FliprHubAccessory",
    "FliprPlatform",
    "FliprReaderAccessory",
    "HubState",
    "HubStatus",
    "Module",
    "Survey",
    "classify",
]
