"""Platform configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .const import DEFAULT_NAME
from .exceptions import FliprConfigError

_LOGGER = logging.getLogger(__name__)

KNOWN_KEYS = ("name", "username", "password", "platform")


@dataclass
class FliprConfig:
    """Credentials and name of the platform, as given by the host."""

    username: str
    password: str
    name: str = DEFAULT_NAME

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> FliprConfig:
        """Validate the host configuration object."""
        for key in ("username", "password"):
            value = config.get(key)
            if not isinstance(value, str) or not value:
                raise FliprConfigError(f"Missing or empty '{key}' in configuration")

        unknown = sorted(key for key in config if key not in KNOWN_KEYS)
        if unknown:
            _LOGGER.debug("Ignoring unknown configuration keys: %s", ", ".join(unknown))

        return cls(
            username=config["username"],
            password=config["password"],
            name=config.get("name") or DEFAULT_NAME,
        )
