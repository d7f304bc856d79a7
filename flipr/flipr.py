"""Main Flipr class for talking to the Flipr cloud API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from .const import (
    API_URL,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    ENDPOINT_HUB_MANUAL,
    ENDPOINT_HUB_MODE,
    ENDPOINT_HUB_STATE,
    ENDPOINT_LAST_SURVEY,
    ENDPOINT_MODULES,
    ENDPOINT_TOKEN,
    HUB_MODE_AUTO,
    HUB_MODE_MANUAL,
    HUB_MODE_PLANNING,
    HUB_MODES,
)
from .exceptions import (
    FliprAuthenticationError,
    FliprConnectionError,
    FliprDataError,
    FliprError,
)
from .models import HubState, Module, Survey

_LOGGER = logging.getLogger(__name__)


class FliprClient:
    """Client for the Flipr REST API."""

    def __init__(
        self,
        websession: aiohttp.ClientSession | None = None,
        base_url: str = API_URL,
    ) -> None:
        """Initialize the Flipr client.

        Args:
            websession: Optional aiohttp ClientSession. If not provided, one will be created.
            base_url: Root of the Flipr API, without trailing slash
        """
        self.base_url = base_url.rstrip("/")
        self._websession = websession
        self._own_session = websession is None
        self._access_token: str | None = None

    @property
    def access_token(self) -> str | None:
        """Bearer token obtained by the last successful authentication."""
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        """Check if a bearer token is available."""
        return self._access_token is not None

    async def close_connection(self) -> None:
        """Close the connection and clean up resources."""
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    async def _ensure_session(self) -> None:
        """Ensure a websession exists."""
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True

    async def __aenter__(self) -> FliprClient:
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close_connection()

    async def authenticate(self, username: str, password: str) -> None:
        """Exchange credentials for a bearer token (OAuth2 password grant)."""
        form = {
            "grant_type": "password",
            "username": username,
            "password": password,
        }
        status, data = await self._request("POST", ENDPOINT_TOKEN, data=form, auth=False)
        body = data if isinstance(data, dict) else {}

        if not 200 <= status < 300:
            raise FliprAuthenticationError(
                "Authentication failed",
                status=status,
                error=body.get("error"),
                description=body.get("error_description"),
            )
        if not body.get("access_token"):
            raise FliprAuthenticationError("No access token in authentication response")

        self._access_token = body["access_token"]
        _LOGGER.debug("Authenticated on Flipr API as %s", username)

    async def list_modules(self) -> list[Module]:
        """Fetch the modules of the account, or an empty list on failure."""
        status, data = await self._request("GET", ENDPOINT_MODULES)
        if not 200 <= status < 300:
            _LOGGER.debug("Could not fetch Flipr modules: %s", status)
            return []
        if not isinstance(data, list):
            _LOGGER.debug("Unexpected modules payload: %s", data)
            return []

        modules = []
        for item in data:
            try:
                modules.append(Module.from_dict(item))
            except FliprDataError as err:
                _LOGGER.debug("Ignoring module: %s", err)
        return modules

    async def last_survey(self, serial: str) -> Survey | None:
        """Fetch the last survey of a module, or None when unavailable."""
        status, data = await self._request("GET", ENDPOINT_LAST_SURVEY.format(serial=serial))
        if not 200 <= status < 300:
            _LOGGER.debug("Could not fetch survey for module %s: %s", serial, status)
            return None
        if not data or not isinstance(data, dict):
            _LOGGER.debug("No survey data for module %s", serial)
            return None

        survey = Survey.from_dict(data)
        if not survey.has_data:
            _LOGGER.debug("Empty survey for module %s: %s", serial, data)
            return None
        return survey

    async def get_hub_state(self, serial: str) -> HubState | None:
        """Fetch the equipment state of a hub, or None when unavailable."""
        status, data = await self._request("GET", ENDPOINT_HUB_STATE.format(serial=serial))
        if not 200 <= status < 300 or not isinstance(data, dict):
            _LOGGER.debug("Could not fetch hub state for module %s: %s", serial, status)
            return None
        return HubState.from_dict(data)

    async def set_hub_manual_state(self, serial: str, state: bool) -> bool:
        """Switch the hub equipment on or off. Return True on success."""
        path = ENDPOINT_HUB_MANUAL.format(serial=serial, state="true" if state else "false")
        return await self._command("POST", path, f"set hub manual state for module {serial}")

    async def set_hub_mode(self, serial: str, mode: str) -> bool:
        """Set the hub behaviour (auto, planning or manual). Return True on success."""
        if mode not in HUB_MODES:
            raise ValueError(f"Invalid mode '{mode}'. Must be one of: {', '.join(HUB_MODES)}")
        path = ENDPOINT_HUB_MODE.format(serial=serial, mode=mode)
        return await self._command("PUT", path, f"set hub mode for module {serial}")

    async def start_hub(self, serial: str) -> bool:
        """Switch the hub equipment on."""
        return await self.set_hub_manual_state(serial, True)

    async def stop_hub(self, serial: str) -> bool:
        """Switch the hub equipment off."""
        return await self.set_hub_manual_state(serial, False)

    async def set_hub_auto(self, serial: str) -> bool:
        """Put the hub in auto mode."""
        return await self.set_hub_mode(serial, HUB_MODE_AUTO)

    async def set_hub_scheduled(self, serial: str) -> bool:
        """Put the hub in planning mode."""
        return await self.set_hub_mode(serial, HUB_MODE_PLANNING)

    async def set_hub_manual(self, serial: str) -> bool:
        """Put the hub in manual mode."""
        return await self.set_hub_mode(serial, HUB_MODE_MANUAL)

    async def _command(self, method: str, path: str, action: str) -> bool:
        """Send a control request and report success instead of raising."""
        try:
            status, _ = await self._request(method, path, data="", parse=False)
        except FliprError as err:
            _LOGGER.debug("Error trying to %s: %s", action, err)
            return False
        if not 200 <= status < 300:
            _LOGGER.debug("Could not %s: %s", action, status)
            return False
        return True

    def _headers(self, method: str, auth: bool) -> dict[str, str]:
        """Build the headers for a request."""
        if method == "GET":
            headers = {"Content-Type": CONTENT_TYPE_JSON}
        else:
            headers = {"Content-Type": CONTENT_TYPE_FORM}
        if auth:
            if self._access_token is None:
                raise FliprAuthenticationError("Not authenticated")
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        data: dict[str, str] | str | None = None,
        auth: bool = True,
        parse: bool = True,
    ) -> tuple[int, Any]:
        """Send a request and return its status with the decoded JSON body.

        The body is None when empty, when parse is False, and also when a
        non-2xx response does not carry valid JSON.
        """
        headers = self._headers(method, auth)
        await self._ensure_session()
        assert self._websession is not None
        url = f"{self.base_url}{path}"

        try:
            async with self._websession.request(
                method, url, headers=headers, data=data
            ) as response:
                status = response.status
                body = None
                try:
                    if parse:
                        body = await response.json(content_type=None)
                except ValueError as err:
                    if 200 <= status < 300:
                        raise FliprDataError(f"Failed to parse response of {path}: {err}") from err
        except aiohttp.ClientError as err:
            raise FliprConnectionError(f"Failed to connect to Flipr API: {err}") from err

        # Token responses are not logged
        if auth:
            _LOGGER.debug("%s %s -> %s: %s", method, path, status, body)
        else:
            _LOGGER.debug("%s %s -> %s", method, path, status)
        return status, body
