from unittest.mock import MagicMock

import pytest

from flipr import (
    FliprAuthenticationError,
    FliprClient,
    FliprConfigError,
    FliprHubAccessory,
    FliprPlatform,
    FliprReaderAccessory,
    Module,
)
from tests.common import MODULE_HUB, MODULE_OTHER, MODULE_READER, FakeAccessory

CONFIG = {"platform": "Flipr", "name": "Pool", "username": "user@example.com", "password": "secret"}


def _mock_client(*modules):
    client = MagicMock(spec=FliprClient)
    client.list_modules.return_value = [Module.from_dict(m) for m in modules]
    client.last_survey.return_value = None
    client.get_hub_state.return_value = None
    return client


@pytest.mark.asyncio
async def test_discovery_registers_new_accessories(host):
    client = _mock_client(MODULE_READER, MODULE_HUB)
    platform = FliprPlatform(host, CONFIG, client=client)

    handlers = await platform.did_finish_launching()

    client.authenticate.assert_awaited_once_with("user@example.com", "secret")
    assert isinstance(handlers[0], FliprReaderAccessory)
    assert isinstance(handlers[1], FliprHubAccessory)
    assert [acc.uuid for acc in host.registered] == ["uuid-AB12CD", "uuid-HUB001"]
    assert host.registered[0].context["module"] == MODULE_READER
    assert all(handler.running for handler in handlers)

    await platform.shutdown()
    assert not any(handler.running for handler in handlers)
    client.close_connection.assert_awaited_once()


@pytest.mark.asyncio
async def test_unknown_module_is_skipped(host):
    client = _mock_client(MODULE_OTHER)
    platform = FliprPlatform(host, CONFIG, client=client)

    handlers = await platform.did_finish_launching()

    assert handlers == []
    assert host.created == []
    assert host.registered == []
    client.last_survey.assert_not_called()


@pytest.mark.asyncio
async def test_hub_module_does_not_fetch_surveys(host):
    client = _mock_client(MODULE_HUB)
    platform = FliprPlatform(host, CONFIG, client=client)

    await platform.did_finish_launching()
    await platform.shutdown()

    accessory = host.created[0]
    assert "TemperatureSensor" not in accessory.service_types()
    assert "LightSensor" not in accessory.service_types()
    client.last_survey.assert_not_called()


@pytest.mark.asyncio
async def test_cached_accessory_is_reused(host):
    client = _mock_client(MODULE_READER)
    platform = FliprPlatform(host, CONFIG, client=client)
    cached = FakeAccessory("AB12CD", "uuid-AB12CD")
    platform.configure_accessory(cached)

    handlers = await platform.did_finish_launching()
    await platform.shutdown()

    assert handlers[0].accessory is cached
    assert host.created == []
    assert host.registered == []


@pytest.mark.asyncio
async def test_discovery_twice_keeps_one_handler(host):
    client = _mock_client(MODULE_READER)
    platform = FliprPlatform(host, CONFIG, client=client)

    first = await platform.did_finish_launching()
    second = await platform.discover_devices()
    await platform.shutdown()

    assert first[0] is second[0]
    assert len(host.registered) == 1


@pytest.mark.asyncio
async def test_authentication_failure_halts_discovery(host):
    client = _mock_client(MODULE_READER)
    client.authenticate.side_effect = FliprAuthenticationError(
        "Authentication failed", status=400, error="invalid_grant", description="bad"
    )
    platform = FliprPlatform(host, CONFIG, client=client)

    with pytest.raises(FliprAuthenticationError):
        await platform.did_finish_launching()

    client.list_modules.assert_not_called()
    assert host.registered == []


@pytest.mark.asyncio
async def test_no_modules(host):
    client = _mock_client()
    platform = FliprPlatform(host, CONFIG, client=client)

    assert await platform.did_finish_launching() == []


def test_invalid_config(host):
    with pytest.raises(FliprConfigError):
        FliprPlatform(host, {"username": "user@example.com"}, client=_mock_client())
