import pytest

from flipr import FliprClient
from tests.common import FakeHost, FakeSession


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    """Client already holding a token."""
    client = FliprClient(websession=session)
    client._access_token = "token123"
    return client


@pytest.fixture
def host():
    return FakeHost()
