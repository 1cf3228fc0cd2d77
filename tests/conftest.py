import pytest
import pytest_asyncio

from bizup.core.http_client import ApiClient
from bizup.services.notifier import Notifier
from bizup.testing.fake_api import FakeBizupApi

TEST_BASE_URL = "http://bizup.test/api/v1"


@pytest.fixture
def fake_api():
    return FakeBizupApi()


@pytest_asyncio.fixture
async def api_client(fake_api):
    """ApiClient wired to the in-memory fake instead of the network."""
    client = ApiClient(TEST_BASE_URL, transport=fake_api.transport())
    yield client
    await client.aclose()


@pytest.fixture
def notifier():
    return Notifier()
