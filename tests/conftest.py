"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("APIGEE_EDGE_ORGANIZATION", "test-org")
os.environ.setdefault("APIGEE_EDGE_USERNAME", "admin@example.com")
os.environ.setdefault("APIGEE_EDGE_PASSWORD", "secret")

import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, MagicMock

from main import app
from edge import EdgeClient, EdgeDeveloper
from developers import Developer, DeveloperStorage, EntityCache, get_developer_storage
from users import AccountCreate, AccountStore

DEVELOPER_ID = "6d8f7c3e-2f6b-4a1e-9c5d-0a1b2c3d4e5f"


@pytest.fixture
async def async_client():
    """Async HTTP client for testing API endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_developer_data():
    """Developer as the Edge get developer endpoint returns it."""
    return {
        "developerId": DEVELOPER_ID,
        "email": "jane.doe@example.com",
        "userName": "janedoe",
        "firstName": "Jane",
        "lastName": "Doe",
        "status": "active",
        "organizationName": "test-org",
        "apps": ["weather-app"],
        "companies": [],
        "attributes": [{"name": "team", "value": "platform"}],
        "createdAt": 1546300800000,
        "createdBy": "admin@example.com",
        "lastModifiedAt": 1546300800000,
        "lastModifiedBy": "admin@example.com",
    }


@pytest.fixture
def edge_developer(sample_developer_data):
    return EdgeDeveloper.model_validate(sample_developer_data)


@pytest.fixture
def mock_edge_client():
    """Mock EdgeClient for testing."""
    client = MagicMock(spec=EdgeClient)
    client.organization = "test-org"

    # Mock async methods
    client.list_developers = AsyncMock(return_value=[])
    client.get_developer = AsyncMock()
    client.create_developer = AsyncMock()
    client.update_developer = AsyncMock()
    client.delete_developer = AsyncMock()
    client.set_developer_status = AsyncMock()
    client.list_developer_apps = AsyncMock(return_value=[])
    client.get_developer_app = AsyncMock()
    client.list_api_products = AsyncMock(return_value=[])
    client.get_api_product = AsyncMock()
    client.close = AsyncMock()

    return client


@pytest.fixture
def entity_cache():
    return EntityCache(ttl_seconds=60)


@pytest.fixture
def account_store():
    return AccountStore()


@pytest.fixture
def jane_account(account_store):
    return account_store.add(AccountCreate(email="jane.doe@example.com", name="janedoe"))


@pytest.fixture
def storage(mock_edge_client, entity_cache, account_store):
    return DeveloperStorage(mock_edge_client, entity_cache, account_store)


@pytest.fixture
def make_developer(mock_edge_client, entity_cache, account_store):
    """Build developers wired to the mock collaborators."""
    def _make(values=None, decorated=None):
        return Developer(
            values,
            decorated,
            edge=mock_edge_client,
            entity_cache=entity_cache,
            accounts=account_store
        )
    return _make


@pytest.fixture
def override_storage(storage):
    """Serve the test storage from the developer routes."""
    app.dependency_overrides[get_developer_storage] = lambda: storage
    yield storage
    app.dependency_overrides.clear()
