"""
Pytest configuration and shared fixtures for fulfillment tests.
"""
import pytest
import pytest_asyncio
from typing import AsyncGenerator, Dict, List, Optional
from httpx import AsyncClient, ASGITransport

from action_server.integration.base import (
    AccessTokenValidator,
    DeviceProvider,
    ExecuteRequest,
    ExecuteResponse,
    QueryRequest,
    QueryResponse,
    SyncResponse,
)

VALID_TOKEN = "asdf"
AGENT_USER_ID = "1836.15267389"
REQUEST_ID = "ff36a3cc-ec34-11e6-b1a0-64510650abcf"


class FakeValidator(AccessTokenValidator):
    """Accepts a single token."""

    def __init__(self, valid_token: str = VALID_TOKEN, user_id: str = AGENT_USER_ID):
        self.valid_token = valid_token
        self.user_id = user_id
        self.calls: List[str] = []

    async def validate(self, token: str) -> Optional[str]:
        self.calls.append(token)
        if token == self.valid_token:
            return self.user_id
        return None


class FakeProvider(DeviceProvider):
    """Returns canned responses and records the requests it received."""

    def __init__(self):
        self.sync_response = SyncResponse()
        self.query_response = QueryResponse()
        self.execute_response = ExecuteResponse()
        self.error: Optional[Exception] = None

        self.sync_calls: List[str] = []
        self.query_requests: List[QueryRequest] = []
        self.execute_requests: List[ExecuteRequest] = []
        self.disconnect_calls: List[str] = []

    async def sync(self, agent_user_id: str) -> SyncResponse:
        self.sync_calls.append(agent_user_id)
        if self.error:
            raise self.error
        return self.sync_response

    async def query(self, request: QueryRequest) -> QueryResponse:
        self.query_requests.append(request)
        if self.error:
            raise self.error
        return self.query_response

    async def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        self.execute_requests.append(request)
        if self.error:
            raise self.error
        return self.execute_response

    async def disconnect(self, agent_user_id: str) -> None:
        self.disconnect_calls.append(agent_user_id)
        if self.error:
            raise self.error


@pytest.fixture
def validator() -> FakeValidator:
    return FakeValidator()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {
        "content-type": "application/json",
        "authorization": f"bearer {VALID_TOKEN}",
    }


@pytest_asyncio.fixture
async def test_app(validator, provider):
    """Provide a fulfillment app wired to the fake validator and provider."""
    # Import here so settings are loaded lazily
    from action_server.main import create_app
    return create_app(validator=validator, provider=provider)


@pytest_asyncio.fixture
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test"
    ) as client:
        yield client
