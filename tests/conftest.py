"""
Pytest configuration and shared fixtures.
"""
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.main import app, get_datasource
from src.core.entities.session import Role
from src.infrastructure.gateways.local_mock import LocalMockDataSource
from tests.factories import CLIENT_ID, OTHER_CLIENT_ID, at, make_holding, make_trade


@pytest.fixture
def datasource() -> LocalMockDataSource:
    return LocalMockDataSource(
        users={
            "alice": ("alice-pw", Role.CLIENT, CLIENT_ID),
            "bob": ("bob-pw", Role.CLIENT, OTHER_CLIENT_ID),
            "admin": ("admin-pw", Role.ADMIN, None),
        },
        trades={
            CLIENT_ID: [
                make_trade("BUY", "AAPL", 10, 100, at(1), trade_id=1),
                make_trade("SELL", "AAPL", 10, 120, at(2), trade_id=2),
                make_trade("BUY", "MSFT", 5, 300, at(3), trade_id=3),
                make_trade("SELL", "MSFT", 5, 290, at(4), trade_id=4),
                make_trade("SELL", "TSLA", 1, 200, at(5), status="REJECTED", trade_id=5),
            ],
            OTHER_CLIENT_ID: [
                make_trade("BUY", "NVDA", 1, 400, at(1), trade_id=10),
            ],
        },
        holdings={
            CLIENT_ID: [
                make_holding("X", 10, 20, 25, 250),
                make_holding("Y", 4, 50, 40, 160),
            ],
        },
    )


@pytest.fixture
async def client(datasource):
    """Async HTTP client for testing FastAPI endpoints against the in-memory brokerage."""
    app.dependency_overrides[get_datasource] = lambda: datasource
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
