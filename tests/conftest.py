"""Shared test fixtures."""

import os
from typing import Any

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("REFERENCE_PROVIDER", "static")
os.environ.setdefault("OFFER_SWEEP_INTERVAL_SECONDS", "0")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.fm_reference.infrastructure.static_catalog import StaticPlayerProvider  # noqa: E402
from src.main import app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeBudgetRepository,
    FakeLeagueRepository,
    FakeLineupRepository,
    FakeOfferRepository,
    FakeRosterRepository,
    FakeSession,
    InMemoryStore,
    make_provider,
)


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh per-test state: two members of league-1 with 75M each."""
    s = InMemoryStore()
    s.seed_member("alice")
    s.seed_member("bob")
    return s


@pytest.fixture
def db(store: InMemoryStore) -> FakeSession:
    return FakeSession(store)


@pytest.fixture
def provider() -> StaticPlayerProvider:
    return make_provider()


@pytest.fixture
def repos(store: InMemoryStore) -> dict[str, Any]:
    return {
        "league_repo": FakeLeagueRepository(store),
        "budget_repo": FakeBudgetRepository(store),
        "roster_repo": FakeRosterRepository(store),
        "lineup_repo": FakeLineupRepository(store),
        "offer_repo": FakeOfferRepository(store),
    }
