"""
TurtleWatch Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (service unit tests)
    ├── test_settings:   Settings pointing at a throwaway SQLite file
    ├── app:             Application with its lifespan running
    ├── test_client:     HTTPX AsyncClient bound to `app`
    └── payload builders: turtle_payload, nest_payload, survey_payload
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["BCRYPT_ROUNDS"] = "4"    # Minimum cost keeps hashing fast

from turtlewatch.config import Settings  # noqa: E402
from turtlewatch.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_turtle(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = turtle
            result = await turtle_service.get_turtle(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path):
    """Settings with a fresh SQLite database file per test."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'turtlewatch_test.db'}",
        log_level="WARNING",
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    Application with startup/shutdown run around the test, so tables exist
    and `app.state.database` is available for direct assertions.
    """
    application = create_app(test_settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Payload Builders
# ══════════════════════════════════════════════════════════════════════════

MEASUREMENTS = {
    "scl_max": 98.5,
    "scl_min": 96.0,
    "scw": 80.2,
    "ccl_max": 104.0,
    "ccl_min": 101.5,
    "ccw": 92.3,
    "tail_length_pl_vent": 12.0,
    "tail_length_vent_tip": 8.5,
    "tail_length_pl_tip": 20.5,
}


@pytest.fixture
def turtle_payload():
    def build(**overrides):
        payload = {
            "name": "Shelly",
            "species": "Caretta caretta",
            "sex": "female",
            "health_condition": "healthy",
            "left_front_tag": "GR-1001",
            **MEASUREMENTS,
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
def nest_payload():
    def build(**overrides):
        payload = {
            "nest_code": "N-001",
            "total_num_eggs": 100,
            "depth_top_egg_h": 35.0,
            "distance_to_sea_s": 22.5,
            "gps_lat": 37.0123,
            "gps_long": 21.6543,
            "date_found": "2025-06-14",
            "beach": "Kyparissia",
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
def survey_payload():
    def build(turtle_id, **overrides):
        payload = {
            "event_type": "nesting",
            "location": "Sector B",
            "turtle_id": turtle_id,
            "health_condition": "healthy",
            "observer": "A. Volunteer",
            **MEASUREMENTS,
        }
        payload.update(overrides)
        return payload
    return build
