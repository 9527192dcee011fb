# This project was developed with assistance from AI tools.
"""Shared fixtures.

``client`` wires the real app to a mock async session and a fake oracle.
Overrides are cleared after every test so configuration never leaks.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from helbflow_db import get_db

from helbflow.main import app
from helbflow.services.oracle import get_advisory_oracle

from .factories import FakeOracle


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    app.dependency_overrides.clear()


def _refresh(obj):
    """Mimic a flush: assign the id and created_at a new row would get."""
    if getattr(obj, "id", None) is None:
        obj.id = 1
    if hasattr(obj, "created_at") and obj.created_at is None:
        obj.created_at = datetime(2026, 3, 1, tzinfo=UTC)


@pytest.fixture
def mock_session():
    """Mock async database session; ``add`` is sync like the real one."""
    session = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    session.refresh = AsyncMock(side_effect=_refresh)
    return session


@pytest.fixture
def oracle():
    return FakeOracle()


@pytest.fixture
def client(mock_session, oracle):
    """TestClient against the real app with DB and oracle overridden."""

    async def _get_db():
        yield mock_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_advisory_oracle] = lambda: oracle
    return TestClient(app)
