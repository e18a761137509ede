"""
Phonebook Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own freshly seeded ContactDirectory and its own
       application instance, so mutations never leak between tests.

Fixtures:
    ├── directory: Seeded ContactDirectory (ids 1-4)
    ├── fixed_ids: Makes the service hand out predictable ids
    ├── test_app: FastAPI app bound to `directory`
    └── test_client: HTTPX AsyncClient talking to `test_app`
"""

import itertools
import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Reduce noise during tests; must be set before phonebook.config is imported
os.environ.setdefault("LOG_LEVEL", "WARNING")

from phonebook.directory import ContactDirectory  # noqa: E402
from phonebook.main import create_app  # noqa: E402
from phonebook.services.contact_service import contact_service  # noqa: E402


@pytest.fixture
def directory():
    """A directory holding the four seed contacts."""
    return ContactDirectory.seeded()


@pytest.fixture
def fixed_ids(monkeypatch):
    """
    Replace random id generation with a counter starting at 500.

    Returns the list of ids handed out so far.
    """
    issued = []
    counter = itertools.count(500)

    def next_id(upper_bound):
        value = next(counter)
        issued.append(value)
        return value

    monkeypatch.setattr(contact_service, "_id_factory", next_id)
    return issued


@pytest.fixture
def test_app(directory):
    return create_app(directory=directory)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app via ASGITransport.

    Usage:
        async def test_info(test_client):
            response = await test_client.get("/info")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
