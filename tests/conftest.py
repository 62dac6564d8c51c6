"""
Pytest Configuration and Fixtures

This module provides:
- Identities and sessions for sign-in tests
- A seeded in-memory content store
- Mock clients for tests that assert on calls
- Test category markers
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.models.identity import ProviderIdentity, Session
from src.storage.base import ContentClient, WriteClient
from src.storage.memory import MemoryContentStore

from tests.sample_data import ADA, get_all_documents


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def memory_store():
    """An in-memory store seeded with two authors, three startups and a playlist."""
    return MemoryContentStore(get_all_documents())


@pytest.fixture
def empty_store():
    """An empty in-memory store."""
    return MemoryContentStore()


@pytest.fixture
def identity():
    """A GitHub identity with no author yet."""
    return ProviderIdentity(
        external_id="303",
        username="linus",
        name="Linus T",
        email="linus@example.com",
        bio=None,
        avatar_url="https://avatars.example.com/linus.png",
    )


@pytest.fixture
def ada_session():
    """Session for the seeded author Ada."""
    return Session(author_id=ADA["_id"], name=ADA["name"], email=ADA["email"])


@pytest.fixture
def mock_client():
    """A mock read client whose uncached view is itself."""
    client = Mock(spec=ContentClient)
    client.name = "mock_client"
    client.fetch.return_value = None
    client.with_config.return_value = client
    return client


@pytest.fixture
def mock_write_client():
    """A mock write client."""
    write_client = Mock(spec=WriteClient)
    write_client.create.side_effect = lambda doc: {**doc, "_id": doc.get("_id", "new-id")}
    write_client.create_if_not_exists.side_effect = lambda doc: dict(doc)
    return write_client


# =============================================================================
# MARKERS FOR TEST CATEGORIES
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "reconciliation: Author lookup-or-create tests"
    )
    config.addinivalue_line(
        "markers", "concurrency: Tests that rely on real threads and timing"
    )
