"""Shared test fixtures for the pattern chatbot."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chat import ChatService, ChatStore  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    """Fresh database file for each test."""
    return tmp_path / "chat.db"


@pytest.fixture
def store(db_path):
    """Opened and seeded store."""
    s = ChatStore(db_path).open()
    yield s
    s.close()


@pytest.fixture
def empty_store(db_path):
    """Opened store with tables but no seed rows."""
    s = ChatStore(db_path).open(seed=False)
    yield s
    s.close()


@pytest.fixture
def service(store):
    return ChatService(store)
