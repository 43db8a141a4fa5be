"""Shared fixtures for web API tests."""

import pytest
from fastapi.testclient import TestClient

from cli.config_models import ChatbotConfig
from web.app import create_app


@pytest.fixture
def app_config(tmp_path):
    return ChatbotConfig.from_dict({"database": {"url": f"sqlite:///{tmp_path / 'web.db'}"}})


@pytest.fixture
def app(app_config):
    return create_app(app_config)


@pytest.fixture
def client(app):
    """Test client; entering the context runs the lifespan (opens the store)."""
    with TestClient(app) as c:
        yield c
