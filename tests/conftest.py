# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Builds a fresh application (and user store) for every test
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("FRONTEND_URL", "http://localhost:5173")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.services.user_store import UserStore


FRONTEND_ORIGIN = "http://localhost:5173"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings with defaults only (no .env file is read)."""
    return Settings(_env_file=None, FRONTEND_URL=FRONTEND_ORIGIN)


@pytest.fixture
def store():
    """A user store seeded with the two sample users."""
    return UserStore.with_sample_data()


@pytest.fixture
def empty_store():
    """A user store with no users."""
    return UserStore()


@pytest.fixture
def app(test_settings, store):
    """An application serving the `store` fixture."""
    return create_app(app_settings=test_settings, store=store)


@pytest.fixture
def client(app):
    """Test client with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def new_user_payload():
    """A valid create-user body."""
    return {"name": "Ann", "email": "ann@x.com"}
