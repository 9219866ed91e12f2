# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from dependencies.auth import get_current_principal
from models.enums import Role, Segment
from models.principal import Principal


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login_as(app):
    """Override the authenticated principal for every request."""

    def _login(principal: Principal):
        app.dependency_overrides[get_current_principal] = lambda: principal

    yield _login
    app.dependency_overrides.clear()


@pytest.fixture
def internal_admin():
    """Internal admin principal."""
    return Principal(role=Role.admin, segment=Segment.internal, organization_id="org-hq", user_id="u-1")


@pytest.fixture
def partner_admin():
    """Partner admin principal."""
    return Principal(role=Role.admin, segment=Segment.partner, organization_id="X", user_id="u-2")


@pytest.fixture
def internal_editor():
    """Internal editor principal."""
    return Principal(role=Role.editor, segment=Segment.internal, organization_id="Y", user_id="u-3")


@pytest.fixture
def partner_editor():
    """Partner editor principal."""
    return Principal(role=Role.editor, segment=Segment.partner, organization_id="org-1", user_id="u-4")


@pytest.fixture
def internal_viewer():
    """Internal viewer principal."""
    return Principal(role=Role.viewer, segment=Segment.internal, organization_id="org-hq", user_id="u-5")


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client

