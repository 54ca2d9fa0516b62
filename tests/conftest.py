"""Pytest configuration and fixtures for calculator tests."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from clinicalscore.main import app
from clinicalscore.services.scoring import reset_scoring_service
from clinicalscore.services.sessions import (
    SessionRegistry,
    get_session_registry,
    reset_session_registry,
)
from clinicalscore.services.submission import NullSubmitter
from clinicalscore.services.validation import SchemaValidator


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset singleton services around each test."""
    reset_scoring_service()
    reset_session_registry()
    yield
    reset_scoring_service()
    reset_session_registry()


@pytest.fixture
def mock_submitter() -> AsyncMock:
    """Create a mock submission collaborator.

    Returns an object whose async submit() records payloads.
    """
    submitter = AsyncMock()
    submitter.enabled = True
    submitter.submit = AsyncMock(return_value=None)
    return submitter


@pytest.fixture
def registry() -> SessionRegistry:
    """Session registry that never posts results anywhere."""
    return SessionRegistry(submitter=NullSubmitter(), validator=SchemaValidator())


@pytest.fixture
async def client(registry: SessionRegistry) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client bound to an isolated session registry."""
    app.dependency_overrides[get_session_registry] = lambda: registry
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
