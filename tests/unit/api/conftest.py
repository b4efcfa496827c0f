"""Fixtures for API unit tests: transient InvitationService, mock transport, AsyncClient."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from jinja2 import DictLoader

from invitations.api import dependencies
from invitations.config.settings import AppSettings
from invitations.infrastructure.templating.jinja_renderer import JinjaTemplateRenderer
from invitations.main import app

TEMPLATES = {
    "email_informal_male_default.txt.j2": "Hi {{ invitation.first_name }}",
    "email_formal_female_default.txt.j2": "Dear Ms {{ invitation.last_name }}",
}


@pytest.fixture
def mock_transport():
    """Mock mail transport so tests do not talk to an SMTP server."""
    t = AsyncMock()
    t.send = AsyncMock(return_value=None)
    return t


@pytest.fixture
def invitation_service(mock_transport):
    settings = AppSettings(
        persistence_mode="transient",
        send_delay_seconds=0,
        fallback_sender="info@example.org",
        mail_subject="Invitation",
    )
    return dependencies.build_invitation_service(
        settings,
        repository=None,
        renderer=JinjaTemplateRenderer(loader=DictLoader(TEMPLATES)),
        transport=mock_transport,
    )


@pytest.fixture
def app_with_overrides(invitation_service):
    """App with the invitation service overridden for testing."""
    app.dependency_overrides[dependencies.get_invitation_service] = lambda: invitation_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def ann():
    return {"firstName": "Ann", "lastName": "Lee", "email": "ann@x.com"}
