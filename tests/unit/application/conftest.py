"""Fixtures for application tests: in-memory repository, fixed actor, stub renderer, mock transport."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from invitations.application.invitation_service import InvitationService
from invitations.application.invitation_store import InvitationStore
from invitations.application.message_composer import MessageComposer
from invitations.application.notification_dispatcher import NotificationDispatcher
from invitations.application.sender_directory import SenderDirectory
from invitations.domain.models.invitation import Invitation
from invitations.domain.template_selector import TemplateSelector


class FakeRepository:
    """In-memory InvitationRepository; keeps every saved snapshot."""

    def __init__(self, initial: Iterable[Invitation] = ()):
        self.initial = list(initial)
        self.saves: List[List[Invitation]] = []

    async def load_all(self) -> List[Invitation]:
        return list(self.initial)

    async def save_all(self, invitations: Iterable[Invitation]) -> None:
        self.saves.append(list(invitations))


class FixedActor:
    def __init__(self, actor: str = "tester"):
        self.actor = actor

    def current_actor(self) -> str:
        return self.actor


class TickingClock:
    """Strictly increasing timestamps so creation order is deterministic."""

    def __init__(self):
        self._now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


class EchoRenderer:
    """Renders '<template_id>: <first_name>' and records every call."""

    def __init__(self):
        self.calls = []

    def render(self, template_id, context):
        self.calls.append((template_id, context))
        return f"{template_id}: {context['invitation'].first_name}"


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def actor():
    return FixedActor()


@pytest.fixture
def logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def store(repository, actor, logger):
    return InvitationStore(repository=repository, actor_provider=actor, logger=logger, clock=TickingClock())


@pytest.fixture
def renderer():
    return EchoRenderer()


@pytest.fixture
def composer(renderer, logger):
    return MessageComposer(renderer=renderer, selector=TemplateSelector(), logger=logger)


@pytest.fixture
def transport():
    t = AsyncMock()
    t.send = AsyncMock(return_value=None)
    return t


@pytest.fixture
def senders():
    return SenderDirectory({"alice": "alice@example.org"}, "info@example.org")


@pytest.fixture
def dispatcher(store, composer, transport, senders, logger):
    return NotificationDispatcher(
        store=store,
        composer=composer,
        transport=transport,
        senders=senders,
        subject="Invitation",
        send_delay_seconds=0,
        logger=logger,
    )


@pytest.fixture
def service(store, dispatcher, logger):
    return InvitationService(store=store, dispatcher=dispatcher, logger=logger)
