"""Invitation application service: the operations exposed to the endpoint layer."""

import asyncio
import logging
from typing import List, Optional

from invitations.application.invitation_store import DEFAULT_PAGE_SIZE, InvitationStore
from invitations.application.notification_dispatcher import NotificationDispatcher
from invitations.domain.exceptions import DomainValidationError
from invitations.domain.models.invitation import Invitation
from invitations.domain.schemas.invitation import InvitationDocument


class InvitationService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI, no direct infrastructure.
    Errors from the store and the dispatcher propagate unchanged.
    """

    def __init__(
        self,
        store: InvitationStore,
        dispatcher: NotificationDispatcher,
        logger: logging.Logger,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._logger = logger
        self._batch_stop: Optional[asyncio.Event] = None

    async def load(self) -> int:
        """Populate the store from persistence. Called once at startup."""
        return await self._store.load()

    @property
    def batch_running(self) -> bool:
        return self._batch_stop is not None

    async def list(
        self,
        query_type: Optional[str] = None,
        query: Optional[str] = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> List[InvitationDocument]:
        invitations = self._store.list(query_type, query, offset, limit)
        return [InvitationDocument.from_invitation(i) for i in invitations]

    async def create(self, invitation: Invitation) -> InvitationDocument:
        return InvitationDocument.from_invitation(await self._store.create(invitation))

    async def read(self, invitation_id: str) -> InvitationDocument:
        return InvitationDocument.from_invitation(self._store.read(invitation_id))

    async def update(self, invitation_id: str, changes: Invitation) -> InvitationDocument:
        return InvitationDocument.from_invitation(await self._store.update(invitation_id, changes))

    async def delete(self, invitation_id: str) -> None:
        await self._store.delete(invitation_id)

    async def get_message(self, invitation_id: str) -> str:
        return self._dispatcher.compose(invitation_id)

    async def send_message(self, invitation_id: str) -> InvitationDocument:
        return InvitationDocument.from_invitation(await self._dispatcher.send_one(invitation_id))

    async def send_all_messages(self) -> int:
        """Run one batch send. Only one batch runs at a time; cancel_send_all() stops it between sends."""
        if self._batch_stop is not None:
            raise DomainValidationError("a batch send is already running")
        self._batch_stop = asyncio.Event()
        try:
            return await self._dispatcher.send_all(self._batch_stop)
        finally:
            self._batch_stop = None

    def cancel_send_all(self) -> bool:
        """Ask the running batch to stop. Returns False when no batch is running."""
        if self._batch_stop is None:
            return False
        self._logger.info("batch_send_cancel_requested")
        self._batch_stop.set()
        return True

    async def register(self, invitation_id: str, comment: Optional[str]) -> InvitationDocument:
        return InvitationDocument.from_invitation(await self._store.register(invitation_id, comment))

    async def deregister(self, invitation_id: str, comment: Optional[str]) -> InvitationDocument:
        return InvitationDocument.from_invitation(await self._store.deregister(invitation_id, comment))
