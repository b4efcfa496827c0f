"""Notification dispatcher: compose, deliver, advance invitation state. Single and batch sends."""

import asyncio
import logging
from typing import Optional

from invitations.application.exceptions import ApplicationError, BatchAbortedError, MailDeliveryError
from invitations.application.interfaces import MailTransport
from invitations.application.invitation_store import InvitationStore
from invitations.application.message_composer import MessageComposer
from invitations.application.sender_directory import SenderDirectory
from invitations.domain.exceptions import DomainError, InvitationNotFoundError
from invitations.domain.models.invitation import Invitation

DEFAULT_SEND_DELAY_SECONDS = 1.0


class NotificationDispatcher:
    """
    One transport call per dispatched invitation. State moves to SENT only after the
    transport accepted the message. Batch sends pause send_delay_seconds between
    messages; the pause is a wait on a stop event, so a caller can end the batch
    between two sends.
    """

    def __init__(
        self,
        store: InvitationStore,
        composer: MessageComposer,
        transport: MailTransport,
        senders: SenderDirectory,
        subject: str,
        send_delay_seconds: float = DEFAULT_SEND_DELAY_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._composer = composer
        self._transport = transport
        self._senders = senders
        self._subject = subject
        self._send_delay = send_delay_seconds
        self._logger = logger or logging.getLogger(__name__)

    def compose(self, invitation_id: str) -> str:
        return self._composer.compose(self._store.read(invitation_id))

    async def send_one(self, invitation_id: str) -> Invitation:
        """Send the invitation message and mark it sent. Returns the updated invitation."""
        invitation = self._store.read(invitation_id)
        return await self._dispatch(invitation)

    async def send_all(self, stop: Optional[asyncio.Event] = None) -> int:
        """
        Send every invitation present at call time. Each record is read again right
        before its send, so edits made during the batch are honoured and records
        deleted in the meantime are skipped. The first failure, or the stop event
        being set, aborts the rest of the batch with BatchAbortedError; invitations
        sent before that stay sent. Returns the number sent.
        """
        stop = stop or asyncio.Event()
        batch = [i.id for i in self._store.snapshot()]
        total = len(batch)
        sent = 0
        self._logger.info("batch_send_started", extra={"count": total})
        for position, invitation_id in enumerate(batch):
            stopped = stop.is_set() if position == 0 else await self._pause(stop)
            if stopped:
                self._logger.warning("batch_send_cancelled", extra={"sent": sent, "count": total})
                raise BatchAbortedError(f"Batch send cancelled after {sent} of {total} invitations")
            try:
                await self._dispatch(self._store.read(invitation_id))
            except InvitationNotFoundError:
                self._logger.warning("batch_send_invitation_gone", extra={"invitation_id": invitation_id})
                continue
            except (DomainError, ApplicationError) as e:
                self._logger.error(
                    "batch_send_aborted",
                    extra={"invitation_id": invitation_id, "sent": sent, "count": total, "error": e.message},
                )
                raise BatchAbortedError(
                    f"Batch send aborted at invitation <{invitation_id}> after {sent} of {total}: {e.message}"
                ) from e
            sent += 1
        self._logger.info("batch_send_finished", extra={"sent": sent, "count": total})
        return sent

    async def _dispatch(self, invitation: Invitation) -> Invitation:
        body = self._composer.compose(invitation)
        from_address = self._senders.address_for(invitation.contact)
        try:
            await self._transport.send(invitation.email, from_address, self._subject, body)
        except Exception as e:
            self._logger.error(
                "invitation_delivery_failed",
                extra={"invitation_id": invitation.id, "error": str(e)},
            )
            raise MailDeliveryError(
                f"Delivering invitation <{invitation.id}> to {invitation.email} failed: {e}"
            ) from e
        self._logger.info(
            "invitation_sent",
            extra={"invitation_id": invitation.id, "from_address": from_address},
        )
        return await self._store.mark_sent(invitation.id)

    async def _pause(self, stop: asyncio.Event) -> bool:
        """Wait the inter-send delay. Returns True if stop was set before it elapsed."""
        if stop.is_set():
            return True
        try:
            await asyncio.wait_for(stop.wait(), timeout=self._send_delay)
        except asyncio.TimeoutError:
            return False
        return True
