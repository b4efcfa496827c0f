"""
Invitation store: the indexed collection of invitations and its mutation rules.

All mutations are serialized under one asyncio.Lock. A mutation builds the next
index, hands it to the repository (when persistence is enabled) and only then
swaps it in, so readers never observe a partially applied change and a failed
save leaves the in-memory state as it was. Records in the index are never
mutated in place; every value handed out is a copy.
"""

import asyncio
import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from invitations.application.exceptions import InternalServiceError, PersistenceError
from invitations.application.interfaces import ActorProvider
from invitations.application.invitation_repository import InvitationRepository
from invitations.domain.exceptions import InvalidStateTransitionError, InvitationNotFoundError
from invitations.domain.models.invitation import (
    DEFAULT_SALUTATION,
    DEFAULT_STATE,
    Invitation,
    InvitationState,
)
from invitations.domain.validators.invitation_validator import (
    validate_no_client_id,
    validate_pagination,
    validate_required_fields,
    validate_sent_before,
)

DEFAULT_PAGE_SIZE = 25


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sort_key(invitation: Invitation) -> Tuple[float, str]:
    """Total order for listing: created_at ascending, then id."""
    created = invitation.created_at.timestamp() if invitation.created_at else float("-inf")
    return created, invitation.id or ""


class InvitationStore:
    """
    Owns every invitation, keyed by id. Pass repository=None for transient mode
    (nothing is loaded or saved).
    """

    def __init__(
        self,
        repository: Optional[InvitationRepository],
        actor_provider: ActorProvider,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._actor_provider = actor_provider
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._index: Dict[str, Invitation] = {}
        self._lock = asyncio.Lock()

    @property
    def is_persistent(self) -> bool:
        return self._repository is not None

    def __len__(self) -> int:
        return len(self._index)

    async def load(self) -> int:
        """Populate the index from the repository. Returns the number of invitations imported."""
        if self._repository is None:
            return 0
        async with self._lock:
            invitations = await self._repository.load_all()
            index: Dict[str, Invitation] = {}
            for invitation in invitations:
                if not invitation.id:
                    self._logger.warning("invitation_without_id_skipped", extra={"email": invitation.email})
                    continue
                index[invitation.id] = invitation
            self._index = index
        self._logger.info("invitations_imported", extra={"count": len(index)})
        return len(index)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(
        self,
        query_type: Optional[str] = None,
        query: Optional[str] = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> List[Invitation]:
        """
        Sorted slice [offset, offset + limit) of all invitations.
        query_type and query are accepted but do not filter.
        """
        validate_pagination(offset, limit)
        ordered = sorted(self._index.values(), key=_sort_key)
        selection = [replace(i) for i in ordered[offset:offset + limit]]
        self._logger.info(
            "invitations_listed",
            extra={
                "query_type": query_type,
                "query": query,
                "offset": offset,
                "limit": limit,
                "count": len(selection),
            },
        )
        return selection

    def read(self, invitation_id: str) -> Invitation:
        return replace(self._get(invitation_id))

    def snapshot(self) -> List[Invitation]:
        """Copies of all invitations at call time, in listing order."""
        return [replace(i) for i in sorted(self._index.values(), key=_sort_key)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, invitation: Invitation) -> Invitation:
        async with self._lock:
            client_id = invitation.id
            validate_no_client_id(client_id, bool(client_id) and client_id in self._index)
            validate_required_fields(invitation)
            if invitation.invitation_state not in (None, DEFAULT_STATE):
                raise InvalidStateTransitionError(
                    f"a new invitation starts in state {DEFAULT_STATE.value}, "
                    f"not {invitation.invitation_state.value}"
                )
            now = self._clock()
            actor = self._actor_provider.current_actor()
            record = replace(
                invitation,
                id=self._new_id(),
                salutation=invitation.salutation or DEFAULT_SALUTATION,
                invitation_state=DEFAULT_STATE,
                created_at=now,
                created_by=actor,
                modified_at=now,
                modified_by=actor,
            )
            await self._commit({**self._index, record.id: record})
        self._logger.info("invitation_created", extra={"invitation_id": record.id, "actor_id": actor})
        return replace(record)

    async def update(self, invitation_id: str, changes: Invitation) -> Invitation:
        """
        Overwrite the editable fields of an invitation. id, created_at and created_by
        are never taken from changes. An unset state keeps the stored state; a
        different state is rejected because state moves only through send,
        register and deregister.
        """
        async with self._lock:
            current = self._get(invitation_id)
            self._warn_on_client_audit_fields(invitation_id, current, changes)
            validate_required_fields(changes, invitation_id)
            state = changes.invitation_state or current.invitation_state
            if state != current.invitation_state:
                raise InvalidStateTransitionError(
                    f"invitation <{invitation_id}>: state {current.invitation_state.value} can only be "
                    "changed by sending, registering or deregistering"
                )
            record = replace(
                current,
                first_name=changes.first_name,
                last_name=changes.last_name,
                email=changes.email,
                contact=changes.contact,
                salutation=changes.salutation or DEFAULT_SALUTATION,
                comment=changes.comment,
                internal_comment=changes.internal_comment,
            )
            self._stamp(record)
            await self._commit({**self._index, invitation_id: record})
        self._logger.info("invitation_updated", extra={"invitation_id": invitation_id})
        return replace(record)

    async def delete(self, invitation_id: str) -> None:
        async with self._lock:
            self._get(invitation_id)
            index = dict(self._index)
            if index.pop(invitation_id, None) is None:
                raise InternalServiceError(
                    f"invitation <{invitation_id}> can not be removed, because it does not exist in the index"
                )
            await self._commit(index)
        self._logger.info("invitation_deleted", extra={"invitation_id": invitation_id})

    async def mark_sent(self, invitation_id: str) -> Invitation:
        """
        Record a successful dispatch. INITIAL moves to SENT; an invitation that was
        already answered keeps its REGISTERED or EXCUSED state.
        """
        async with self._lock:
            record = replace(self._get(invitation_id))
            if record.invitation_state in (InvitationState.REGISTERED, InvitationState.EXCUSED):
                self._logger.info(
                    "invitation_resent_state_kept",
                    extra={"invitation_id": invitation_id, "state": record.invitation_state.value},
                )
            else:
                record.transition_to(InvitationState.SENT)
            self._stamp(record)
            await self._commit({**self._index, invitation_id: record})
        return replace(record)

    async def register(self, invitation_id: str, comment: Optional[str]) -> Invitation:
        return await self._respond(invitation_id, InvitationState.REGISTERED, comment, "register")

    async def deregister(self, invitation_id: str, comment: Optional[str]) -> Invitation:
        return await self._respond(invitation_id, InvitationState.EXCUSED, comment, "deregister")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _respond(
        self,
        invitation_id: str,
        target: InvitationState,
        comment: Optional[str],
        action: str,
    ) -> Invitation:
        async with self._lock:
            record = replace(self._get(invitation_id))
            validate_sent_before(invitation_id, record.invitation_state, action)
            if record.invitation_state is target:
                self._logger.warning(
                    f"invitation_already_{target.value.lower()}",
                    extra={"invitation_id": invitation_id, "action": action},
                )
            record.transition_to(target)
            record.comment = comment
            self._stamp(record)
            await self._commit({**self._index, invitation_id: record})
        self._logger.info(
            f"invitation_{target.value.lower()}",
            extra={"invitation_id": invitation_id, "comment": comment},
        )
        return replace(record)

    def _get(self, invitation_id: str) -> Invitation:
        invitation = self._index.get(invitation_id)
        if invitation is None:
            raise InvitationNotFoundError(f"no invitation with ID <{invitation_id}> was found.")
        return invitation

    def _new_id(self) -> str:
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in self._index:
                return candidate

    def _stamp(self, record: Invitation) -> None:
        record.modified_at = self._clock()
        record.modified_by = self._actor_provider.current_actor()

    def _warn_on_client_audit_fields(
        self,
        invitation_id: str,
        current: Invitation,
        changes: Invitation,
    ) -> None:
        if changes.created_at is not None and changes.created_at != current.created_at:
            self._logger.warning(
                "client_created_at_ignored",
                extra={"invitation_id": invitation_id, "value": changes.created_at.isoformat()},
            )
        if changes.created_by is not None and changes.created_by.lower() != (current.created_by or "").lower():
            self._logger.warning(
                "client_created_by_ignored",
                extra={"invitation_id": invitation_id, "value": changes.created_by},
            )

    async def _commit(self, index: Dict[str, Invitation]) -> None:
        """Persist the next index (when persistent), then make it current."""
        if self._repository is not None:
            try:
                await self._repository.save_all(list(index.values()))
            except Exception as e:
                self._logger.error("invitations_save_failed", extra={"error": str(e)})
                raise PersistenceError(f"Saving invitations failed: {e}") from e
        self._index = index
