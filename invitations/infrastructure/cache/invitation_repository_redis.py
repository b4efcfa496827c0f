"""Redis-backed invitation repository. The whole set lives under one snapshot key."""

from typing import Iterable, List, Protocol

from pydantic import TypeAdapter

from invitations.domain.models.invitation import Invitation
from invitations.domain.schemas.invitation import InvitationDocument

_DOCUMENTS = TypeAdapter(List[InvitationDocument])


class SnapshotBackend(Protocol):
    """Minimal Redis operations for snapshot persistence. Injected; no global state."""

    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...


class RedisInvitationRepository:
    """Stores the invitation set as one JSON document. Implements InvitationRepository protocol."""

    def __init__(self, redis_client: SnapshotBackend, key: str) -> None:
        self._redis = redis_client
        self._key = key

    async def load_all(self) -> List[Invitation]:
        raw = await self._redis.get(self._key)
        if not raw:
            return []
        return [d.to_invitation() for d in _DOCUMENTS.validate_json(raw)]

    async def save_all(self, invitations: Iterable[Invitation]) -> None:
        documents = [InvitationDocument.from_invitation(i) for i in invitations]
        await self._redis.set(self._key, _DOCUMENTS.dump_json(documents, by_alias=True).decode())
