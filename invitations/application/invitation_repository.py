"""Invitation repository protocol. Application layer depends on this; infrastructure implements it."""

from typing import Iterable, List, Protocol

from invitations.domain.models.invitation import Invitation


class InvitationRepository(Protocol):
    """Load-all / save-all persistence of the full invitation set."""

    async def load_all(self) -> List[Invitation]:
        """Return every persisted invitation. Called once at startup."""
        ...

    async def save_all(self, invitations: Iterable[Invitation]) -> None:
        """Replace the persisted set with invitations."""
        ...
