"""Domain models. Pure business entities."""

from invitations.domain.models.invitation import (
    DEFAULT_SALUTATION,
    DEFAULT_STATE,
    Invitation,
    InvitationState,
    Salutation,
    allowed_transitions,
)

__all__ = [
    "DEFAULT_SALUTATION",
    "DEFAULT_STATE",
    "Invitation",
    "InvitationState",
    "Salutation",
    "allowed_transitions",
]
