"""Domain model for invitations. Pure business semantics, no persistence or transport."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional

from invitations.domain.exceptions import InvalidStateTransitionError


class Salutation(str, Enum):
    """How the invitee is addressed; drives the template variant."""

    FORMAL_MALE = "FORMAL_MALE"
    FORMAL_FEMALE = "FORMAL_FEMALE"
    INFORMAL_FEMALE = "INFORMAL_FEMALE"
    INFORMAL_MALE = "INFORMAL_MALE"


class InvitationState(str, Enum):
    """Lifecycle state of an invitation. Transitions are validated."""

    INITIAL = "INITIAL"
    SENT = "SENT"
    REGISTERED = "REGISTERED"
    EXCUSED = "EXCUSED"


DEFAULT_SALUTATION = Salutation.INFORMAL_MALE
DEFAULT_STATE = InvitationState.INITIAL

# Allowed state transitions: from_state -> set of valid next states.
# Self-transitions keep re-sends and repeated register/deregister idempotent.
_STATE_TRANSITIONS: Dict[InvitationState, FrozenSet[InvitationState]] = {
    InvitationState.INITIAL: frozenset({InvitationState.SENT}),
    InvitationState.SENT: frozenset(
        {InvitationState.SENT, InvitationState.REGISTERED, InvitationState.EXCUSED}
    ),
    InvitationState.REGISTERED: frozenset({InvitationState.REGISTERED, InvitationState.EXCUSED}),
    InvitationState.EXCUSED: frozenset({InvitationState.EXCUSED, InvitationState.REGISTERED}),
}


def allowed_transitions(current: InvitationState) -> FrozenSet[InvitationState]:
    return _STATE_TRANSITIONS.get(current, frozenset())


def _validate_transition(current: InvitationState, new: InvitationState) -> None:
    """Validate that transition from current to new is allowed. Raises if invalid."""
    if new not in allowed_transitions(current):
        raise InvalidStateTransitionError(
            f"Invalid invitation state transition from {current.value} to {new.value}"
        )


@dataclass
class Invitation:
    """
    One invitation record. Optional fields are unset until the store fills them in:
    id and audit stamps are server-set, salutation and state get defaults on create.
    State must be changed only via transition_to() to enforce lifecycle rules.
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    contact: Optional[str] = None
    salutation: Optional[Salutation] = None
    invitation_state: Optional[InvitationState] = None
    comment: Optional[str] = None
    internal_comment: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    modified_at: Optional[datetime] = None
    modified_by: Optional[str] = None

    def transition_to(self, new_state: InvitationState) -> None:
        """
        Move to new_state if allowed. Mutates in place.
        Raises InvalidStateTransitionError if the transition is not allowed.
        """
        _validate_transition(self.invitation_state or DEFAULT_STATE, new_state)
        self.invitation_state = new_state
