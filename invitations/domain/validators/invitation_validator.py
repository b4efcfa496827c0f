"""Validators for invitation domain rules. Pure functions, no infrastructure or store access."""

from typing import Optional

from invitations.domain.exceptions import (
    DomainValidationError,
    DuplicateInvitationError,
    InvalidStateTransitionError,
)
from invitations.domain.models.invitation import Invitation, InvitationState


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_required_fields(invitation: Invitation, invitation_id: Optional[str] = None) -> None:
    """Enforce mandatory fields: first_name, last_name, email. Raises DomainValidationError if any is empty."""
    label = invitation_id or invitation.id or "new"
    if _is_blank(invitation.first_name):
        raise DomainValidationError(f"invitation <{label}> must contain a valid firstName.")
    if _is_blank(invitation.last_name):
        raise DomainValidationError(f"invitation <{label}> must contain a valid lastName.")
    if _is_blank(invitation.email):
        raise DomainValidationError(f"invitation <{label}> must contain a valid email address.")


def validate_no_client_id(client_id: Optional[str], id_exists: bool) -> None:
    """
    Ids are generated by the server only. A colliding id raises DuplicateInvitationError,
    any other non-empty id raises DomainValidationError.
    """
    if not client_id:
        return
    if id_exists:
        raise DuplicateInvitationError(f"invitation <{client_id}> exists already.")
    raise DomainValidationError(
        f"invitation <{client_id}> contains an ID generated on the client. This is not allowed."
    )


def validate_pagination(offset: int, limit: int) -> None:
    """offset must be >= 0 and limit > 0."""
    if offset < 0:
        raise DomainValidationError(f"offset must not be negative, got {offset}")
    if limit <= 0:
        raise DomainValidationError(f"limit must be positive, got {limit}")


def validate_sent_before(invitation_id: str, current: InvitationState, action: str) -> None:
    """register/deregister need an invitation that has been sent."""
    if current is InvitationState.INITIAL:
        raise InvalidStateTransitionError(
            f"invitation <{invitation_id}> must be sent before being able to {action}"
        )
