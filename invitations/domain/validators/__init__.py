"""Domain validators. Pure functions."""

from invitations.domain.validators.invitation_validator import (
    validate_no_client_id,
    validate_pagination,
    validate_required_fields,
    validate_sent_before,
)

__all__ = [
    "validate_no_client_id",
    "validate_pagination",
    "validate_required_fields",
    "validate_sent_before",
]
