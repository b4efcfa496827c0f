"""Domain layer: models, schemas, validators, exceptions, template selection. Pure business logic only."""

from invitations.domain.exceptions import (
    DomainError,
    DomainValidationError,
    DuplicateInvitationError,
    ErrorKind,
    InvalidStateTransitionError,
    InvitationNotFoundError,
)
from invitations.domain.models import Invitation, InvitationState, Salutation
from invitations.domain.schemas import (
    CommentRequest,
    InvitationCreateRequest,
    InvitationDocument,
    InvitationUpdateRequest,
)
from invitations.domain.template_selector import TemplateSelector, select_template
from invitations.domain.validators import (
    validate_no_client_id,
    validate_pagination,
    validate_required_fields,
    validate_sent_before,
)

__all__ = [
    "CommentRequest",
    "DomainError",
    "DomainValidationError",
    "DuplicateInvitationError",
    "ErrorKind",
    "InvalidStateTransitionError",
    "Invitation",
    "InvitationCreateRequest",
    "InvitationDocument",
    "InvitationNotFoundError",
    "InvitationState",
    "InvitationUpdateRequest",
    "Salutation",
    "TemplateSelector",
    "select_template",
    "validate_no_client_id",
    "validate_pagination",
    "validate_required_fields",
    "validate_sent_before",
]
