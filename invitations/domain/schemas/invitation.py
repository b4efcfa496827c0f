"""Pydantic schemas for invitation API and serialization. camelCase on the wire, no infrastructure."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from invitations.domain.models.invitation import Invitation, InvitationState, Salutation

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class InvitationFields(BaseModel):
    """Client-editable invitation fields shared by create and update requests."""

    model_config = _WIRE_CONFIG

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    contact: Optional[str] = None
    salutation: Optional[Salutation] = None
    invitation_state: Optional[InvitationState] = None
    comment: Optional[str] = None
    internal_comment: Optional[str] = None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class InvitationCreateRequest(InvitationFields):
    """Request schema for creating an invitation. A client-supplied id is accepted only to be rejected."""

    id: Optional[str] = None

    def to_invitation(self) -> Invitation:
        return Invitation(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            contact=self.contact,
            salutation=self.salutation,
            invitation_state=self.invitation_state,
            comment=self.comment,
            internal_comment=self.internal_comment,
        )


class InvitationUpdateRequest(InvitationFields):
    """Request schema for updating an invitation. Audit fields are accepted but ignored by the store."""

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None

    def to_invitation(self) -> Invitation:
        return Invitation(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            contact=self.contact,
            salutation=self.salutation,
            invitation_state=self.invitation_state,
            comment=self.comment,
            internal_comment=self.internal_comment,
            created_at=self.created_at,
            created_by=self.created_by,
        )


class CommentRequest(BaseModel):
    """Body for register/deregister."""

    comment: Optional[str] = None


# ---------------------------------------------------------------------------
# Response / persistence schemas
# ---------------------------------------------------------------------------

class InvitationDocument(InvitationFields):
    """Full invitation representation, used for API responses and the JSON export file."""

    id: str = Field(..., min_length=1)
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    modified_at: Optional[datetime] = None
    modified_by: Optional[str] = None

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationDocument":
        return cls(
            id=invitation.id,
            first_name=invitation.first_name,
            last_name=invitation.last_name,
            email=invitation.email,
            contact=invitation.contact,
            salutation=invitation.salutation,
            invitation_state=invitation.invitation_state,
            comment=invitation.comment,
            internal_comment=invitation.internal_comment,
            created_at=invitation.created_at,
            created_by=invitation.created_by,
            modified_at=invitation.modified_at,
            modified_by=invitation.modified_by,
        )

    def to_invitation(self) -> Invitation:
        return Invitation(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            contact=self.contact,
            salutation=self.salutation,
            invitation_state=self.invitation_state,
            comment=self.comment,
            internal_comment=self.internal_comment,
            created_at=self.created_at,
            created_by=self.created_by,
            modified_at=self.modified_at,
            modified_by=self.modified_by,
        )


class SendAllResponse(BaseModel):
    """Result of a batch send."""

    sent: int
