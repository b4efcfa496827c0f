"""Pydantic schemas for API and serialization."""

from invitations.domain.schemas.invitation import (
    CommentRequest,
    InvitationCreateRequest,
    InvitationDocument,
    InvitationFields,
    InvitationUpdateRequest,
    SendAllResponse,
)

__all__ = [
    "CommentRequest",
    "InvitationCreateRequest",
    "InvitationDocument",
    "InvitationFields",
    "InvitationUpdateRequest",
    "SendAllResponse",
]
