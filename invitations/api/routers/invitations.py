"""Invitations API router: CRUD, message preview, single and batch send, register/deregister."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse

from invitations.api.dependencies import get_invitation_service
from invitations.application.invitation_service import InvitationService
from invitations.config.settings import get_settings
from invitations.domain.schemas.invitation import (
    CommentRequest,
    InvitationCreateRequest,
    InvitationDocument,
    InvitationUpdateRequest,
    SendAllResponse,
)

router = APIRouter()

Service = Annotated[InvitationService, Depends(get_invitation_service)]


@router.get("/", response_model=List[InvitationDocument])
async def list_invitations(
    service: Service,
    query_type: Annotated[Optional[str], Query(alias="queryType")] = None,
    query: Optional[str] = None,
    position: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[Optional[int], Query(gt=0)] = None,
):
    """Sorted page of invitations. queryType and query are accepted but do not filter."""
    limit = size or get_settings().default_page_size
    return await service.list(query_type, query, position, limit)


@router.post("/", response_model=InvitationDocument)
async def create_invitation(body: InvitationCreateRequest, service: Service):
    """Create invitation. The id is generated by the server; a client-supplied id is rejected."""
    return await service.create(body.to_invitation())


@router.post("/send", response_model=SendAllResponse)
async def send_all_messages(service: Service):
    """Send every invitation, pausing between messages. Blocks until the batch ends."""
    sent = await service.send_all_messages()
    return SendAllResponse(sent=sent)


@router.post("/send/cancel")
async def cancel_send_all(service: Service):
    """Stop the running batch before its next message."""
    return {"cancelled": service.cancel_send_all()}


@router.get("/{invitation_id}", response_model=InvitationDocument)
async def read_invitation(invitation_id: str, service: Service):
    return await service.read(invitation_id)


@router.put("/{invitation_id}", response_model=InvitationDocument)
async def update_invitation(invitation_id: str, body: InvitationUpdateRequest, service: Service):
    """Update invitation. id, createdAt and createdBy in the body are ignored."""
    return await service.update(invitation_id, body.to_invitation())


@router.delete("/{invitation_id}", status_code=204)
async def delete_invitation(invitation_id: str, service: Service):
    await service.delete(invitation_id)
    return Response(status_code=204)


@router.get("/{invitation_id}/message", response_class=PlainTextResponse)
async def get_message(invitation_id: str, service: Service):
    """Rendered invitation message, without sending it."""
    return await service.get_message(invitation_id)


@router.post("/{invitation_id}/send", response_model=InvitationDocument)
async def send_message(invitation_id: str, service: Service):
    return await service.send_message(invitation_id)


@router.post("/{invitation_id}/register", response_model=InvitationDocument)
async def register(invitation_id: str, service: Service, body: Optional[CommentRequest] = None):
    return await service.register(invitation_id, body.comment if body else None)


@router.post("/{invitation_id}/deregister", response_model=InvitationDocument)
async def deregister(invitation_id: str, service: Service, body: Optional[CommentRequest] = None):
    return await service.deregister(invitation_id, body.comment if body else None)
