# Application layer: store, dispatch and the service that orchestrates them.

from invitations.application.exceptions import (
    ApplicationError,
    BatchAbortedError,
    InternalServiceError,
    MailDeliveryError,
    PersistenceError,
    TemplateRenderingError,
)
from invitations.application.interfaces import ActorProvider, MailTransport, TemplateRenderer
from invitations.application.invitation_repository import InvitationRepository
from invitations.application.invitation_service import InvitationService
from invitations.application.invitation_store import InvitationStore
from invitations.application.message_composer import MessageComposer
from invitations.application.notification_dispatcher import NotificationDispatcher
from invitations.application.sender_directory import SenderDirectory

__all__ = [
    "ActorProvider",
    "ApplicationError",
    "BatchAbortedError",
    "InternalServiceError",
    "InvitationRepository",
    "InvitationService",
    "InvitationStore",
    "MailDeliveryError",
    "MailTransport",
    "MessageComposer",
    "NotificationDispatcher",
    "PersistenceError",
    "SenderDirectory",
    "TemplateRenderer",
    "TemplateRenderingError",
]
