"""Application-layer exceptions. Do not reuse domain exceptions."""

from invitations.domain.exceptions import ErrorKind


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InternalServiceError(ApplicationError):
    """Raised on store-internal inconsistency or a wrapped collaborator failure."""


class PersistenceError(InternalServiceError):
    """Raised when saving the invitation set fails. In-memory state is left unchanged."""


class TemplateRenderingError(InternalServiceError):
    """Raised when the message template cannot be found or rendered."""


class MailDeliveryError(InternalServiceError):
    """Raised when the mail transport fails to deliver a message."""


class BatchAbortedError(InternalServiceError):
    """Raised when a batch send stops early, on failure or on request. Sent invitations stay sent."""
