"""Domain-specific exceptions. Pure domain layer, no infrastructure."""

from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by every service error so callers can branch on kind instead of type."""

    VALIDATION = "validation"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class DomainError(Exception):
    """Base for all domain-layer errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when input is malformed or forbidden (missing field, client-set id, premature transition)."""


class InvalidStateTransitionError(DomainValidationError):
    """Raised when an invitation state change is not allowed."""


class DuplicateInvitationError(DomainError):
    """Raised when an invitation id collides with an existing one."""

    kind = ErrorKind.DUPLICATE


class InvitationNotFoundError(DomainError):
    """Raised when no invitation exists for the given id."""

    kind = ErrorKind.NOT_FOUND
