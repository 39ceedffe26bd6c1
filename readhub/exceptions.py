"""Errors raised by the service layer.

Each error carries the HTTP status it is rendered with; the handler in
``readhub.main`` turns them into ``{"detail": ...}`` responses.
"""
from typing import Optional
from fastapi import status


class ReadHubError(Exception):
    """Base error for all business-rule failures."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationError(ReadHubError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class AuthorizationError(ReadHubError):
    """Caller is authenticated but lacks the required role."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not enough permissions"


class NotFoundError(ReadHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(ReadHubError):
    """Uniqueness or availability precondition violated."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Conflict"


class InvalidStateError(ConflictError):
    """Transaction status does not allow the requested transition."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Invalid transaction state"


class ValidationError(ReadHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"
