"""Custom exception hierarchy for the cargodesk application."""

from fastapi import HTTPException
from starlette import status


class CargodeskError(Exception):
    """Base exception for all cargodesk errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(CargodeskError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class ValidationError(CargodeskError):
    """Validation error."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        """Initialize with message and 400 status code."""
        super().__init__(message, status_code=status_code)


class ConflictError(CargodeskError):
    """Resource state conflicts with the request."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 409 status code."""
        super().__init__(message, status_code=409)


class PermissionDeniedError(CargodeskError):
    """Authenticated user may not perform the request."""

    def __init__(self, message: str = "You do not have permission to perform this action") -> None:
        """Initialize with message and 403 status code."""
        super().__init__(message, status_code=403)


class ServiceError(CargodeskError):
    """Service layer error."""


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
