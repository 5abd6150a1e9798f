"""
Application error taxonomy.

Every error is an ``HTTPException`` with a fixed status code, so services can
raise them directly and the handlers in ``storefront.main`` render them as
``{"success": false, "message": ...}``.
"""
from fastapi import HTTPException, status


class StoreError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(status_code=self.status_code, detail=message or self.default_message)

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateEmailError(StoreError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "User already exists"


class InvalidCredentialsError(StoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthenticated(StoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(StoreError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFound(StoreError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(StoreError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict, please retry"


class InternalError(StoreError):
    pass
