"""Error taxonomy shared by the route handlers.

HTTP-facing errors subclass ``HTTPException`` so FastAPI renders them with its
usual ``{"detail": ...}`` body. ``ImageProcessingError`` and ``InvalidToken``
are raised by the lower layers and translated by their callers.
"""

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Access denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class PayloadTooLargeError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=detail)


class InvalidToken(Exception):
    """Token signature, shape, expiry or claims are not acceptable."""


class ImageProcessingError(Exception):
    """Raised when an uploaded image cannot be decoded or written."""
