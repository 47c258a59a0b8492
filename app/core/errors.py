import logging

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class BadRequest(HTTPException):
    """Malformed or out-of-range input."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "User is not logged in."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "User does not have access rights."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    """A well-formed request that breaks a booking or scheduling rule."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class IntegrityViolation(Conflict):
    """
    A stored row points at something that no longer exists.
    Reported to the caller as a conflict, logged as an error.
    """

    def __init__(self, detail: str):
        logger.error("Data integrity violation: %s", detail)
        super().__init__(detail)
