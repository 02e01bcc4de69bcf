"""
Application errors carrying an HTTP classification.

Repositories raise these; since they are HTTPExceptions, FastAPI renders them
as {"detail": message} with the matching status code and the endpoints never
have to translate them.
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class for errors the API reports to clients."""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_default = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.message_default
        super().__init__(status_code=self.status_code_default, detail=self.message)


class BadRequestError(AppError):
    """400: the request can never succeed as sent (bad input, duplicates)."""

    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Bad Request"


class UnauthorizedError(AppError):
    """401: missing or insufficient credentials."""

    status_code_default = status.HTTP_401_UNAUTHORIZED
    message_default = "Unauthorized"

    def __init__(self, message: str = None):
        super().__init__(message)
        self.headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(AppError):
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Not Found"
