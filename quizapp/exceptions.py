from typing import Optional

from fastapi import status


class QuizAppException(Exception):
    """Base error rendered as a `{"success": false, ...}` response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class UnauthorizedError(QuizAppException):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class ValidationError(QuizAppException):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(QuizAppException):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(QuizAppException):
    """A store call failed. Always carries the underlying error text."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: str):
        super().__init__(message, error)
