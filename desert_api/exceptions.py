"""
Application exceptions

Every error a route wants to surface is raised as a DesertSolutionsError and
rendered by the handler registered in main.py as
{"error": ..., "message": ..., **extra}.

Integration errors (payment provider, database proxy, storage, email) are
plain exceptions raised by the clients; routes translate them into a 500.
"""

from typing import Any, Optional


class DesertSolutionsError(Exception):
    """Base error carrying the HTTP status and the JSON envelope fields"""

    status_code = 500

    def __init__(
        self,
        error: str,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        **extra: Any,
    ):
        self.error = error
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra
        super().__init__(message or error)

    def to_dict(self) -> dict:
        content: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            content["message"] = self.message
        content.update(self.extra)
        return content


class BadRequestError(DesertSolutionsError):
    status_code = 400


class UnauthorizedError(DesertSolutionsError):
    status_code = 401


class NotFoundError(DesertSolutionsError):
    status_code = 404


class MercuryAPIError(Exception):
    """Raised when the payment provider rejects or fails a request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DatabaseProxyError(Exception):
    """Raised when the database proxy fails a request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class StorageError(Exception):
    """Raised when object storage cannot serve a request"""


class EmailDeliveryError(Exception):
    """Raised when an email could not be handed to the provider"""
