"""
Error taxonomy and HTTP error envelope.

Business logic reports failures by raising ``AppError`` with one of the
``ErrorMessage`` kinds. The HTTP boundary converts it to an ``HttpError``,
the only object that turns into a wire-level error response.

Invariants:
    - Every ErrorMessage renders to exactly one stable text
    - Every error body is {"status": "error", "message": <str>}
    - INTERNAL errors never expose their cause to the client
"""

from enum import Enum
from http import HTTPStatus
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCategory(str, Enum):
    """High-level error categories used to pick a default HTTP status."""

    INPUT = "input"
    AUTH = "auth"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ErrorMessage(Enum):
    """Domain failure kinds and their canonical message templates."""

    EMPTY_PASSWORD = "Password cannot be empty"
    EXCEEDED_MAX_PASSWORD_LENGTH = "Password exceeds maximum length of {limit} characters"
    INVALID_HASH_FORMAT = "Invalid hash format"
    HASHING_ERROR = "Error hashing password"
    INVALID_TOKEN = "Invalid token"
    SERVER_ERROR = "Internal server error"
    WRONG_CREDENTIALS = "Wrong email or password"
    EMAIL_EXIST = "Email already exists"
    USER_NO_LONGER_EXIST = "User no longer exists"
    TOKEN_NOT_PROVIDED = "Token not provided"
    PERMISSION_DENIED = "Permission denied"
    USER_NOT_AUTHENTICATED = "User not authenticated"

    def render(self, **params: Any) -> str:
        """Render the message, substituting parameters such as ``limit``."""
        if self is ErrorMessage.EXCEEDED_MAX_PASSWORD_LENGTH:
            return self.value.format(limit=params.get("limit", "?"))
        return self.value

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES[self]

    def __str__(self) -> str:
        return self.render()


_CATEGORIES: dict[ErrorMessage, ErrorCategory] = {
    ErrorMessage.EMPTY_PASSWORD: ErrorCategory.INPUT,
    ErrorMessage.EXCEEDED_MAX_PASSWORD_LENGTH: ErrorCategory.INPUT,
    ErrorMessage.USER_NO_LONGER_EXIST: ErrorCategory.INPUT,
    ErrorMessage.WRONG_CREDENTIALS: ErrorCategory.AUTH,
    ErrorMessage.INVALID_TOKEN: ErrorCategory.AUTH,
    ErrorMessage.TOKEN_NOT_PROVIDED: ErrorCategory.AUTH,
    ErrorMessage.USER_NOT_AUTHENTICATED: ErrorCategory.AUTH,
    ErrorMessage.PERMISSION_DENIED: ErrorCategory.AUTH,
    ErrorMessage.EMAIL_EXIST: ErrorCategory.CONFLICT,
    ErrorMessage.SERVER_ERROR: ErrorCategory.INTERNAL,
    ErrorMessage.HASHING_ERROR: ErrorCategory.INTERNAL,
    ErrorMessage.INVALID_HASH_FORMAT: ErrorCategory.INTERNAL,
}


class AppError(Exception):
    """
    Domain failure raised by services and security helpers.

    Attributes:
        kind: The taxonomy member describing the failure
        message: Rendered message for ``kind``
        status: Optional HTTP status chosen by the raising call site,
            overriding the category default
    """

    def __init__(self, kind: ErrorMessage, status: int | None = None, **params: Any):
        self.kind = kind
        self.params = params
        self.message = kind.render(**params)
        self.status = status
        super().__init__(self.message)

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category


class ErrorResponse(BaseModel):
    """JSON body of every error response."""

    status: str = "error"
    message: str


_CATEGORY_STATUS: dict[ErrorCategory, HTTPStatus] = {
    ErrorCategory.INPUT: HTTPStatus.BAD_REQUEST,
    ErrorCategory.AUTH: HTTPStatus.UNAUTHORIZED,
    ErrorCategory.CONFLICT: HTTPStatus.CONFLICT,
    ErrorCategory.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class HttpError(Exception):
    """An HTTP status code paired with a client-safe message."""

    def __init__(self, status: int, message: str | ErrorMessage):
        self.status = HTTPStatus(status)
        self.message = str(message)
        super().__init__(self.message)

    @classmethod
    def server_error(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(HTTPStatus.INTERNAL_SERVER_ERROR, message)

    @classmethod
    def bad_request(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(HTTPStatus.BAD_REQUEST, message)

    @classmethod
    def unique_constraint_violation(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(HTTPStatus.CONFLICT, message)

    @classmethod
    def unauthorized(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(HTTPStatus.UNAUTHORIZED, message)

    @classmethod
    def forbidden(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(HTTPStatus.FORBIDDEN, message)

    @classmethod
    def from_app_error(
        cls,
        error: AppError,
        permission_denied_status: int = HTTPStatus.FORBIDDEN,
    ) -> "HttpError":
        """
        Convert a domain failure to its HTTP envelope.

        Args:
            error: The raised domain failure
            permission_denied_status: Status used for PERMISSION_DENIED
                (deployment policy, 401 or 403)

        Returns:
            Envelope with the mapped status; internal failures carry the
            generic server error message instead of their own text
        """
        if error.category is ErrorCategory.INTERNAL:
            return cls.server_error(ErrorMessage.SERVER_ERROR)
        if error.status is not None:
            return cls(error.status, error.message)
        if error.kind is ErrorMessage.PERMISSION_DENIED:
            return cls(permission_denied_status, error.message)
        return cls(_CATEGORY_STATUS[error.category], error.message)

    def to_body(self) -> ErrorResponse:
        return ErrorResponse(message=self.message)

    def to_response(self) -> JSONResponse:
        """Serialize to a JSON response."""
        return JSONResponse(status_code=self.status.value, content=self.to_body().model_dump())

    def __str__(self) -> str:
        return f"HttpError: message: {self.message}, status: {self.status.value}"
