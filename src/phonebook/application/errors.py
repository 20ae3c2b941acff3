"""Application errors. Each exposed error carries a GraphQL error code and extensions."""

from typing import Any


class PhonebookError(Exception):
    """Base class for errors reported to API clients."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, *, invalid_args: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.invalid_args = invalid_args

    @property
    def extensions(self) -> dict[str, Any]:
        ext: dict[str, Any] = {"code": self.code}
        if self.invalid_args is not None:
            ext["invalidArgs"] = self.invalid_args
        return ext


class AuthenticationError(PhonebookError):
    """Operation needs a valid current user."""

    code = "UNAUTHENTICATED"


class InputValidationError(PhonebookError):
    """Constraint violation at write time, or bad login credentials."""

    code = "BAD_USER_INPUT"


class NotFoundError(PhonebookError):
    """A lookup required by a mutation found no record."""

    code = "NOT_FOUND"


class DuplicateError(Exception):
    """Raised by repositories when a unique field is already taken."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{field} must be unique: {value!r} already exists")
        self.field = field
        self.value = value


class InvalidTokenError(Exception):
    """Raised by token codecs when a token cannot be verified or decoded."""
