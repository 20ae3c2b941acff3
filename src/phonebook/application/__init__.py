"""Application layer: use cases, ports, DTOs, and errors. Depends only on domain."""

from phonebook.application.dto import (
    ANONYMOUS,
    PERSON_ADDED,
    PhoneFilter,
    RequestIdentity,
    UserProfile,
)
from phonebook.application.errors import (
    AuthenticationError,
    DuplicateError,
    InputValidationError,
    InvalidTokenError,
    NotFoundError,
    PhonebookError,
)
from phonebook.application.identity_service import IdentityService
from phonebook.application.phonebook_service import PhonebookService
from phonebook.application.ports import (
    EventPublisher,
    PasswordHasher,
    PersonRepository,
    TokenCodec,
    UserRepository,
)

__all__ = [
    "ANONYMOUS",
    "PERSON_ADDED",
    "AuthenticationError",
    "DuplicateError",
    "EventPublisher",
    "IdentityService",
    "InputValidationError",
    "InvalidTokenError",
    "NotFoundError",
    "PasswordHasher",
    "PersonRepository",
    "PhoneFilter",
    "PhonebookError",
    "PhonebookService",
    "RequestIdentity",
    "TokenCodec",
    "UserProfile",
    "UserRepository",
]
