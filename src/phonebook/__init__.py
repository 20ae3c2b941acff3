"""
Phonebook core: clean-architecture layout.

- domain: entities (Person, Address, User). No outer dependencies.
- application: use cases (PhonebookService, IdentityService), ports, DTOs, errors.
- infrastructure: adapters (in-memory and Neo4j repositories, tokens, passwords, events).
"""

from phonebook.application import (
    AuthenticationError,
    IdentityService,
    InputValidationError,
    NotFoundError,
    PhonebookError,
    PhonebookService,
    PhoneFilter,
    RequestIdentity,
    UserProfile,
)
from phonebook.domain import Address, Person, User
from phonebook.infrastructure import (
    EventBroker,
    InMemoryPersonRepository,
    InMemoryUserRepository,
    Neo4jPersonRepository,
    Neo4jUserRepository,
)

__all__ = [
    "Address",
    "AuthenticationError",
    "EventBroker",
    "IdentityService",
    "InMemoryPersonRepository",
    "InMemoryUserRepository",
    "InputValidationError",
    "Neo4jPersonRepository",
    "Neo4jUserRepository",
    "NotFoundError",
    "Person",
    "PhoneFilter",
    "PhonebookError",
    "PhonebookService",
    "RequestIdentity",
    "User",
    "UserProfile",
]
