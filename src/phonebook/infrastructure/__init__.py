"""Infrastructure layer: concrete implementations of application ports."""

from phonebook.infrastructure.events import EventBroker
from phonebook.infrastructure.memory_repository import (
    InMemoryPersonRepository,
    InMemoryUserRepository,
)
from phonebook.infrastructure.passwords import Pbkdf2PasswordHasher
from phonebook.infrastructure.persistence import (
    Neo4jPersonRepository,
    Neo4jUserRepository,
    ensure_constraints,
)
from phonebook.infrastructure.phone import normalize_phone, stored_phone
from phonebook.infrastructure.seed import SAMPLE_PERSONS, seed_sample_persons
from phonebook.infrastructure.tokens import JwtTokenCodec

__all__ = [
    "SAMPLE_PERSONS",
    "EventBroker",
    "InMemoryPersonRepository",
    "InMemoryUserRepository",
    "JwtTokenCodec",
    "Neo4jPersonRepository",
    "Neo4jUserRepository",
    "Pbkdf2PasswordHasher",
    "ensure_constraints",
    "normalize_phone",
    "seed_sample_persons",
    "stored_phone",
]
