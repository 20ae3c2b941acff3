"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Sequence
from typing import Any, Protocol

from phonebook.domain import Person, User


class PersonRepository(Protocol):
    """Persists and queries Person records."""

    def add(self, person: Person) -> Person:
        """Store a new person and return it as stored. Raises DuplicateError if the name is taken."""
        ...

    def update(self, person: Person) -> Person | None:
        """Replace the stored person with the same id. Returns None if not found."""
        ...

    def get_by_id(self, person_id: str) -> Person | None:
        ...

    def get_many(self, person_ids: Sequence[str]) -> list[Person]:
        """Return the persons with the given ids, in the order given. Unknown ids are skipped."""
        ...

    def find_by_name(self, name: str) -> Person | None:
        """Exact-match lookup by name."""
        ...

    def list_all(self, has_phone: bool | None = None) -> list[Person]:
        """Return persons in creation order, optionally filtered on phone presence."""
        ...

    def count(self) -> int:
        ...


class UserRepository(Protocol):
    """Persists and queries User accounts."""

    def add(self, user: User) -> User:
        """Store a new user. Raises DuplicateError if the username is taken."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        ...

    def find_by_username(self, username: str) -> User | None:
        ...

    def add_friend(self, user_id: str, person_id: str) -> User | None:
        """Append person_id to the user's friends unless present. Returns None if the user is not found."""
        ...


class EventPublisher(Protocol):
    """Fire-and-forget notification of subscribers."""

    def publish(self, topic: str, payload: Any) -> None:
        ...


class TokenCodec(Protocol):
    """Signs and verifies bearer tokens."""

    def encode(self, claims: dict[str, Any]) -> str:
        ...

    def decode(self, token: str) -> dict[str, Any]:
        """Return the claims. Raises InvalidTokenError on a bad or expired token."""
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, hashed: str) -> bool:
        ...
