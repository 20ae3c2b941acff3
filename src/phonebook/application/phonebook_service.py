"""Phonebook queries and mutations: persons, users, and friend lists."""

import logging

from phonebook.application.dto import (
    PERSON_ADDED,
    PhoneFilter,
    RequestIdentity,
    UserProfile,
)
from phonebook.application.errors import (
    DuplicateError,
    InputValidationError,
    NotFoundError,
)
from phonebook.application.ports import (
    EventPublisher,
    PasswordHasher,
    PersonRepository,
    UserRepository,
)
from phonebook.domain import Person, User

logger = logging.getLogger(__name__)


def lookup_key(value: str | None) -> str:
    """Names and usernames are stored stripped; lookups strip the argument the same way."""
    return (value or "").strip()


class PhonebookService:
    """Core use cases. Stores are injected so the same logic runs on memory or Neo4j."""

    def __init__(
        self,
        persons: PersonRepository,
        users: UserRepository,
        events: EventPublisher,
        hasher: PasswordHasher,
        *,
        default_password: str,
    ) -> None:
        self._persons = persons
        self._users = users
        self._events = events
        self._hasher = hasher
        self._default_password = default_password

    # --- queries ---

    def person_count(self) -> int:
        return self._persons.count()

    def all_persons(self, phone: PhoneFilter | None = None) -> list[Person]:
        """All persons; YES keeps those with a phone, NO those without."""
        if phone is None:
            return self._persons.list_all()
        return self._persons.list_all(has_phone=phone is PhoneFilter.YES)

    def find_person(self, name: str) -> Person | None:
        return self._persons.find_by_name(lookup_key(name))

    def me(self, identity: RequestIdentity) -> UserProfile | None:
        return identity.current_user

    def profile(self, user: User) -> UserProfile:
        """Resolve the user's friend ids to Person records."""
        return UserProfile(user=user, friends=self._persons.get_many(user.friend_ids))

    # --- mutations ---

    def add_person(
        self,
        identity: RequestIdentity,
        *,
        name: str,
        street: str,
        city: str,
        phone: str | None = None,
    ) -> Person:
        """Create a person and add it to the caller's friends. Publishes PERSON_ADDED."""
        current = identity.require_user()
        args = {"name": name, "phone": phone, "street": street, "city": city}
        try:
            person = Person(name=name, phone=phone, street=street, city=city)
        except ValueError as e:
            raise InputValidationError(str(e), invalid_args=args) from e
        try:
            person = self._persons.add(person)
        except DuplicateError as e:
            raise InputValidationError(str(e), invalid_args=args) from e
        logger.info("Person %s created by %s", person.id, current.username)

        # Separate write: the person stays even if linking it fails.
        try:
            if self._users.add_friend(current.id, person.id) is None:
                logger.warning(
                    "User %s vanished before person %s could be linked", current.id, person.id
                )
        except Exception:
            logger.exception("Linking person %s to user %s failed", person.id, current.id)

        self._events.publish(PERSON_ADDED, person)
        return person

    def edit_number(self, identity: RequestIdentity, *, name: str, phone: str) -> Person:
        """Change the phone of the person with this exact name. Nothing else changes."""
        identity.require_user()
        args = {"name": name, "phone": phone}
        person = self._persons.find_by_name(lookup_key(name))
        if person is None:
            raise NotFoundError(f"person {name!r} not found", invalid_args=args)
        updated = self._persons.update(person.with_phone(phone))
        if updated is None:
            raise InputValidationError(f"person {name!r} could not be saved", invalid_args=args)
        return updated

    def create_user(self, username: str, password: str | None = None) -> UserProfile:
        """Create an account with no friends. Without a password the configured default is used."""
        if password is None:
            password = self._default_password
        elif not password.strip():
            raise InputValidationError("password must be non-empty", invalid_args=username)
        try:
            user = User(username=username, password_hash=self._hasher.hash(password))
        except ValueError as e:
            raise InputValidationError(str(e), invalid_args=username) from e
        try:
            user = self._users.add(user)
        except DuplicateError as e:
            raise InputValidationError(str(e), invalid_args=username) from e
        logger.info("User %s created", user.username)
        return UserProfile(user=user, friends=[])

    def add_as_friend(self, identity: RequestIdentity, name: str) -> UserProfile:
        """Add the named person to the caller's friends. Calling twice has no further effect."""
        current = identity.require_user()
        person = self._persons.find_by_name(lookup_key(name))
        if person is None:
            raise NotFoundError(f"person {name!r} not found", invalid_args={"name": name})
        user = self._users.add_friend(current.id, person.id)
        if user is None:
            raise NotFoundError(f"user {current.username!r} not found")
        return self.profile(user)
