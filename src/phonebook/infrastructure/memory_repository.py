"""In-memory implementations of PersonRepository and UserRepository (no DB)."""

import threading
from collections.abc import Sequence

from phonebook.application.errors import DuplicateError
from phonebook.domain import Person, User
from phonebook.infrastructure.phone import stored_phone


class InMemoryPersonRepository:
    """Stores persons in memory. Order preserved by insertion; names are unique."""

    def __init__(self, *, phone_region: str | None = None) -> None:
        self._by_id: dict[str, Person] = {}
        self._id_by_name: dict[str, str] = {}
        self._order: list[str] = []
        self._phone_region = phone_region
        self._lock = threading.Lock()

    def _normalized(self, person: Person) -> Person:
        phone = stored_phone(person.phone, default_region=self._phone_region)
        if phone == person.phone:
            return person
        return person.with_phone(phone)

    def add(self, person: Person) -> Person:
        person = self._normalized(person)
        with self._lock:
            if person.name in self._id_by_name:
                raise DuplicateError("name", person.name)
            if person.id in self._by_id:
                raise DuplicateError("id", person.id)
            self._by_id[person.id] = person
            self._id_by_name[person.name] = person.id
            self._order.append(person.id)
        return person

    def update(self, person: Person) -> Person | None:
        person = self._normalized(person)
        with self._lock:
            current = self._by_id.get(person.id)
            if current is None:
                return None
            if current.name != person.name:
                if person.name in self._id_by_name:
                    raise DuplicateError("name", person.name)
                del self._id_by_name[current.name]
                self._id_by_name[person.name] = person.id
            self._by_id[person.id] = person
        return person

    def get_by_id(self, person_id: str) -> Person | None:
        return self._by_id.get(person_id)

    def get_many(self, person_ids: Sequence[str]) -> list[Person]:
        return [self._by_id[pid] for pid in person_ids if pid in self._by_id]

    def find_by_name(self, name: str) -> Person | None:
        person_id = self._id_by_name.get(name)
        return self._by_id.get(person_id) if person_id else None

    def list_all(self, has_phone: bool | None = None) -> list[Person]:
        persons = [self._by_id[pid] for pid in self._order]
        if has_phone is None:
            return persons
        return [p for p in persons if p.has_phone == has_phone]

    def count(self) -> int:
        return len(self._order)


class InMemoryUserRepository:
    """Stores users in memory, keyed by id; usernames are unique."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}
        self._id_by_username: dict[str, str] = {}
        self._lock = threading.Lock()

    def add(self, user: User) -> User:
        with self._lock:
            if user.username in self._id_by_username:
                raise DuplicateError("username", user.username)
            self._by_id[user.id] = user
            self._id_by_username[user.username] = user.id
        return user

    def get_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    def find_by_username(self, username: str) -> User | None:
        user_id = self._id_by_username.get(username)
        return self._by_id.get(user_id) if user_id else None

    def add_friend(self, user_id: str, person_id: str) -> User | None:
        with self._lock:
            user = self._by_id.get(user_id)
            if user is None:
                return None
            user = user.with_friend(person_id)
            self._by_id[user_id] = user
        return user
