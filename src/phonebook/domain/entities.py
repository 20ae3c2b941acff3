"""Domain entities: Person, Address, and User."""

import uuid
from dataclasses import dataclass, field

# Max length for name, street, city and username.
FIELD_MAX_LENGTH = 200


def _required(value: str | None, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"{label} must be non-empty.")
    if len(cleaned) > FIELD_MAX_LENGTH:
        raise ValueError(f"{label} must be at most {FIELD_MAX_LENGTH} characters.")
    return cleaned


@dataclass(frozen=True)
class Address:
    """Street and city of a Person. Derived from the Person, never stored on its own."""

    street: str
    city: str


@dataclass(frozen=True)
class Person:
    """
    A phonebook entry. Name is unique across the phonebook.
    Only the phone may change after creation (see with_phone).
    """

    name: str = field(default="")
    street: str = field(default="")
    city: str = field(default="")
    phone: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        object.__setattr__(self, "name", _required(self.name, "Person name"))
        object.__setattr__(self, "street", _required(self.street, "Person street"))
        object.__setattr__(self, "city", _required(self.city, "Person city"))
        if self.phone is not None:
            object.__setattr__(self, "phone", self.phone.strip() or None)

    @property
    def address(self) -> Address:
        return Address(street=self.street, city=self.city)

    @property
    def has_phone(self) -> bool:
        return bool(self.phone)

    def with_phone(self, phone: str | None) -> "Person":
        """Return a copy with the phone replaced; id and other fields unchanged."""
        return Person(
            id=self.id,
            name=self.name,
            street=self.street,
            city=self.city,
            phone=phone,
        )


@dataclass(frozen=True)
class User:
    """
    An account holding an ordered list of friend Person ids.
    Each Person appears at most once in friend_ids.
    """

    username: str = field(default="")
    password_hash: str = field(default="", repr=False)
    friend_ids: tuple[str, ...] = ()
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        object.__setattr__(self, "username", _required(self.username, "Username"))
        # Drop repeated ids, keep first occurrence order.
        object.__setattr__(self, "friend_ids", tuple(dict.fromkeys(self.friend_ids)))

    def has_friend(self, person_id: str) -> bool:
        return person_id in self.friend_ids

    def with_friend(self, person_id: str) -> "User":
        """Return a copy with person_id appended to friends, unless already there."""
        if self.has_friend(person_id):
            return self
        return User(
            id=self.id,
            username=self.username,
            password_hash=self.password_hash,
            friend_ids=self.friend_ids + (person_id,),
        )
