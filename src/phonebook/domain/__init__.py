"""Domain layer: entities and value objects. No dependencies on outer layers."""

from phonebook.domain.entities import FIELD_MAX_LENGTH, Address, Person, User

__all__ = ["FIELD_MAX_LENGTH", "Address", "Person", "User"]
