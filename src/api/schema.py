"""GraphQL schema: Person, Address, User, Token types with queries, mutations and the personAdded subscription."""

from collections.abc import AsyncGenerator, Iterator
from contextlib import contextmanager

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from api.context import PhonebookContext
from phonebook.application import PERSON_ADDED, PhonebookError, PhoneFilter, UserProfile
from phonebook.domain import Person

PhonebookInfo = Info[PhonebookContext, None]

YesNo = strawberry.enum(PhoneFilter, name="YesNo")


@contextmanager
def client_errors() -> Iterator[None]:
    """Re-raise application errors as GraphQL errors carrying their code and invalid args."""
    try:
        yield
    except PhonebookError as e:
        raise GraphQLError(e.message, extensions=e.extensions, original_error=e) from e


@strawberry.type
class Address:
    street: str
    city: str


@strawberry.type(name="Person")
class PersonType:
    name: str
    phone: str | None
    id: strawberry.ID
    street: strawberry.Private[str]
    city: strawberry.Private[str]

    @strawberry.field
    def address(self) -> Address:
        return Address(street=self.street, city=self.city)

    @classmethod
    def from_domain(cls, person: Person) -> "PersonType":
        return cls(
            name=person.name,
            phone=person.phone,
            id=strawberry.ID(person.id),
            street=person.street,
            city=person.city,
        )


@strawberry.type(name="User")
class UserType:
    username: str
    friends: list[PersonType]
    id: strawberry.ID

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserType":
        return cls(
            username=profile.username,
            friends=[PersonType.from_domain(p) for p in profile.friends],
            id=strawberry.ID(profile.id),
        )


@strawberry.type
class Token:
    value: str


@strawberry.input
class EditNumberInput:
    name: str
    phone: str


@strawberry.input
class LoginCredentials:
    username: str
    password: str


@strawberry.type
class Query:
    @strawberry.field
    def person_count(self, info: PhonebookInfo) -> int:
        return info.context.services.phonebook.person_count()

    @strawberry.field
    def all_persons(self, info: PhonebookInfo, phone: YesNo | None = None) -> list[PersonType]:
        persons = info.context.services.phonebook.all_persons(phone)
        return [PersonType.from_domain(p) for p in persons]

    @strawberry.field
    def find_person(self, info: PhonebookInfo, name: str) -> PersonType | None:
        person = info.context.services.phonebook.find_person(name)
        return PersonType.from_domain(person) if person else None

    @strawberry.field
    def me(self, info: PhonebookInfo) -> UserType | None:
        with client_errors():
            profile = info.context.services.phonebook.me(info.context.identity)
        return UserType.from_profile(profile) if profile else None


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def add_person(
        self,
        info: PhonebookInfo,
        name: str,
        street: str,
        city: str,
        phone: str | None = None,
    ) -> PersonType | None:
        with client_errors():
            person = info.context.services.phonebook.add_person(
                info.context.identity, name=name, phone=phone, street=street, city=city
            )
        return PersonType.from_domain(person)

    @strawberry.mutation
    def edit_number(self, info: PhonebookInfo, input: EditNumberInput) -> PersonType | None:
        with client_errors():
            person = info.context.services.phonebook.edit_number(
                info.context.identity, name=input.name, phone=input.phone
            )
        return PersonType.from_domain(person)

    @strawberry.mutation
    def create_user(
        self, info: PhonebookInfo, username: str, password: str | None = None
    ) -> UserType | None:
        with client_errors():
            profile = info.context.services.phonebook.create_user(username, password)
        return UserType.from_profile(profile)

    @strawberry.mutation
    def login(self, info: PhonebookInfo, input: LoginCredentials) -> Token | None:
        with client_errors():
            value = info.context.services.identity.login(input.username, input.password)
        return Token(value=value)

    @strawberry.mutation
    def add_as_friend(self, info: PhonebookInfo, name: str) -> UserType | None:
        with client_errors():
            profile = info.context.services.phonebook.add_as_friend(info.context.identity, name)
        return UserType.from_profile(profile)


@strawberry.type
class Subscription:
    @strawberry.subscription
    async def person_added(self, info: PhonebookInfo) -> AsyncGenerator[PersonType, None]:
        async for person in info.context.services.events.subscribe(PERSON_ADDED):
            yield PersonType.from_domain(person)


schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)
