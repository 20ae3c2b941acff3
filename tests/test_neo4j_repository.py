"""Integration tests for the Neo4j repositories. Require Docker
(testcontainers)."""

import pytest

from phonebook.application import (
    DuplicateError,
    InputValidationError,
    PhonebookService,
    PhoneFilter,
    RequestIdentity,
)
from phonebook.domain import Person, User
from phonebook.infrastructure import (
    EventBroker,
    Neo4jPersonRepository,
    Neo4jUserRepository,
    Pbkdf2PasswordHasher,
    ensure_constraints,
)
from phonebook.infrastructure.persistence.neo4j_repository import (
    _GET_USER_BY_ID_QUERY,
    _GET_USER_BY_USERNAME_QUERY,
)


@pytest.fixture(scope="session")
def neo4j_driver():
    from testcontainers.neo4j import Neo4jContainer

    with Neo4jContainer() as neo4j:
        driver = neo4j.get_driver()
        try:
            ensure_constraints(driver)
            yield driver
        finally:
            driver.close()


@pytest.fixture
def clean_neo4j(neo4j_driver):
    """Clear the graph before each test so tests are independent."""
    with neo4j_driver.session() as session:
        session.run("MATCH (n) DETACH DELETE n")
    yield neo4j_driver


def _arto(**overrides) -> Person:
    fields = {"name": "Arto Hellas", "phone": "040-123543", "street": "Tapiolankatu 5 A", "city": "Espoo"}
    fields.update(overrides)
    return Person(**fields)


def test_add_get_find_count(clean_neo4j):
    repo = Neo4jPersonRepository(clean_neo4j)
    person = repo.add(_arto())

    assert repo.get_by_id(person.id) == person
    assert repo.find_by_name("Arto Hellas") == person
    assert repo.find_by_name("arto hellas") is None
    assert repo.count() == 1


def test_duplicate_name_rejected(clean_neo4j):
    repo = Neo4jPersonRepository(clean_neo4j)
    repo.add(_arto())
    with pytest.raises(DuplicateError):
        repo.add(_arto(street="Other 1"))
    assert repo.count() == 1


def test_list_all_ordering_and_phone_filter(clean_neo4j):
    repo = Neo4jPersonRepository(clean_neo4j)
    repo.add(_arto())
    repo.add(Person(name="Venla Ruuskanen", street="Nallemäentie 22 C", city="Helsinki"))
    repo.add(Person(name="Matti Luukkainen", phone="040-432342", street="S", city="Helsinki"))

    assert [p.name for p in repo.list_all()] == ["Arto Hellas", "Venla Ruuskanen", "Matti Luukkainen"]
    assert [p.name for p in repo.list_all(has_phone=True)] == ["Arto Hellas", "Matti Luukkainen"]
    assert [p.name for p in repo.list_all(has_phone=False)] == ["Venla Ruuskanen"]


def test_phone_normalized_with_default_region(clean_neo4j):
    repo = Neo4jPersonRepository(clean_neo4j, phone_region="US")
    person = repo.add(_arto(phone="202 555 1234"))
    assert person.phone == "+12025551234"
    assert repo.get_by_id(person.id).phone == "+12025551234"


def test_update_changes_phone(clean_neo4j):
    repo = Neo4jPersonRepository(clean_neo4j)
    person = repo.add(_arto())
    updated = repo.update(person.with_phone("050-1"))
    assert updated == person.with_phone("050-1")
    assert repo.update(Person(name="Ghost", street="S", city="C")) is None


def test_get_many_keeps_requested_order(clean_neo4j):
    repo = Neo4jPersonRepository(clean_neo4j)
    a = repo.add(_arto())
    b = repo.add(Person(name="Venla Ruuskanen", street="S", city="C"))
    assert [p.id for p in repo.get_many([b.id, "missing", a.id])] == [b.id, a.id]


def test_users_and_friends(clean_neo4j):
    persons = Neo4jPersonRepository(clean_neo4j)
    users = Neo4jUserRepository(clean_neo4j)
    a = persons.add(_arto())
    b = persons.add(Person(name="Venla Ruuskanen", street="S", city="C"))
    user = users.add(User(username="mluukkai", password_hash="salt$hash"))

    users.add_friend(user.id, b.id)
    users.add_friend(user.id, a.id)
    stored = users.add_friend(user.id, b.id)

    assert stored.friend_ids == (b.id, a.id)
    assert users.find_by_username("mluukkai") == stored
    assert users.get_by_id(user.id).password_hash == "salt$hash"
    assert users.add_friend("missing", a.id) is None


def _operators(plan) -> set[str]:
    names = {plan["operatorType"].split("@")[0]}
    for child in plan.get("children", []):
        names |= _operators(child)
    return names


@pytest.mark.parametrize("query", [_GET_USER_BY_ID_QUERY, _GET_USER_BY_USERNAME_QUERY])
def test_user_lookups_seek_unique_index(clean_neo4j, query):
    with clean_neo4j.session() as session:
        plan = session.run("EXPLAIN " + query, value="mluukkai").consume().plan
    operators = _operators(plan)
    assert "NodeUniqueIndexSeek" in operators
    assert "AllNodesScan" not in operators
    assert "NodeByLabelScan" not in operators


def test_duplicate_username_rejected(clean_neo4j):
    users = Neo4jUserRepository(clean_neo4j)
    users.add(User(username="mluukkai"))
    with pytest.raises(DuplicateError):
        users.add(User(username="mluukkai"))


def test_service_on_neo4j(clean_neo4j):
    persons = Neo4jPersonRepository(clean_neo4j)
    service = PhonebookService(
        persons,
        Neo4jUserRepository(clean_neo4j),
        EventBroker(),
        Pbkdf2PasswordHasher(iterations=1000),
        default_password="plusultra",
    )
    me = RequestIdentity(user=service.create_user("mluukkai"))
    person = service.add_person(me, name="Arto Hellas", street="S", city="C")

    with pytest.raises(InputValidationError):
        service.add_person(me, name="Arto Hellas", street="S", city="C")

    profile = service.add_as_friend(me, "Arto Hellas")
    assert [f.id for f in profile.friends] == [person.id]
    assert service.person_count() == 1
    assert service.all_persons(PhoneFilter.YES) == []
