"""Neo4j implementations of PersonRepository and UserRepository.
Graph: (:Person {id, name, phone, street, city, created_at}) and
(:User {id, username, password_hash, created_at})-[:FRIEND {added_at}]->(:Person).
Uniqueness of Person.name and User.username comes from constraints (see ensure_constraints);
the create queries also refuse duplicates so a missing constraint does not let them through.
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from neo4j.exceptions import ConstraintError

from phonebook.application.errors import DuplicateError
from phonebook.domain import Person, User
from phonebook.infrastructure.phone import stored_phone

_CONSTRAINTS = (
    "CREATE CONSTRAINT person_id_unique IF NOT EXISTS FOR (p:Person) REQUIRE p.id IS UNIQUE",
    "CREATE CONSTRAINT person_name_unique IF NOT EXISTS FOR (p:Person) REQUIRE p.name IS UNIQUE",
    "CREATE CONSTRAINT user_id_unique IF NOT EXISTS FOR (u:User) REQUIRE u.id IS UNIQUE",
    "CREATE CONSTRAINT user_username_unique IF NOT EXISTS FOR (u:User) REQUIRE u.username IS UNIQUE",
)

_CREATE_PERSON_QUERY = """
OPTIONAL MATCH (existing:Person {name: $name})
WITH existing
WHERE existing IS NULL
CREATE (p:Person {
    id: $id,
    name: $name,
    phone: $phone,
    street: $street,
    city: $city,
    created_at: $created_at
})
RETURN p
"""

_UPDATE_PERSON_QUERY = """
MATCH (p:Person {id: $id})
SET p.name = $name, p.phone = $phone, p.street = $street, p.city = $city
RETURN p
"""

_LIST_PERSONS_QUERIES = {
    None: "MATCH (p:Person) RETURN p ORDER BY p.created_at",
    True: "MATCH (p:Person) WHERE coalesce(p.phone, '') <> '' RETURN p ORDER BY p.created_at",
    False: "MATCH (p:Person) WHERE coalesce(p.phone, '') = '' RETURN p ORDER BY p.created_at",
}

_CREATE_USER_QUERY = """
OPTIONAL MATCH (existing:User {username: $username})
WITH existing
WHERE existing IS NULL
CREATE (u:User {
    id: $id,
    username: $username,
    password_hash: $password_hash,
    created_at: $created_at
})
RETURN u
"""

_USER_WITH_FRIENDS = """
OPTIONAL MATCH (u)-[f:FRIEND]->(p:Person)
WITH u, p, f
ORDER BY f.added_at
RETURN u, collect(p.id) AS friend_ids
"""

_GET_USER_BY_ID_QUERY = "MATCH (u:User {id: $value})" + _USER_WITH_FRIENDS
_GET_USER_BY_USERNAME_QUERY = "MATCH (u:User {username: $value})" + _USER_WITH_FRIENDS

_ADD_FRIEND_QUERY = """
MATCH (u:User {id: $user_id})
MATCH (p:Person {id: $person_id})
MERGE (u)-[f:FRIEND]->(p)
ON CREATE SET f.added_at = $added_at
"""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def ensure_constraints(driver) -> None:
    """Create unique constraints on Person(id, name) and User(id, username) if missing."""
    with driver.session() as session:
        for query in _CONSTRAINTS:
            session.run(query).consume()


class Neo4jPersonRepository:
    """Stores Person nodes in Neo4j."""

    def __init__(self, driver: object, *, phone_region: str | None = None) -> None:
        self._driver = driver
        self._phone_region = phone_region

    def add(self, person: Person) -> Person:
        phone = stored_phone(person.phone, default_region=self._phone_region)
        with self._driver.session() as session:
            try:
                record = session.run(
                    _CREATE_PERSON_QUERY,
                    id=person.id,
                    name=person.name,
                    phone=phone,
                    street=person.street,
                    city=person.city,
                    created_at=_now_iso(),
                ).single()
            except ConstraintError as e:
                raise DuplicateError("name", person.name) from e
        if record is None:
            raise DuplicateError("name", person.name)
        return _node_to_person(record["p"])

    def update(self, person: Person) -> Person | None:
        phone = stored_phone(person.phone, default_region=self._phone_region)
        with self._driver.session() as session:
            try:
                record = session.run(
                    _UPDATE_PERSON_QUERY,
                    id=person.id,
                    name=person.name,
                    phone=phone,
                    street=person.street,
                    city=person.city,
                ).single()
            except ConstraintError as e:
                raise DuplicateError("name", person.name) from e
        if record is None:
            return None
        return _node_to_person(record["p"])

    def get_by_id(self, person_id: str) -> Person | None:
        with self._driver.session() as session:
            record = session.run(
                "MATCH (p:Person {id: $id}) RETURN p", id=person_id
            ).single()
        return _node_to_person(record["p"]) if record else None

    def get_many(self, person_ids: Sequence[str]) -> list[Person]:
        if not person_ids:
            return []
        with self._driver.session() as session:
            result = session.run(
                "MATCH (p:Person) WHERE p.id IN $ids RETURN p", ids=list(person_ids)
            )
            by_id = {rec["p"]["id"]: _node_to_person(rec["p"]) for rec in result}
        return [by_id[pid] for pid in person_ids if pid in by_id]

    def find_by_name(self, name: str) -> Person | None:
        with self._driver.session() as session:
            record = session.run(
                "MATCH (p:Person {name: $name}) RETURN p LIMIT 1", name=name
            ).single()
        return _node_to_person(record["p"]) if record else None

    def list_all(self, has_phone: bool | None = None) -> list[Person]:
        with self._driver.session() as session:
            result = session.run(_LIST_PERSONS_QUERIES[has_phone])
            return [_node_to_person(rec["p"]) for rec in result]

    def count(self) -> int:
        with self._driver.session() as session:
            record = session.run("MATCH (p:Person) RETURN count(p) AS cnt").single()
        return record["cnt"]


class Neo4jUserRepository:
    """Stores User nodes in Neo4j; friends are FRIEND relationships ordered by added_at."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def _get(self, query: str, value: str) -> User | None:
        with self._driver.session() as session:
            record = session.run(query, value=value).single()
        if not record:
            return None
        return _node_to_user(record["u"], record["friend_ids"])

    def add(self, user: User) -> User:
        with self._driver.session() as session:
            try:
                record = session.run(
                    _CREATE_USER_QUERY,
                    id=user.id,
                    username=user.username,
                    password_hash=user.password_hash,
                    created_at=_now_iso(),
                ).single()
            except ConstraintError as e:
                raise DuplicateError("username", user.username) from e
        if record is None:
            raise DuplicateError("username", user.username)
        return _node_to_user(record["u"], [])

    def get_by_id(self, user_id: str) -> User | None:
        return self._get(_GET_USER_BY_ID_QUERY, user_id)

    def find_by_username(self, username: str) -> User | None:
        return self._get(_GET_USER_BY_USERNAME_QUERY, username)

    def add_friend(self, user_id: str, person_id: str) -> User | None:
        with self._driver.session() as session:
            session.run(
                _ADD_FRIEND_QUERY,
                user_id=user_id,
                person_id=person_id,
                added_at=_now_iso(),
            ).consume()
        return self.get_by_id(user_id)


def _node_to_person(node) -> Person:
    return Person(
        id=node["id"],
        name=node["name"],
        phone=node.get("phone") or None,
        street=node["street"],
        city=node["city"],
    )


def _node_to_user(node, friend_ids) -> User:
    return User(
        id=node["id"],
        username=node["username"],
        password_hash=node.get("password_hash") or "",
        friend_ids=tuple(pid for pid in friend_ids if pid),
    )
