"""Wires repositories, services, and the event broker for one application instance."""

import logging
from dataclasses import dataclass

from neo4j import GraphDatabase

from phonebook.application import (
    IdentityService,
    PersonRepository,
    PhonebookService,
    UserRepository,
)
from phonebook.config import STORE_NEO4J, Settings
from phonebook.infrastructure import (
    EventBroker,
    InMemoryPersonRepository,
    InMemoryUserRepository,
    JwtTokenCodec,
    Neo4jPersonRepository,
    Neo4jUserRepository,
    Pbkdf2PasswordHasher,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    phonebook: PhonebookService
    identity: IdentityService
    events: EventBroker
    persons: PersonRepository
    users: UserRepository
    driver: object | None = None

    def close(self) -> None:
        if self.driver is not None:
            self.driver.close()
            self.driver = None


def _get_driver(settings: Settings):
    return GraphDatabase.driver(
        settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
    )


def build_services(settings: Settings) -> Services:
    """Build the object graph for the configured store backend."""
    driver = None
    if settings.store == STORE_NEO4J:
        logger.info("Using Neo4j store at %s", settings.neo4j_uri)
        driver = _get_driver(settings)
        persons = Neo4jPersonRepository(driver, phone_region=settings.phone_default_region)
        users = Neo4jUserRepository(driver)
    else:
        logger.info("Using in-memory store")
        persons = InMemoryPersonRepository(phone_region=settings.phone_default_region)
        users = InMemoryUserRepository()

    events = EventBroker()
    hasher = Pbkdf2PasswordHasher()
    codec = JwtTokenCodec(settings.jwt_secret, expire_minutes=settings.token_expire_minutes)
    return Services(
        phonebook=PhonebookService(
            persons,
            users,
            events,
            hasher,
            default_password=settings.default_password,
        ),
        identity=IdentityService(users, persons, codec, hasher),
        events=events,
        persons=persons,
        users=users,
        driver=driver,
    )
