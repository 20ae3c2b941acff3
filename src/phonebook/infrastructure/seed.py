"""Sample phonebook entries for demos and local development."""

import logging

from phonebook.application.errors import DuplicateError
from phonebook.application.ports import PersonRepository
from phonebook.domain import Person

logger = logging.getLogger(__name__)

SAMPLE_PERSONS = (
    {"name": "Arto Hellas", "phone": "040-123543", "street": "Tapiolankatu 5 A", "city": "Espoo"},
    {"name": "Matti Luukkainen", "phone": "040-432342", "street": "Malminkaari 10 A", "city": "Helsinki"},
    {"name": "Venla Ruuskanen", "phone": None, "street": "Nallemäentie 22 C", "city": "Helsinki"},
)


def seed_sample_persons(repository: PersonRepository) -> int:
    """Add the sample persons to an empty store. Returns how many were added."""
    if repository.count() > 0:
        return 0
    added = 0
    for fields in SAMPLE_PERSONS:
        try:
            repository.add(Person(**fields))
        except DuplicateError:
            continue
        added += 1
    logger.info("Seeded %d sample person(s)", added)
    return added
