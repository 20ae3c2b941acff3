#!/usr/bin/env python3
"""Create the phonebook constraints in Neo4j and load the sample persons.

Run from repo root with .env (NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD).
Idempotent: persons are only added when the store is empty.
"""
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402
from neo4j import GraphDatabase  # noqa: E402

from phonebook.config import load_settings  # noqa: E402
from phonebook.infrastructure import (  # noqa: E402
    Neo4jPersonRepository,
    ensure_constraints,
    seed_sample_persons,
)

load_dotenv(REPO_ROOT / ".env")


def main() -> int:
    settings = load_settings()
    driver = GraphDatabase.driver(
        settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
    )
    try:
        ensure_constraints(driver)
        repo = Neo4jPersonRepository(driver, phone_region=settings.phone_default_region)
        added = seed_sample_persons(repo)
        if not added:
            print("Store already has persons; nothing seeded.")
            return 0
        print(f"Seeded {added} person(s) into {settings.neo4j_uri}")
        return 0
    finally:
        driver.close()


if __name__ == "__main__":
    sys.exit(main())
