"""Persistent storage adapters."""

from phonebook.infrastructure.persistence.neo4j_repository import (
    Neo4jPersonRepository,
    Neo4jUserRepository,
    ensure_constraints,
)

__all__ = ["Neo4jPersonRepository", "Neo4jUserRepository", "ensure_constraints"]
