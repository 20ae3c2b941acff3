"""Environment configuration. Call load_settings after .env has been loaded."""

import os
from dataclasses import dataclass

STORE_MEMORY = "memory"
STORE_NEO4J = "neo4j"

_TRUE = {"1", "true", "yes", "on"}


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if not raw:
        return default
    return raw.lower() in _TRUE


def _env_int(name: str) -> int | None:
    raw = _env(name)
    return int(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    """Runtime settings. Secrets and connection strings come from the environment."""

    store: str = STORE_MEMORY
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    jwt_secret: str = "change_me"
    token_expire_minutes: int | None = None
    default_password: str = "plusultra"
    phone_default_region: str | None = None
    seed_sample_data: bool = False
    graphiql: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        if self.store not in (STORE_MEMORY, STORE_NEO4J):
            raise ValueError(
                f"Unsupported store {self.store!r}; use {STORE_MEMORY!r} or {STORE_NEO4J!r}."
            )


def load_settings() -> Settings:
    """Build Settings from environment variables (see .env.example)."""
    return Settings(
        store=_env("PHONEBOOK_STORE", STORE_MEMORY).lower(),
        neo4j_uri=_env("NEO4J_URI", "bolt://localhost:7687"),
        neo4j_user=_env("NEO4J_USER", "neo4j"),
        neo4j_password=_env("NEO4J_PASSWORD", "password"),
        jwt_secret=_env("JWT_SECRET", "change_me"),
        token_expire_minutes=_env_int("TOKEN_EXPIRE_MINUTES"),
        default_password=_env("DEFAULT_PASSWORD", "plusultra"),
        phone_default_region=_env("PHONE_DEFAULT_REGION").upper() or None,
        seed_sample_data=_env_bool("SEED_SAMPLE_DATA", False),
        graphiql=_env_bool("GRAPHIQL", True),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
