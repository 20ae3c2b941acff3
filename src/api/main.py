"""
FastAPI backend: GraphQL API (queries, mutations, subscriptions) and health check.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from api.container import Services, build_services
from api.context import PhonebookContext
from api.schema import schema
from phonebook.config import STORE_NEO4J, Settings, load_settings
from phonebook.infrastructure import ensure_constraints, seed_sample_persons

settings = load_settings()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level, logging.INFO),
)
logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings | None = None, services: Services | None = None
) -> FastAPI:
    """Build the application. Tests pass their own settings or prebuilt services."""
    app_settings = app_settings or settings
    services = services or build_services(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            if services.driver is not None and app_settings.store == STORE_NEO4J:
                ensure_constraints(services.driver)
            if app_settings.seed_sample_data:
                seed_sample_persons(services.persons)
            logger.info("GraphQL endpoint ready at /graphql (subscriptions over WebSocket)")
            yield
        finally:
            services.close()

    async def get_context() -> PhonebookContext:
        return PhonebookContext(services)

    graphql_router = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if app_settings.graphiql else None,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
    )

    app = FastAPI(title="Phonebook API", lifespan=lifespan)
    app.state.services = services
    app.include_router(graphql_router, prefix="/graphql")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
