"""routedesk — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from routedesk.adapters.persistence.database import engine
from routedesk.config import settings
from routedesk.infrastructure.api.routes_health import router as health_router
from routedesk.infrastructure.api.routes_routing import router as routing_router
from routedesk.infrastructure.api.routes_rules import router as rules_router
from routedesk.infrastructure.api.routes_tickets import router as tickets_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="routedesk — Support Ticket Routing",
        description="Rule-based ticket routing with an optional AI advisor",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(tickets_router, prefix="/api")
    app.include_router(routing_router, prefix="/api")
    app.include_router(rules_router, prefix="/api")

    return app


app = create_app()
