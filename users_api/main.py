"""Users API — FastAPI application entry point.

Invariants:
    - Settings are read at import; a missing PAGINATOR_LIMIT_DEFAULT stops the process
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersApiError → structured JSON responses
    - Repository → Service → Endpoints wired once, in lifespan, with explicit loggers
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_api.api.error_handlers import register_error_handlers
from users_api.api.routes import health, users
from users_api.config import Settings, get_settings
from users_api.infrastructure.database import DatabaseSessionManager, init_db
from users_api.infrastructure.observability import setup_logging
from users_api.infrastructure.user_repository import SqlAlchemyUserRepository
from users_api.services.user_endpoints import Endpoints, EndpointsConfig
from users_api.services.user_service import UserService

logger = logging.getLogger(__name__)


def build_endpoints(db: DatabaseSessionManager, settings: Settings) -> Endpoints:
    """Compose repository, service and controllers."""
    repository = SqlAlchemyUserRepository(
        db, logging.getLogger("users_api.repository"),
    )
    service = UserService(repository, logging.getLogger("users_api.service"))
    return Endpoints(
        service,
        EndpointsConfig(default_page_limit=settings.paginator_limit_default),
        logging.getLogger("users_api.endpoints"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    app.state.endpoints = build_endpoints(db, settings)
    logger.info("Users API started")
    yield
    logger.info("Users API shutting down")
    await db.dispose()


app = FastAPI(
    title="Users API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=[
        "Accept", "Authorization", "Cache-Control", "Content-Type", "DNT",
        "If-Modified-Since", "Keep-Alive", "Origin", "User-Agent",
        "X-Requested-With", "X-Request-ID",
    ],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
