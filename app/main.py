"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging
from app.core.pipeline import build_stages
from app.core.security import TokenService
from app.models import Base
from app.services.credentials import CredentialStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    if settings.DB_AUTO_CREATE:
        Base.metadata.create_all(app.state.engine)
    if settings.SEED_DEMO_USERS:
        app.state.credentials.seed_demo_users()
    logger.info(
        "Service started: env=%s database=%s",
        settings.APP_ENV,
        app.state.engine.dialect.name,
    )
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application with its process-wide state.

    Settings, the token service and the session factory are created once here
    and are read-only afterwards; request handlers reach them via app.state.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Object Service API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    credentials = CredentialStore(session_factory, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    token_service = TokenService.from_settings(settings, credentials)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.credentials = credentials
    app.state.token_service = token_service
    app.state.auth_stages = build_stages(token_service)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Object Service API"}

    return app

