"""Database engine, session factory and per-request session dependency."""

import logging
from collections.abc import Generator
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine for DATABASE_URL."""
    connect_args: dict[str, object] = {}
    if settings.is_sqlite:
        # Route functions run in a thread pool; one sqlite connection may cross threads.
        connect_args["check_same_thread"] = False
        _ensure_sqlite_directory(settings.DATABASE_URL)
    return create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        echo=settings.DEBUG,
        connect_args=connect_args,
    )


def _ensure_sqlite_directory(database_url: str) -> None:
    database = make_url(database_url).database
    if not database or database == ":memory:":
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False
