"""movie_explorer_discovery_service/models/database.py"""
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from movie_explorer_discovery_service.config import get_database_url
from movie_explorer_discovery_service.exceptions import ConfigurationError


def engine_options(database_url: str) -> Dict[str, Any]:
    """
    Engine keyword arguments for a database URL.

    Server databases (MySQL) get a pre-pinged, hourly recycled pool so idle
    Function hosts survive server-side timeouts. SQLite connections are shared
    across the host's worker threads; an in-memory database is pinned to a
    single connection so every session sees the same tables.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True, "pool_recycle": 3600}

    options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


DATABASE_URL = get_database_url()

if DATABASE_URL is None:
    raise ConfigurationError("DATABASE_URL is not configured. Set the DATABASE_URL environment variable.")

engine = create_engine(
    DATABASE_URL,
    echo=False,  # Set to True for SQL debugging
    **engine_options(DATABASE_URL)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Yield a session and close it when the caller is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
