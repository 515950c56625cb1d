from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from handbook.config.settings import get_settings


def create_app_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine for Postgres, or SQLite in local and test runs.

    - Postgres: standard pool with pre-ping.
    - SQLite (aiosqlite): one shared connection, so in-memory databases
      survive across sessions.
    """
    database_url = database_url or get_settings().DATABASE_URL

    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False, poolclass=StaticPool)

    return create_async_engine(
        database_url,
        echo=False,  # Set True for SQL debugging
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,  # ~1h
        pool_pre_ping=True,
        pool_use_lifo=True,
        connect_args={"timeout": 10},
    )


engine: AsyncEngine = create_app_engine()
