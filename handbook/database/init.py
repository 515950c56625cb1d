"""Database bootstrap: register models and create missing tables."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from .base import Base


logger = logging.getLogger(__name__)


def _register_models() -> None:
    """Import model modules so their tables are attached to ``Base.metadata``."""
    from handbook.content import models as content_models  # noqa: F401
    from handbook.progress import models as progress_models  # noqa: F401
    from handbook.users import models as user_models  # noqa: F401


async def init_database(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    _register_models()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
