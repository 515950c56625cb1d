"""Load a JSON array of catalog records into one catalog table.

Usage:
    python -m handbook.scripts.import_catalog library library.json

Records are upserted by their key, so re-running an import updates titles
and file references in place.
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.content.models import Blog, LibraryEntry, Question, Snippet, Topic
from handbook.database.base import Base
from handbook.database.engine import engine
from handbook.database.init import init_database
from handbook.database.session import async_session_maker


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CATALOG_MODELS: dict[str, type[Base]] = {
    "topics": Topic,
    "library": LibraryEntry,
    "snippets": Snippet,
    "blogs": Blog,
    "questions": Question,
}


def load_records(path: Path) -> list[dict[str, Any]]:
    """Read and sanity check the JSON file."""
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        msg = f"{path} must contain a JSON array of records"
        raise ValueError(msg)
    return data


async def import_records(session: AsyncSession, model: type[Base], records: list[dict[str, Any]]) -> int:
    """Merge ``records`` into ``model``'s table. Unknown fields are dropped."""
    columns = {attr.key for attr in inspect(model).column_attrs}
    for record in records:
        await session.merge(model(**{k: v for k, v in record.items() if k in columns}))
    await session.commit()
    return len(records)


async def main(catalog: str, path: Path) -> None:
    model = CATALOG_MODELS[catalog]
    records = load_records(path)
    logger.info(f"Successfully parsed {path}. Found {len(records)} items.")

    await init_database(engine)
    async with async_session_maker() as session:
        count = await import_records(session, model, records)
    logger.info(f"Imported {count} records into {model.__tablename__}")

    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("catalog", choices=sorted(CATALOG_MODELS))
    parser.add_argument("path", type=Path)
    args = parser.parse_args()
    asyncio.run(main(args.catalog, args.path))
