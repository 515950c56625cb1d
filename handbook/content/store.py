"""SQL-backed catalog stores."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.database.base import Base
from handbook.exceptions import StoreUnavailableError
from handbook.progress.domain import ContentItem, ProgressScope

from .models import LibraryEntry, Snippet, Topic


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogDefinition:
    """How a catalog table maps onto ``ContentItem``."""

    model: type[Base]
    key: str
    title: str
    order_by: str
    hidden: tuple[str, ...] = ()


CATALOGS: dict[ProgressScope, CatalogDefinition] = {
    ProgressScope.LIBRARY: CatalogDefinition(LibraryEntry, key="topic_id", title="title", order_by="topic_id"),
    ProgressScope.SNIPPET: CatalogDefinition(Snippet, key="snippet_id", title="label", order_by="order"),
    ProgressScope.TOPIC: CatalogDefinition(
        Topic,
        key="topic_id",
        title="title",
        order_by="topic_id",
        hidden=("explanation", "code_example", "key_points"),
    ),
}


def row_to_dict(row: Base, hidden: tuple[str, ...] = ()) -> dict[str, Any]:
    """Column values of an ORM row, minus ``hidden``."""
    return {
        attr.key: getattr(row, attr.key)
        for attr in inspect(row).mapper.column_attrs
        if attr.key not in hidden
    }


class SqlCatalogStore:
    """Read-only view of one catalog table."""

    def __init__(self, session: AsyncSession, definition: CatalogDefinition) -> None:
        self.session = session
        self.definition = definition

    @classmethod
    def for_scope(cls, session: AsyncSession, scope: ProgressScope) -> "SqlCatalogStore":
        return cls(session, CATALOGS[scope])

    def _to_item(self, row: Base) -> ContentItem:
        definition = self.definition
        return ContentItem(
            item_id=getattr(row, definition.key),
            title=getattr(row, definition.title),
            attributes=row_to_dict(row, definition.hidden),
        )

    async def list_items(self) -> list[ContentItem]:
        model = self.definition.model
        query = select(model).order_by(getattr(model, self.definition.order_by))
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to fetch catalog {model.__tablename__}")
            msg = f"Failed to fetch {model.__tablename__}"
            raise StoreUnavailableError(msg) from e
        return [self._to_item(row) for row in result.scalars().all()]

    async def get_item(self, item_id: int) -> ContentItem | None:
        model = self.definition.model
        try:
            row = await self.session.get(model, item_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to fetch {model.__tablename__} item {item_id}")
            msg = f"Failed to fetch {model.__tablename__}"
            raise StoreUnavailableError(msg) from e
        return self._to_item(row) if row is not None else None
