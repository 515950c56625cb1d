"""SQL-backed progress store."""

import logging
from typing import TypeVar

from sqlalchemy import Delete, Select, delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.exceptions import DataIntegrityError, InvalidParameterError, StoreUnavailableError

from .domain import ProgressEntry, ProgressScope, ProgressStatus
from .models import ProgressRecord
from .queries import UPSERT_PROGRESS_QUERY


logger = logging.getLogger(__name__)

ScopedStatement = TypeVar("ScopedStatement", Select, Delete)

# Records written before the rename store "PENDING"
LEGACY_STATUSES: dict[str, ProgressStatus] = {"PENDING": ProgressStatus.NOT_STARTED}


def _parse_item_id(raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        msg = f"Invalid item ID format in progress records: {raw}"
        raise DataIntegrityError(msg) from e


def _parse_status(raw: str, item_id: int) -> ProgressStatus:
    if raw in LEGACY_STATUSES:
        return LEGACY_STATUSES[raw]
    try:
        return ProgressStatus(raw)
    except ValueError as e:
        msg = f"Invalid status {raw!r} stored for item {item_id}"
        raise DataIntegrityError(msg) from e


class SqlProgressStore:
    """Progress records of one catalog scope.

    With ``scope=None`` reads and deletes span every scope; writes need a scope.
    """

    def __init__(self, session: AsyncSession, scope: ProgressScope | None = ProgressScope.LIBRARY) -> None:
        self.session = session
        self.scope = scope

    def _scoped(self, stmt: ScopedStatement) -> ScopedStatement:
        if self.scope is None:
            return stmt
        return stmt.where(ProgressRecord.scope == self.scope.value)

    async def find_by_user(self, user_id: str) -> list[ProgressEntry]:
        """Fetch every record of ``user_id`` and validate it."""
        query = self._scoped(select(ProgressRecord).where(ProgressRecord.user_id == user_id)).order_by(
            ProgressRecord.id
        )
        try:
            result = await self.session.execute(query)
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.exception(f"Failed to fetch progress for user {user_id}")
            msg = "Failed to fetch progress records"
            raise StoreUnavailableError(msg) from e

        entries = []
        for record in records:
            item_id = _parse_item_id(record.item_id)
            status = _parse_status(record.status, item_id)
            entries.append(ProgressEntry(user_id=record.user_id, item_id=item_id, status=status))
        return entries

    async def upsert(self, user_id: str, item_id: int, status: ProgressStatus) -> None:
        """Insert or overwrite the status for (user_id, item_id) atomically."""
        if self.scope is None:
            msg = "A catalog scope is required to update progress"
            raise InvalidParameterError(msg)

        try:
            await self.session.execute(
                text(UPSERT_PROGRESS_QUERY),
                {
                    "user_id": user_id,
                    "scope": self.scope.value,
                    "item_id": str(item_id),
                    "status": status.value,
                },
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to upsert progress for user {user_id}, item {item_id}")
            msg = "Failed to update progress"
            raise StoreUnavailableError(msg) from e

    async def delete_all_by_user(self, user_id: str) -> int:
        """Bulk delete the user's records; zero rows is not an error."""
        try:
            result = await self.session.execute(
                self._scoped(delete(ProgressRecord).where(ProgressRecord.user_id == user_id))
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to reset progress for user {user_id}")
            msg = "Failed to reset progress"
            raise StoreUnavailableError(msg) from e

        return result.rowcount or 0
