"""Business logic for progress tracking.

``ProgressReconciler`` joins a content catalog with a user's sparse progress
records; ``StatusMutator`` applies single status changes and bulk resets.
Both are handed their stores at construction.
"""

import logging

from handbook.exceptions import InvalidParameterError, MissingParameterError

from .domain import ProgressStatus, ProgressSummary, ProgressViewItem
from .protocols import CatalogStore, ProgressStore


logger = logging.getLogger(__name__)


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class ProgressReconciler:
    """Produce the merged progress view of one catalog for one user."""

    def __init__(self, catalog: CatalogStore, progress: ProgressStore) -> None:
        self.catalog = catalog
        self.progress = progress

    async def get_progress_view(self, user_id: str | None = None) -> list[ProgressViewItem]:
        """Return every catalog item annotated with the user's status.

        Items without a record default to ``NOT_STARTED``. Anonymous callers
        (no user id) get the whole catalog in that default state. Records for
        items no longer in the catalog are ignored.
        """
        items = await self.catalog.list_items()

        statuses: dict[int, ProgressStatus] = {}
        if not _is_blank(user_id):
            # Later records win when a store returns several for one item
            for entry in await self.progress.find_by_user(user_id):
                statuses[entry.item_id] = entry.status

        view = [
            ProgressViewItem(item=item, status=statuses.get(item.item_id, ProgressStatus.NOT_STARTED))
            for item in items
        ]

        logger.debug(f"Built progress view for user {user_id or '<anonymous>'}: {len(view)} items")
        return view

    async def get_overall_progress(self, user_id: str | None) -> ProgressSummary:
        """Count completed and in-progress items of the catalog for the user.

        Only items currently in the catalog count, so the percentage never
        exceeds 100. An empty catalog reports ``"0%"``.
        """
        if _is_blank(user_id):
            raise MissingParameterError("user_id")

        view = await self.get_progress_view(user_id)
        return ProgressSummary(
            completed=sum(1 for row in view if row.status is ProgressStatus.COMPLETED),
            in_progress=sum(1 for row in view if row.status is ProgressStatus.IN_PROGRESS),
            total=len(view),
        )


class StatusMutator:
    """Write side of progress tracking."""

    def __init__(self, progress: ProgressStore) -> None:
        self.progress = progress

    async def set_status(
        self,
        user_id: str | None,
        item_id: int | None,
        status: ProgressStatus | str | None,
    ) -> None:
        """Create or overwrite the user's status for one item.

        Any status may replace any other. The item is not checked against a
        catalog.

        Raises
        ------
            MissingParameterError: If any argument is absent (``0`` counts as absent for ``item_id``).
            InvalidParameterError: If ``status`` is not a known status.
        """
        missing = []
        if _is_blank(user_id):
            missing.append("user_id")
        if not item_id:
            missing.append("item_id")
        if _is_blank(status):
            missing.append("status")
        if missing:
            raise MissingParameterError(*missing)

        try:
            status = ProgressStatus(status)
        except ValueError as e:
            allowed = ", ".join(s.value for s in ProgressStatus)
            msg = f"Status must be one of: {allowed}"
            raise InvalidParameterError(msg) from e

        await self.progress.upsert(user_id, item_id, status)
        logger.info(f"Set status {status.value} for user {user_id}, item {item_id}")

    async def reset_progress(self, user_id: str | None) -> int:
        """Delete every record of the user. Returns the number removed."""
        if _is_blank(user_id):
            raise MissingParameterError("user_id")

        deleted = await self.progress.delete_all_by_user(user_id)
        logger.info(f"Reset progress for user {user_id}: {deleted} records removed")
        return deleted
