"""Store contracts used by the reconciler and the mutator.

Either backend (SQL tables here, in-memory fakes in tests) satisfies them.
"""

from typing import Protocol

from .domain import ContentItem, ProgressEntry, ProgressStatus


class CatalogStore(Protocol):
    """Read-only access to one content catalog."""

    async def list_items(self) -> list[ContentItem]:
        """Return every catalog item in store order."""
        ...

    async def get_item(self, item_id: int) -> ContentItem | None:
        """Return one item, or None when it does not exist."""
        ...


class ProgressStore(Protocol):
    """Per-user status records, unique per (user, item)."""

    async def find_by_user(self, user_id: str) -> list[ProgressEntry]:
        """Return all records of ``user_id``."""
        ...

    async def upsert(self, user_id: str, item_id: int, status: ProgressStatus) -> None:
        """Create or overwrite the record for (user_id, item_id) in one write."""
        ...

    async def delete_all_by_user(self, user_id: str) -> int:
        """Delete every record of ``user_id`` and return how many went away."""
        ...
