"""Domain types for progress tracking."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProgressStatus(str, Enum):
    """Closed set of statuses a learner can have for one content item."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class ProgressScope(str, Enum):
    """Catalog a progress record belongs to."""

    LIBRARY = "library"
    SNIPPET = "snippet"
    TOPIC = "topic"


@dataclass(frozen=True)
class ContentItem:
    """One catalog entry. ``attributes`` are passed through untouched."""

    item_id: int
    title: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProgressEntry:
    """A stored status for one (user, item) pair."""

    user_id: str
    item_id: int
    status: ProgressStatus


@dataclass(frozen=True)
class ProgressViewItem:
    """A catalog entry annotated with the user's status."""

    item: ContentItem
    status: ProgressStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.item.attributes,
            "item_id": self.item.item_id,
            "title": self.item.title,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ProgressSummary:
    """Completion counts of one user over one catalog."""

    completed: int
    in_progress: int
    total: int

    @property
    def overall_progress(self) -> str:
        if not self.total:
            return "0%"
        return f"{self.completed / self.total * 100:.2f}%"
