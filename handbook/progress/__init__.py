"""Progress module: per-user status over content catalogs."""

from .domain import ContentItem, ProgressEntry, ProgressScope, ProgressStatus, ProgressSummary, ProgressViewItem
from .service import ProgressReconciler, StatusMutator


__all__ = [
    "ContentItem",
    "ProgressEntry",
    "ProgressReconciler",
    "ProgressScope",
    "ProgressStatus",
    "ProgressSummary",
    "ProgressViewItem",
    "StatusMutator",
]
