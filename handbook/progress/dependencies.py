"""Wiring of progress services onto a request's database session."""

from sqlalchemy.ext.asyncio import AsyncSession

from handbook.content.store import SqlCatalogStore

from .domain import ProgressScope
from .service import ProgressReconciler, StatusMutator
from .store import SqlProgressStore


def build_reconciler(session: AsyncSession, scope: ProgressScope) -> ProgressReconciler:
    """Reconciler over the catalog and progress records of ``scope``."""
    return ProgressReconciler(
        catalog=SqlCatalogStore.for_scope(session, scope),
        progress=SqlProgressStore(session, scope),
    )


def build_mutator(session: AsyncSession, scope: ProgressScope | None) -> StatusMutator:
    """Mutator writing to ``scope``; ``None`` lets resets span all scopes."""
    return StatusMutator(SqlProgressStore(session, scope))
