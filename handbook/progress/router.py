"""Progress tracking API endpoints."""

import logging

from fastapi import APIRouter

from handbook.auth import CurrentUserId, ensure_same_user
from handbook.core.response import ApiResponse, success_response
from handbook.database.session import DbSession
from handbook.exceptions import MissingParameterError

from .dependencies import build_mutator, build_reconciler
from .domain import ProgressScope
from .schemas import OverallProgress, ProgressView, ResetResult, StatusUpdate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("")
async def get_anonymous_progress(
    db: DbSession,
    scope: ProgressScope = ProgressScope.LIBRARY,
) -> ApiResponse[ProgressView]:
    """Catalog with every item not started, for callers without a user."""
    view = await build_reconciler(db, scope).get_progress_view(None)
    return success_response([item.to_dict() for item in view], "Progress fetched successfully")


@router.get("/overall")
async def get_overall_progress_without_user() -> ApiResponse[None]:
    """Reject summaries that do not name a user."""
    raise MissingParameterError("user_id")


@router.get("/overall/{user_id}")
async def get_overall_progress(
    user_id: str,
    db: DbSession,
    scope: ProgressScope = ProgressScope.LIBRARY,
) -> ApiResponse[OverallProgress]:
    """Share of the catalog the user has completed."""
    summary = await build_reconciler(db, scope).get_overall_progress(user_id)
    overall = OverallProgress(
        completed=summary.completed,
        in_progress=summary.in_progress,
        total=summary.total,
        overall_progress=summary.overall_progress,
    )
    return success_response(overall, "Overall progress fetched successfully")


@router.get("/{user_id}")
async def get_user_progress(
    user_id: str,
    db: DbSession,
    scope: ProgressScope = ProgressScope.LIBRARY,
) -> ApiResponse[ProgressView]:
    """Catalog merged with the user's progress records."""
    view = await build_reconciler(db, scope).get_progress_view(user_id)
    return success_response([item.to_dict() for item in view], "Progress fetched successfully")


@router.put("/update")
async def update_progress(
    update: StatusUpdate,
    db: DbSession,
    current_user_id: CurrentUserId,
) -> ApiResponse[None]:
    """Create or overwrite the status of one item for one user."""
    ensure_same_user(current_user_id, update.user_id)

    await build_mutator(db, update.scope).set_status(update.user_id, update.item_id, update.status)
    return success_response(message="Progress updated successfully")


@router.delete("/reset")
async def reset_progress_without_user() -> ApiResponse[None]:
    """Reject resets that do not name a user."""
    raise MissingParameterError("user_id")


@router.delete("/reset/{user_id}")
async def reset_progress(
    user_id: str,
    db: DbSession,
    current_user_id: CurrentUserId,
    scope: ProgressScope | None = None,
) -> ApiResponse[ResetResult]:
    """Delete the user's progress in one scope, or in all scopes when none is given."""
    ensure_same_user(current_user_id, user_id)

    deleted = await build_mutator(db, scope).reset_progress(user_id)
    return success_response(ResetResult(deleted=deleted), "User progress reset successfully")
