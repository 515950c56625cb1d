"""Schemas for progress API."""

from typing import Any

from pydantic import BaseModel, Field

from .domain import ProgressScope


class StatusUpdate(BaseModel):
    """Body of a status change.

    Fields are optional here so that absent values reach the mutator and are
    reported together as missing parameters.
    """

    user_id: str | None = None
    item_id: int | None = None
    status: str | None = Field(None, description="NOT_STARTED, IN_PROGRESS or COMPLETED")
    scope: ProgressScope = ProgressScope.LIBRARY


class ResetResult(BaseModel):
    deleted: int


class OverallProgress(BaseModel):
    completed: int
    in_progress: int
    total: int
    overall_progress: str = Field(..., description="Completed share of the catalog, e.g. \"50.00%\"")


ProgressView = list[dict[str, Any]]
