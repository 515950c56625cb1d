"""Database model for per-user progress records."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from handbook.database.base import Base


class ProgressRecord(Base):
    """One user's status for one catalog item."""

    __tablename__ = "user_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "scope", "item_id", name="uq_user_scope_item"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    scope: Mapped[str] = mapped_column(String(32), nullable=False, default="library")
    # Kept as text like the legacy table; parsed back to int on read
    item_id: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        """Return string representation of the record."""
        return (
            f"<ProgressRecord(user_id={self.user_id}, scope={self.scope}, "
            f"item_id={self.item_id}, status={self.status})>"
        )
