"""SQLAlchemy ORM model for customer favorites (polymorphic single target)."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin
from app.domain.references import FAVORITE_KINDS, single_reference_check


def _unique_target(column: str) -> Index:
    # One favorite per (user, target); partial so the NULL columns don't defeat it
    condition = text(f"{column} IS NOT NULL")
    return Index(
        f"uq_favorites_user_{column}",
        "user_id",
        column,
        unique=True,
        sqlite_where=condition,
        postgresql_where=condition,
    )


class Favorite(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "favorites"
    __table_args__ = (
        CheckConstraint(single_reference_check(FAVORITE_KINDS), name="single_favorite_reference"),
        _unique_target("branch_id"),
        _unique_target("menu_item_id"),
        _unique_target("offer_id"),
    )

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # "branch" | "menu_item" | "offer"
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    branch_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("vendor_branches.id", ondelete="CASCADE"), nullable=True
    )
    menu_item_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=True
    )
    offer_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("offers.id", ondelete="CASCADE"), nullable=True
    )
