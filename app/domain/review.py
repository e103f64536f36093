"""SQLAlchemy ORM models for reviews, replies and like/dislike votes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin, new_uuid
from app.domain.references import REVIEW_KINDS, single_reference_check


class Review(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint(single_reference_check(REVIEW_KINDS), name="single_review_reference"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="valid_rating"),
    )

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # "branch" | "menu_item" | "offer" | "overall" (overall is stored in branch_id)
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    branch_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("vendor_branches.id", ondelete="CASCADE"), nullable=True, index=True
    )
    menu_item_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=True, index=True
    )
    offer_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("offers.id", ondelete="CASCADE"), nullable=True, index=True
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class ReviewReply(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "review_replies"

    review_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    is_vendor_reply: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class ReviewLike(Base):
    """One vote per (review, user); later votes overwrite ``is_like``."""

    __tablename__ = "review_likes"
    __table_args__ = (
        UniqueConstraint("review_id", "user_id", name="uq_review_likes_review_user"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    review_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    is_like: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # No deleted_at: a vote is overwritten, never soft-deleted
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )
