"""SQLAlchemy ORM models for branch menu items and promotional offers."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.enums import DiscountType, sql_in
from app.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class MenuItem(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "menu_items"
    __table_args__ = (CheckConstraint("price > 0", name="valid_price"),)

    branch_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendor_branches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, index=True)
    # Public path under /uploads/images/ (None when no image was uploaded)
    image_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Offer(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "offers"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="valid_dates"),
        CheckConstraint(f"discount_type IN ({sql_in(DiscountType)})", name="valid_discount_type"),
        CheckConstraint(
            "discount_value IS NULL OR discount_value > 0", name="valid_discount_value"
        ),
        CheckConstraint("minimum_order_amount >= 0", name="valid_minimum_order"),
    )

    branch_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendor_branches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    discount_type: Mapped[str] = mapped_column(String(20), nullable=False)
    discount_value: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    maximum_discount: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    minimum_order_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0"), nullable=False
    )

    # Stored as UTC; an offer is active while now() < end_date
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
