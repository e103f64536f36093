"""SQLAlchemy ORM models for Vendors and their Branches.

Every domain model follows the same pattern:
  - Inherit Base, UUIDPrimaryKeyMixin, TimestampMixin
  - created_at / updated_at / deleted_at (from TimestampMixin)
  - value rules mirrored as named CHECK constraints
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.domain.enums import RegistrationStatus, sql_in
from app.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Vendor(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendors"
    __table_args__ = (
        UniqueConstraint("commercial_registration", name="uq_vendors_commercial_registration"),
        CheckConstraint(
            f"registration_status IN ({sql_in(RegistrationStatus)})",
            name="valid_registration_status",
        ),
    )

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    commercial_registration: Mapped[str] = mapped_column(String(255), nullable=False)
    business_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    business_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    business_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    business_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    registration_status: Mapped[str] = mapped_column(
        String(50), default=RegistrationStatus.PENDING.value, nullable=False, index=True
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=True
    )
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    branches: Mapped[List["Branch"]] = relationship(back_populates="vendor", lazy="noload")


class Branch(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendor_branches"
    __table_args__ = (
        CheckConstraint("latitude >= -90 AND latitude <= 90", name="valid_latitude"),
        CheckConstraint("longitude >= -180 AND longitude <= 180", name="valid_longitude"),
    )

    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 8), nullable=True)
    longitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(11, 8), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_main_branch: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    vendor: Mapped["Vendor"] = relationship(back_populates="branches", lazy="noload")
