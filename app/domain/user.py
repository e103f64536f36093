"""SQLAlchemy ORM model for platform users.

Users are created by the authentication service at signup; this service only
reads them (foreign-key target for vendors, favorites and reviews).
"""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.enums import Role, sql_in
from app.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(f"role IN ({sql_in(Role)})", name="valid_user_role"),
    )

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=Role.CUSTOMER.value)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
