"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  user.py        — Users (read-only; owned by the auth service)
  vendor.py      — Vendors and their branches
  menu.py        — Menu items and offers (children of a branch)
  favorite.py    — Customer favorites (polymorphic single target)
  review.py      — Reviews, replies and like/dislike votes
  references.py  — TargetRef tagged union shared by favorites and reviews
  enums.py       — Role, RegistrationStatus, DiscountType
  mixins.py      — Shared UUIDPrimaryKeyMixin, TimestampMixin
"""

from app.domain.favorite import Favorite
from app.domain.menu import MenuItem, Offer
from app.domain.review import Review, ReviewLike, ReviewReply
from app.domain.user import User
from app.domain.vendor import Branch, Vendor

__all__ = [
    "Branch",
    "Favorite",
    "MenuItem",
    "Offer",
    "Review",
    "ReviewLike",
    "ReviewReply",
    "User",
    "Vendor",
]
