"""initial vendors schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

from app.domain.enums import DiscountType, RegistrationStatus, Role, sql_in
from app.domain.references import FAVORITE_KINDS, REVIEW_KINDS, single_reference_check

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=36), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _fk(name: str, target: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name, sa.String(length=36), sa.ForeignKey(target, ondelete="CASCADE"), nullable=nullable
    )


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("role", sa.String(length=50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint(f"role IN ({sql_in(Role)})", name="valid_user_role"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "vendors",
        _id(),
        _fk("user_id", "users.id"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("commercial_registration", sa.String(length=255), nullable=False),
        sa.Column("business_phone", sa.String(length=20), nullable=True),
        sa.Column("business_email", sa.String(length=255), nullable=True),
        sa.Column("business_address", sa.Text(), nullable=True),
        sa.Column("business_description", sa.Text(), nullable=True),
        sa.Column("registration_status", sa.String(length=50), nullable=False, server_default="pending"),
        sa.Column("approval_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", sa.String(length=36), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("commercial_registration", name="uq_vendors_commercial_registration"),
        sa.CheckConstraint(
            f"registration_status IN ({sql_in(RegistrationStatus)})",
            name="valid_registration_status",
        ),
    )
    op.create_index("ix_vendors_user_id", "vendors", ["user_id"])
    op.create_index("ix_vendors_registration_status", "vendors", ["registration_status"])

    op.create_table(
        "vendor_branches",
        _id(),
        _fk("vendor_id", "vendors.id"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("contact_phone", sa.String(length=20), nullable=True),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_main_branch", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint("latitude >= -90 AND latitude <= 90", name="valid_latitude"),
        sa.CheckConstraint("longitude >= -180 AND longitude <= 180", name="valid_longitude"),
    )
    op.create_index("ix_vendor_branches_vendor_id", "vendor_branches", ["vendor_id"])

    op.create_table(
        "menu_items",
        _id(),
        _fk("branch_id", "vendor_branches.id"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("image_path", sa.String(length=255), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("price > 0", name="valid_price"),
    )
    op.create_index("ix_menu_items_branch_id", "menu_items", ["branch_id"])
    op.create_index("ix_menu_items_price", "menu_items", ["price"])

    op.create_table(
        "offers",
        _id(),
        _fk("branch_id", "vendor_branches.id"),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("discount_type", sa.String(length=20), nullable=False),
        sa.Column("discount_value", sa.Numeric(10, 2), nullable=True),
        sa.Column("maximum_discount", sa.Numeric(10, 2), nullable=True),
        sa.Column("minimum_order_amount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("start_date < end_date", name="valid_dates"),
        sa.CheckConstraint(f"discount_type IN ({sql_in(DiscountType)})", name="valid_discount_type"),
        sa.CheckConstraint("discount_value IS NULL OR discount_value > 0", name="valid_discount_value"),
        sa.CheckConstraint("minimum_order_amount >= 0", name="valid_minimum_order"),
    )
    op.create_index("ix_offers_branch_id", "offers", ["branch_id"])
    op.create_index("ix_offers_end_date", "offers", ["end_date"])

    op.create_table(
        "favorites",
        _id(),
        _fk("user_id", "users.id"),
        sa.Column("type", sa.String(length=50), nullable=False),
        _fk("branch_id", "vendor_branches.id", nullable=True),
        _fk("menu_item_id", "menu_items.id", nullable=True),
        _fk("offer_id", "offers.id", nullable=True),
        *_timestamps(),
        sa.CheckConstraint(single_reference_check(FAVORITE_KINDS), name="single_favorite_reference"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"])
    op.create_index("ix_favorites_type", "favorites", ["type"])
    for column in ("branch_id", "menu_item_id", "offer_id"):
        condition = sa.text(f"{column} IS NOT NULL")
        op.create_index(
            f"uq_favorites_user_{column}",
            "favorites",
            ["user_id", column],
            unique=True,
            sqlite_where=condition,
            postgresql_where=condition,
        )

    op.create_table(
        "reviews",
        _id(),
        _fk("user_id", "users.id"),
        sa.Column("type", sa.String(length=50), nullable=False),
        _fk("branch_id", "vendor_branches.id", nullable=True),
        _fk("menu_item_id", "menu_items.id", nullable=True),
        _fk("offer_id", "offers.id", nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(single_reference_check(REVIEW_KINDS), name="single_review_reference"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="valid_rating"),
    )
    for column in ("user_id", "type", "branch_id", "menu_item_id", "offer_id"):
        op.create_index(f"ix_reviews_{column}", "reviews", [column])

    op.create_table(
        "review_replies",
        _id(),
        _fk("review_id", "reviews.id"),
        _fk("user_id", "users.id"),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("is_vendor_reply", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_review_replies_review_id", "review_replies", ["review_id"])
    op.create_index("ix_review_replies_user_id", "review_replies", ["user_id"])

    op.create_table(
        "review_likes",
        _id(),
        _fk("review_id", "reviews.id"),
        _fk("user_id", "users.id"),
        sa.Column("is_like", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("review_id", "user_id", name="uq_review_likes_review_user"),
    )
    op.create_index("ix_review_likes_review_id", "review_likes", ["review_id"])


def downgrade() -> None:
    op.drop_table("review_likes")
    op.drop_table("review_replies")
    op.drop_table("reviews")
    op.drop_table("favorites")
    op.drop_table("offers")
    op.drop_table("menu_items")
    op.drop_table("vendor_branches")
    op.drop_table("vendors")
    op.drop_table("users")
