"""Closed vocabularies shared by ORM models, schemas and services."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    VENDOR = "vendor"
    CUSTOMER = "customer"
    DELIVERY_PARTNER = "delivery_partner"


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    BUY_ONE_GET_ONE = "buy_one_get_one"
    FREE_DELIVERY = "free_delivery"


def sql_in(enum_cls: type[Enum]) -> str:
    """Render an enum's values as a SQL IN-list for CHECK constraints."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
