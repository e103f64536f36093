"""Vendor and branch Pydantic schemas (request DTOs and response models)."""


from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field

from app.schemas.common import CamelModel

class VendorRegister(CamelModel):
    name: str = Field(min_length=2, max_length=100)
    commercial_registration: str = Field(min_length=1, max_length=255)
    business_phone: str | None = Field(default=None, pattern=r"^\+?[1-9]\d{1,14}$")
    business_email: str | None = Field(
        default=None, pattern=r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"
    )
    business_address: str | None = None
    business_description: str | None = None

class VendorStatusUpdate(CamelModel):
    """Admin decision on a vendor registration."""

    status: Literal["approved", "rejected", "suspended"]
    rejection_reason: str | None = None

class VendorOut(CamelModel):
    id: str
    user_id: str
    name: str
    commercial_registration: str
    business_phone: str | None = None
    business_email: str | None = None
    business_address: str | None = None
    business_description: str | None = None
    registration_status: str
    approval_date: datetime | None = None
    approved_by: str | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime

class BranchCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    address: str = Field(min_length=1)
    latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    longitude: Decimal | None = Field(default=None, ge=-180, le=180)
    contact_phone: str | None = Field(default=None, pattern=r"^\+?[1-9]\d{1,14}$")
    contact_email: str | None = None
    is_main_branch: bool = False

class BranchUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, min_length=1)
    latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    longitude: Decimal | None = Field(default=None, ge=-180, le=180)
    contact_phone: str | None = Field(default=None, pattern=r"^\+?[1-9]\d{1,14}$")
    contact_email: str | None = None
    is_active: bool | None = None
    is_main_branch: bool | None = None

class BranchOut(CamelModel):
    id: str
    vendor_id: str
    name: str
    address: str
    latitude: float | None = None
    longitude: float | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    is_active: bool
    is_main_branch: bool
    created_at: datetime
    updated_at: datetime
