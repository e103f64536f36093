"""Menu item and offer Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator, model_validator

from app.domain.enums import DiscountType
from app.schemas.common import CamelModel, to_utc


class MenuItemCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(gt=0)
    description: str | None = None


class MenuItemUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    price: Decimal | None = Field(default=None, gt=0)
    description: str | None = None
    is_available: bool | None = None


class MenuItemOut(CamelModel):
    id: str
    branch_id: str
    name: str
    description: str | None = None
    price: float
    image_path: str | None = None
    is_available: bool
    created_at: datetime
    updated_at: datetime


class MenuFilters(CamelModel):
    """Query filters for the public menu listing."""

    search: str | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    max_price: Decimal | None = Field(default=None, ge=0)


def check_discount(discount_type: DiscountType | str, value: Decimal | None) -> None:
    """Raise ValueError when the discount value does not fit its type."""
    discount_type = DiscountType(discount_type)
    if discount_type in (DiscountType.PERCENTAGE, DiscountType.FIXED_AMOUNT) and value is None:
        raise ValueError(f"discount_value is required for {discount_type.value} offers")
    if discount_type is DiscountType.PERCENTAGE and value is not None and value > 100:
        raise ValueError("percentage discount_value cannot exceed 100")


class OfferCreate(CamelModel):
    model_config = {**CamelModel.model_config, "use_enum_values": True}

    title: str = Field(min_length=1, max_length=100)
    description: str | None = None
    discount_type: DiscountType = Field(default=DiscountType.PERCENTAGE, validate_default=True)
    discount_value: Decimal | None = Field(default=None, gt=0)
    maximum_discount: Decimal | None = Field(default=None, gt=0)
    minimum_order_amount: Decimal = Field(default=Decimal("0"), ge=0)
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return to_utc(value)

    @model_validator(mode="after")
    def _check(self) -> "OfferCreate":
        if self.start_date >= self.end_date:
            raise ValueError("start_date must precede end_date")
        check_discount(self.discount_type, self.discount_value)
        return self


class OfferUpdate(CamelModel):
    model_config = {**CamelModel.model_config, "use_enum_values": True}

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    discount_type: DiscountType | None = None
    discount_value: Decimal | None = Field(default=None, gt=0)
    maximum_discount: Decimal | None = Field(default=None, gt=0)
    minimum_order_amount: Decimal | None = Field(default=None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return to_utc(value)


class OfferOut(CamelModel):
    id: str
    branch_id: str
    title: str
    description: str | None = None
    discount_type: str
    discount_value: float | None = None
    maximum_discount: float | None = None
    minimum_order_amount: float
    start_date: datetime
    end_date: datetime
    created_at: datetime
    updated_at: datetime
