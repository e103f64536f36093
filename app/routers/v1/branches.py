"""Public branch reads: branch details, menu, active offers, reviews."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import PaginationParams, paginate_by
from app.core.response import DataResponse, ListResponse, paginated
from app.db.base import get_db
from app.schemas.menu import MenuFilters, MenuItemOut, OfferOut
from app.schemas.review import ReviewOut
from app.schemas.vendor import BranchOut
from app.services.menu import MenuService, OfferService
from app.services.review import ReviewService
from app.services.vendor import BranchService

router = APIRouter(prefix="/branches", tags=["Branches"])


@router.get("/{branch_id}", response_model=DataResponse[BranchOut])
async def get_branch(
    branch_id: str,
    session: AsyncSession = Depends(get_db),
):
    branch = await BranchService(session).get_branch(branch_id)
    return {"data": BranchOut.model_validate(branch)}


@router.get("/{branch_id}/menu", response_model=DataResponse[list[MenuItemOut]])
async def list_menu(
    branch_id: str,
    search: Optional[str] = Query(default=None, description="Substring of name or description"),
    min_price: Optional[Decimal] = Query(default=None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(default=None, alias="maxPrice", ge=0),
    session: AsyncSession = Depends(get_db),
):
    """Menu of a branch, ordered by name. Filters are optional and combine with AND."""
    filters = MenuFilters(search=search, min_price=min_price, max_price=max_price)
    items = await MenuService(session).list_items(branch_id, filters)
    return {"data": [MenuItemOut.model_validate(i) for i in items]}


@router.get("/{branch_id}/offers", response_model=DataResponse[list[OfferOut]])
async def list_offers(
    branch_id: str,
    session: AsyncSession = Depends(get_db),
):
    """Offers that have not ended yet, soonest-ending first."""
    offers = await OfferService(session).list_active(branch_id)
    return {"data": [OfferOut.model_validate(o) for o in offers]}


@router.get("/{branch_id}/reviews", response_model=ListResponse[ReviewOut])
async def list_reviews(
    branch_id: str,
    pagination: PaginationParams = Depends(paginate_by("created_at", "updated_at", "rating")),
    session: AsyncSession = Depends(get_db),
):
    items, total = await ReviewService(session).list_for_branch(branch_id, pagination)
    return paginated(
        [ReviewOut.model_validate(r) for r in items],
        total, pagination,
    )
