"""Customer favorites router."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse
from app.core.security import Principal, require_role
from app.db.base import get_db
from app.domain.enums import Role
from app.schemas.favorite import FavoriteCreate, FavoriteOut
from app.services.favorite import FavoriteService

router = APIRouter(prefix="/favorites", tags=["Favorites"])

_customer_only = require_role(Role.CUSTOMER)


@router.post("", response_model=DataResponse[FavoriteOut])
async def create_favorite(
    body: FavoriteCreate,
    principal: Principal = Depends(_customer_only),
    session: AsyncSession = Depends(get_db),
):
    """Favorite exactly one branch, menu item or offer (named by `type`)."""
    favorite = await FavoriteService(session).create(principal, body)
    return {"data": FavoriteOut.model_validate(favorite)}


@router.get("", response_model=DataResponse[list[FavoriteOut]])
async def list_favorites(
    kind: Optional[str] = Query(default=None, alias="type", pattern="^(branch|menu_item|offer)$"),
    principal: Principal = Depends(_customer_only),
    session: AsyncSession = Depends(get_db),
):
    favorites = await FavoriteService(session).list_mine(principal, kind)
    return {"data": [FavoriteOut.model_validate(f) for f in favorites]}


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_favorite(
    favorite_id: str,
    principal: Principal = Depends(_customer_only),
    session: AsyncSession = Depends(get_db),
):
    await FavoriteService(session).delete(principal, favorite_id)
