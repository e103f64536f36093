"""Existence checks for the entity a TargetRef points at."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.domain.references import TargetKind, TargetRef
from app.repositories.base import BaseRepository
from app.repositories.menu import MenuItemRepository, OfferRepository
from app.repositories.vendor import BranchRepository

_LABELS = {
    TargetKind.BRANCH: "Branch",
    TargetKind.OVERALL: "Branch",
    TargetKind.MENU_ITEM: "Menu item",
    TargetKind.OFFER: "Offer",
}


class TargetLookup:
    def __init__(self, session: AsyncSession):
        branches = BranchRepository(session)
        self._repos: dict[TargetKind, BaseRepository] = {
            TargetKind.BRANCH: branches,
            TargetKind.OVERALL: branches,
            TargetKind.MENU_ITEM: MenuItemRepository(session),
            TargetKind.OFFER: OfferRepository(session),
        }

    async def ensure_exists(self, target: TargetRef) -> None:
        if not await self._repos[target.kind].exists(target.target_id):
            raise NotFoundError(_LABELS[target.kind], target.target_id)
