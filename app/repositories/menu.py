"""Menu item and offer repositories."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from app.domain.menu import MenuItem, Offer
from app.repositories.base import BaseRepository


class MenuItemRepository(BaseRepository[MenuItem]):
    model = MenuItem

    async def get_for_branch(self, item_id: str, branch_id: str) -> MenuItem | None:
        result = await self._session.execute(
            self._base_query().where(MenuItem.id == item_id).where(MenuItem.branch_id == branch_id)
        )
        return result.scalars().first()

    async def search(
        self,
        branch_id: str,
        *,
        search: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
    ) -> list[MenuItem]:
        """Items of a branch filtered by substring and inclusive price bounds.

        Ordered by (name, id) so identical queries return identical pages.
        """
        q = self._base_query().where(MenuItem.branch_id == branch_id)
        if search:
            q = q.where(
                MenuItem.name.icontains(search, autoescape=True)
                | MenuItem.description.icontains(search, autoescape=True)
            )
        if min_price is not None:
            q = q.where(MenuItem.price >= min_price)
        if max_price is not None:
            q = q.where(MenuItem.price <= max_price)
        q = q.order_by(MenuItem.name.asc(), MenuItem.id.asc())
        result = await self._session.execute(q)
        return list(result.scalars().all())


class OfferRepository(BaseRepository[Offer]):
    model = Offer

    async def get_for_branch(self, offer_id: str, branch_id: str) -> Offer | None:
        result = await self._session.execute(
            self._base_query().where(Offer.id == offer_id).where(Offer.branch_id == branch_id)
        )
        return result.scalars().first()

    async def list_active(self, branch_id: str, now: datetime) -> list[Offer]:
        result = await self._session.execute(
            self._base_query()
            .where(Offer.branch_id == branch_id)
            .where(Offer.end_date > now)
            .order_by(Offer.end_date.asc(), Offer.id.asc())
        )
        return list(result.scalars().all())
