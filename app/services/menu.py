"""Menu item and offer services (vendor writes, public reads)."""


import logging
from datetime import datetime, timezone

from fastapi import UploadFile

from app.core.exceptions import NotFoundError, ValidationError
from app.core.security import Principal
from app.domain.menu import MenuItem, Offer
from app.repositories.menu import MenuItemRepository, OfferRepository
from app.repositories.vendor import BranchRepository
from app.schemas.common import to_utc
from app.schemas.menu import (
    MenuFilters,
    MenuItemCreate,
    MenuItemOut,
    MenuItemUpdate,
    OfferCreate,
    OfferOut,
    OfferUpdate,
    check_discount,
)
from app.services.base import ServiceBase
from app.services.notifications import EventType
from app.services.ownership import OwnershipResolver
from app.services.storage import ImageStorage

logger = logging.getLogger(__name__)

class MenuService(ServiceBase):
    def __init__(self, session, notifier=None, storage: ImageStorage | None = None):
        super().__init__(session, notifier)
        self._repo = MenuItemRepository(session)
        self._branches = BranchRepository(session)
        self._ownership = OwnershipResolver(session)
        self._storage = storage

    async def create_item(
        self,
        principal: Principal,
        vendor_id: str,
        branch_id: str,
        data: MenuItemCreate,
        image: UploadFile | None = None,
    ) -> MenuItem:
        await self._ownership.ensure_branch_access(vendor_id, branch_id, principal.user_id)

        image_path = None
        if image is not None and image.filename:
            if self._storage is None:
                raise ValidationError("Image uploads are not enabled", details={"fields": ["image"]})
            image_path = await self._storage.save(image)

        try:
            item = await self._repo.create(
                branch_id=branch_id,
                image_path=image_path,
                **data.model_dump(exclude_none=True),
            )
            await self._commit_and_publish(EventType.MENU_ITEM_ADDED, MenuItemOut.model_validate(item))
        except Exception:
            if image_path is not None:
                self._storage.discard(image_path)
            raise
        return item

    async def update_item(
        self,
        principal: Principal,
        vendor_id: str,
        branch_id: str,
        item_id: str,
        data: MenuItemUpdate,
    ) -> MenuItem:
        await self._ownership.ensure_branch_access(vendor_id, branch_id, principal.user_id)
        if await self._repo.get_for_branch(item_id, branch_id) is None:
            raise NotFoundError("Menu item", item_id)
        item = await self._repo.update(item_id, **data.model_dump(exclude_none=True, exclude_unset=True))
        if item is None:
            raise NotFoundError("Menu item", item_id)
        await self._commit_and_publish(EventType.MENU_ITEM_UPDATED, MenuItemOut.model_validate(item))
        return item

    async def list_items(self, branch_id: str, filters: MenuFilters) -> list[MenuItem]:
        if not await self._branches.exists(branch_id):
            raise NotFoundError("Branch", branch_id)
        if (
            filters.min_price is not None
            and filters.max_price is not None
            and filters.min_price > filters.max_price
        ):
            raise ValidationError(
                "minPrice cannot exceed maxPrice", details={"fields": ["minPrice", "maxPrice"]}
            )
        return await self._repo.search(
            branch_id,
            search=(filters.search or "").strip() or None,
            min_price=filters.min_price,
            max_price=filters.max_price,
        )

class OfferService(ServiceBase):
    def __init__(self, session, notifier=None):
        super().__init__(session, notifier)
        self._repo = OfferRepository(session)
        self._branches = BranchRepository(session)
        self._ownership = OwnershipResolver(session)

    async def create_offer(
        self, principal: Principal, vendor_id: str, branch_id: str, data: OfferCreate
    ) -> Offer:
        await self._ownership.ensure_branch_access(vendor_id, branch_id, principal.user_id)
        offer = await self._repo.create(
            branch_id=branch_id,
            **data.model_dump(exclude_none=True, mode="python"),
        )
        await self._commit_and_publish(EventType.OFFER_ADDED, OfferOut.model_validate(offer))
        return offer

    async def update_offer(
        self,
        principal: Principal,
        vendor_id: str,
        branch_id: str,
        offer_id: str,
        data: OfferUpdate,
    ) -> Offer:
        await self._ownership.ensure_branch_access(vendor_id, branch_id, principal.user_id)
        current = await self._repo.get_for_branch(offer_id, branch_id)
        if current is None:
            raise NotFoundError("Offer", offer_id)

        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        start = changes.get("start_date") or to_utc(current.start_date)
        end = changes.get("end_date") or to_utc(current.end_date)
        if start >= end:
            raise ValidationError(
                "start_date must precede end_date", details={"fields": ["startDate", "endDate"]}
            )
        try:
            check_discount(
                changes.get("discount_type", current.discount_type),
                changes.get("discount_value", current.discount_value),
            )
        except ValueError as exc:
            raise ValidationError(str(exc), details={"fields": ["discountValue"]}) from exc

        offer = await self._repo.update(offer_id, **changes)
        if offer is None:
            raise NotFoundError("Offer", offer_id)
        await self._commit_and_publish(EventType.OFFER_UPDATED, OfferOut.model_validate(offer))
        return offer

    async def list_active(self, branch_id: str, now: datetime | None = None) -> list[Offer]:
        """Offers of a branch whose end_date is still in the future."""
        if not await self._branches.exists(branch_id):
            raise NotFoundError("Branch", branch_id)
        return await self._repo.list_active(branch_id, now or datetime.now(timezone.utc))
