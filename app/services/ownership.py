"""Ownership checks for vendor-scoped writes.

Every check reads current state through the request's session; nothing is
cached so a suspension or ownership change applies to the very next request.

Callers must keep the two failure modes apart:
  ForbiddenError  - the vendor is visible but not owned by / not usable for the caller
  NotFoundError   - the branch or review does not exist (leaks nothing)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenError, NotFoundError
from app.domain.references import TargetKind
from app.domain.review import Review
from app.domain.vendor import Branch, Vendor
from app.repositories.menu import MenuItemRepository, OfferRepository
from app.repositories.review import ReviewRepository
from app.repositories.vendor import BranchRepository, VendorRepository


class OwnershipResolver:
    def __init__(self, session: AsyncSession):
        self._vendors = VendorRepository(session)
        self._branches = BranchRepository(session)
        self._items = MenuItemRepository(session)
        self._offers = OfferRepository(session)
        self._reviews = ReviewRepository(session)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    async def vendor_owns_and_approved(self, vendor_id: str, user_id: str) -> bool:
        return await self._vendors.get_owned_approved(vendor_id, user_id) is not None

    async def branch_belongs_to_vendor(self, branch_id: str, vendor_id: str) -> bool:
        return await self._branches.get_for_vendor(branch_id, vendor_id) is not None

    async def review_reachable_by_vendor(self, review_id: str, user_id: str) -> bool:
        review = await self._reviews.get_by_id(review_id)
        if review is None:
            return False
        branch_id = await self.branch_of_review(review)
        if branch_id is None:
            return False
        return await self._vendors.owner_of_branch(branch_id) == user_id

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    async def ensure_vendor_access(self, vendor_id: str, user_id: str) -> Vendor:
        vendor = await self._vendors.get_owned_approved(vendor_id, user_id)
        if vendor is None:
            raise ForbiddenError("Unauthorized or unapproved vendor")
        return vendor

    async def ensure_branch_of_vendor(self, branch_id: str, vendor_id: str) -> Branch:
        branch = await self._branches.get_for_vendor(branch_id, vendor_id)
        if branch is None:
            raise NotFoundError("Branch", branch_id)
        return branch

    async def ensure_branch_access(self, vendor_id: str, branch_id: str, user_id: str) -> Branch:
        """Owner + approved vendor, then the branch must sit under that vendor."""
        await self.ensure_vendor_access(vendor_id, user_id)
        return await self.ensure_branch_of_vendor(branch_id, vendor_id)

    # ------------------------------------------------------------------

    async def branch_of_review(self, review: Review) -> str | None:
        """Branch a review ultimately concerns (via its menu item or offer if needed)."""
        kind = TargetKind(review.type)
        if kind in (TargetKind.BRANCH, TargetKind.OVERALL):
            return review.branch_id
        if kind is TargetKind.MENU_ITEM:
            item = await self._items.get_by_id(review.menu_item_id)
            return item.branch_id if item else None
        offer = await self._offers.get_by_id(review.offer_id)
        return offer.branch_id if offer else None
