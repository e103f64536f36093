"""Vendor registration/approval and branch management.

Rule: No FastAPI here. Services raise AppException subclasses for business
rule violations and delegate all queries to repositories.
"""


import logging
from datetime import datetime, timezone

from app.core.exceptions import ConflictError, NotFoundError
from app.core.pagination import PaginationParams
from app.core.security import Principal
from app.domain.enums import RegistrationStatus, Role
from app.domain.vendor import Branch, Vendor
from app.repositories.vendor import BranchRepository, VendorRepository
from app.schemas.vendor import (
    BranchCreate,
    BranchOut,
    BranchUpdate,
    VendorOut,
    VendorRegister,
    VendorStatusUpdate,
)
from app.services.base import ServiceBase
from app.services.notifications import EventType
from app.services.ownership import OwnershipResolver

logger = logging.getLogger(__name__)

class VendorService(ServiceBase):
    def __init__(self, session, notifier=None):
        super().__init__(session, notifier)
        self._repo = VendorRepository(session)

    async def register(self, principal: Principal, data: VendorRegister) -> Vendor:
        if await self._repo.get_by_commercial_registration(data.commercial_registration):
            raise ConflictError("A vendor with this commercial registration already exists")
        vendor = await self._repo.create(
            user_id=principal.user_id,
            registration_status=RegistrationStatus.PENDING.value,
            **data.model_dump(exclude_none=True),
        )
        logger.info("Vendor %s registered by user %s", vendor.id, principal.user_id)
        await self._commit_and_publish(EventType.VENDOR_REGISTERED, VendorOut.model_validate(vendor))
        return vendor

    async def set_status(
        self, principal: Principal, vendor_id: str, data: VendorStatusUpdate
    ) -> Vendor:
        await self.get_vendor(vendor_id, principal)  # raises 404 if missing

        values: dict = {"registration_status": data.status}
        if data.status == RegistrationStatus.APPROVED.value:
            values.update(
                approval_date=datetime.now(timezone.utc),
                approved_by=principal.user_id,
                rejection_reason=None,
            )
        else:
            values["rejection_reason"] = data.rejection_reason

        vendor = await self._repo.update(vendor_id, **values)
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        logger.info("Vendor %s set to %s by admin %s", vendor_id, data.status, principal.user_id)
        await self._commit_and_publish(EventType.VENDOR_STATUS_UPDATED, VendorOut.model_validate(vendor))
        return vendor

    async def list_vendors(self, pagination: PaginationParams, status: str | None = None):
        filters = {"registration_status": status} if status else None
        items, total = await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
            filters=filters,
        )
        return items, total

    async def get_vendor(self, vendor_id: str, principal: Principal | None = None) -> Vendor:
        """Approved vendors are public; others are visible to their owner and admins."""
        vendor = await self._repo.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        if vendor.registration_status != RegistrationStatus.APPROVED.value:
            privileged = principal is not None and (
                principal.role is Role.ADMIN or principal.user_id == vendor.user_id
            )
            if not privileged:
                raise NotFoundError("Vendor", vendor_id)
        return vendor

class BranchService(ServiceBase):
    def __init__(self, session, notifier=None):
        super().__init__(session, notifier)
        self._repo = BranchRepository(session)
        self._vendors = VendorRepository(session)
        self._ownership = OwnershipResolver(session)

    async def create_branch(self, principal: Principal, vendor_id: str, data: BranchCreate) -> Branch:
        await self._ownership.ensure_vendor_access(vendor_id, principal.user_id)
        branch = await self._repo.create(vendor_id=vendor_id, **data.model_dump(exclude_none=True))
        await self._commit_and_publish(EventType.BRANCH_ADDED, BranchOut.model_validate(branch))
        return branch

    async def update_branch(
        self, principal: Principal, vendor_id: str, branch_id: str, data: BranchUpdate
    ) -> Branch:
        await self._ownership.ensure_branch_access(vendor_id, branch_id, principal.user_id)
        branch = await self._repo.update(
            branch_id, **data.model_dump(exclude_none=True, exclude_unset=True)
        )
        if branch is None:
            raise NotFoundError("Branch", branch_id)
        await self._commit_and_publish(EventType.BRANCH_UPDATED, BranchOut.model_validate(branch))
        return branch

    async def list_branches(self, vendor_id: str) -> list[Branch]:
        vendor = await self._vendors.get_by_id(vendor_id)
        if not vendor or vendor.registration_status != RegistrationStatus.APPROVED.value:
            raise NotFoundError("Vendor", vendor_id)
        return await self._repo.list_for_vendor(vendor_id)

    async def get_branch(self, branch_id: str) -> Branch:
        branch = await self._repo.get_by_id(branch_id)
        if not branch:
            raise NotFoundError("Branch", branch_id)
        return branch
