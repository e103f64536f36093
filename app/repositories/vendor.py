"""Vendor and branch repositories.

How to add a new repository:
  1. Create app/repositories/my_entity.py
  2. class MyEntityRepository(BaseRepository[MyEntity]):
         model = MyEntity
  3. Add any domain-specific query methods as needed
"""

from sqlalchemy import select

from app.domain.enums import RegistrationStatus
from app.domain.vendor import Branch, Vendor
from app.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor

    async def get_owned_approved(self, vendor_id: str, user_id: str) -> Vendor | None:
        result = await self._session.execute(
            self._base_query()
            .where(Vendor.id == vendor_id)
            .where(Vendor.user_id == user_id)
            .where(Vendor.registration_status == RegistrationStatus.APPROVED.value)
        )
        return result.scalars().first()

    async def get_by_commercial_registration(self, registration: str) -> Vendor | None:
        # Soft-deleted vendors still hold their registration number
        result = await self._session.execute(
            select(Vendor).where(Vendor.commercial_registration == registration)
        )
        return result.scalars().first()

    async def owner_of_branch(self, branch_id: str) -> str | None:
        """Return the user id owning the vendor behind ``branch_id``."""
        result = await self._session.execute(
            select(Vendor.user_id)
            .join(Branch, Branch.vendor_id == Vendor.id)
            .where(Branch.id == branch_id)
            .where(Branch.deleted_at.is_(None))
            .where(Vendor.deleted_at.is_(None))
        )
        return result.scalars().first()


class BranchRepository(BaseRepository[Branch]):
    model = Branch

    async def get_for_vendor(self, branch_id: str, vendor_id: str) -> Branch | None:
        result = await self._session.execute(
            self._base_query().where(Branch.id == branch_id).where(Branch.vendor_id == vendor_id)
        )
        return result.scalars().first()

    async def list_for_vendor(self, vendor_id: str) -> list[Branch]:
        result = await self._session.execute(
            self._base_query()
            .where(Branch.vendor_id == vendor_id)
            .order_by(Branch.created_at.asc(), Branch.id.asc())
        )
        return list(result.scalars().all())
