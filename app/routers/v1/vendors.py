"""Vendor router — registration, approval, and everything a vendor writes.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject DB session + principal (+ notifier) via Depends
  3. Instantiate the service with (session, notifier)
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import PaginationParams, paginate_by
from app.core.response import DataResponse, ListResponse, paginated
from app.core.security import Principal, get_optional_principal, require_role
from app.db.base import get_db
from app.domain.enums import Role
from app.schemas.menu import (
    MenuItemCreate,
    MenuItemOut,
    MenuItemUpdate,
    OfferCreate,
    OfferOut,
    OfferUpdate,
)
from app.schemas.vendor import (
    BranchCreate,
    BranchOut,
    BranchUpdate,
    VendorOut,
    VendorRegister,
    VendorStatusUpdate,
)
from app.services.menu import MenuService, OfferService
from app.services.notifications import Notifier, get_notifier
from app.services.storage import ImageStorage, get_image_storage
from app.services.vendor import BranchService, VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])

_vendor_only = require_role(Role.VENDOR)
_admin_only = require_role(Role.ADMIN)


# ------------------------------------------------------------------
# Vendors
# ------------------------------------------------------------------

@router.post("/register", response_model=DataResponse[VendorOut])
async def register_vendor(
    body: VendorRegister,
    principal: Principal = Depends(_vendor_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Register the caller as a vendor (status starts as `pending`)."""
    vendor = await VendorService(session, notifier).register(principal, body)
    return {"data": VendorOut.model_validate(vendor)}


@router.get("", response_model=ListResponse[VendorOut])
async def list_vendors(
    filter_status: Optional[str] = Query(
        default=None, alias="status", description="Filter by registration status"
    ),
    pagination: PaginationParams = Depends(paginate_by("created_at", "updated_at", "name")),
    principal: Principal = Depends(_admin_only),
    session: AsyncSession = Depends(get_db),
):
    """List vendors (admin, paginated). Filter by ?status=pending|approved|rejected|suspended."""
    items, total = await VendorService(session).list_vendors(pagination, status=filter_status)
    return paginated(
        [VendorOut.model_validate(v) for v in items],
        total, pagination,
    )


@router.get("/{vendor_id}", response_model=DataResponse[VendorOut])
async def get_vendor(
    vendor_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    session: AsyncSession = Depends(get_db),
):
    vendor = await VendorService(session).get_vendor(vendor_id, principal)
    return {"data": VendorOut.model_validate(vendor)}


@router.put("/{vendor_id}/approve", response_model=DataResponse[VendorOut])
async def set_vendor_status(
    vendor_id: str,
    body: VendorStatusUpdate,
    principal: Principal = Depends(_admin_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Approve, reject or suspend a vendor (admin)."""
    vendor = await VendorService(session, notifier).set_status(principal, vendor_id, body)
    return {"data": VendorOut.model_validate(vendor)}


# ------------------------------------------------------------------
# Branches
# ------------------------------------------------------------------

@router.get("/{vendor_id}/branches", response_model=DataResponse[list[BranchOut]])
async def list_branches(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
):
    branches = await BranchService(session).list_branches(vendor_id)
    return {"data": [BranchOut.model_validate(b) for b in branches]}


@router.post("/{vendor_id}/branches", response_model=DataResponse[BranchOut])
async def create_branch(
    vendor_id: str,
    body: BranchCreate,
    principal: Principal = Depends(_vendor_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    branch = await BranchService(session, notifier).create_branch(principal, vendor_id, body)
    return {"data": BranchOut.model_validate(branch)}


@router.put("/{vendor_id}/branches/{branch_id}", response_model=DataResponse[BranchOut])
async def update_branch(
    vendor_id: str,
    branch_id: str,
    body: BranchUpdate,
    principal: Principal = Depends(_vendor_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    branch = await BranchService(session, notifier).update_branch(
        principal, vendor_id, branch_id, body
    )
    return {"data": BranchOut.model_validate(branch)}


# ------------------------------------------------------------------
# Menu items (multipart: optional `image` file)
# ------------------------------------------------------------------

@router.post("/{vendor_id}/branches/{branch_id}/menu", response_model=DataResponse[MenuItemOut])
async def create_menu_item(
    vendor_id: str,
    branch_id: str,
    name: str = Form(..., min_length=1, max_length=100),
    price: Decimal = Form(..., gt=0),
    description: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    principal: Principal = Depends(_vendor_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    storage: ImageStorage = Depends(get_image_storage),
):
    data = MenuItemCreate(name=name, price=price, description=description)
    item = await MenuService(session, notifier, storage).create_item(
        principal, vendor_id, branch_id, data, image
    )
    return {"data": MenuItemOut.model_validate(item)}


@router.put(
    "/{vendor_id}/branches/{branch_id}/menu/{item_id}",
    response_model=DataResponse[MenuItemOut],
)
async def update_menu_item(
    vendor_id: str,
    branch_id: str,
    item_id: str,
    body: MenuItemUpdate,
    principal: Principal = Depends(_vendor_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    item = await MenuService(session, notifier).update_item(
        principal, vendor_id, branch_id, item_id, body
    )
    return {"data": MenuItemOut.model_validate(item)}


# ------------------------------------------------------------------
# Offers
# ------------------------------------------------------------------

@router.post("/{vendor_id}/branches/{branch_id}/offers", response_model=DataResponse[OfferOut])
async def create_offer(
    vendor_id: str,
    branch_id: str,
    body: OfferCreate,
    principal: Principal = Depends(_vendor_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    offer = await OfferService(session, notifier).create_offer(principal, vendor_id, branch_id, body)
    return {"data": OfferOut.model_validate(offer)}


@router.put(
    "/{vendor_id}/branches/{branch_id}/offers/{offer_id}",
    response_model=DataResponse[OfferOut],
)
async def update_offer(
    vendor_id: str,
    branch_id: str,
    offer_id: str,
    body: OfferUpdate,
    principal: Principal = Depends(_vendor_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    offer = await OfferService(session, notifier).update_offer(
        principal, vendor_id, branch_id, offer_id, body
    )
    return {"data": OfferOut.model_validate(offer)}
