"""Reviews, replies and likes router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse
from app.core.security import Principal, require_role
from app.db.base import get_db
from app.domain.enums import Role
from app.schemas.review import (
    LikeCreate,
    LikeOut,
    LikeSummary,
    ReplyCreate,
    ReplyOut,
    ReviewCreate,
    ReviewOut,
    ReviewUpdate,
)
from app.services.notifications import Notifier, get_notifier
from app.services.review import LikeService, ReplyService, ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])

_customer_only = require_role(Role.CUSTOMER)
_vendor_or_customer = require_role(Role.VENDOR, Role.CUSTOMER)


# ------------------------------------------------------------------
# Reviews
# ------------------------------------------------------------------

@router.post("", response_model=DataResponse[ReviewOut])
async def create_review(
    body: ReviewCreate,
    principal: Principal = Depends(_customer_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    review = await ReviewService(session, notifier).create(principal, body)
    return {"data": ReviewOut.model_validate(review)}


@router.get("/{review_id}", response_model=DataResponse[ReviewOut])
async def get_review(
    review_id: str,
    session: AsyncSession = Depends(get_db),
):
    review = await ReviewService(session).get_review(review_id)
    return {"data": ReviewOut.model_validate(review)}


@router.put("/{review_id}", response_model=DataResponse[ReviewOut])
async def update_review(
    review_id: str,
    body: ReviewUpdate,
    principal: Principal = Depends(_customer_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    review = await ReviewService(session, notifier).update(principal, review_id, body)
    return {"data": ReviewOut.model_validate(review)}


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: str,
    principal: Principal = Depends(_customer_only),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    await ReviewService(session, notifier).delete(principal, review_id)


# ------------------------------------------------------------------
# Replies
# ------------------------------------------------------------------

@router.get("/{review_id}/replies", response_model=DataResponse[list[ReplyOut]])
async def list_replies(
    review_id: str,
    session: AsyncSession = Depends(get_db),
):
    replies = await ReplyService(session).list_for_review(review_id)
    return {"data": [ReplyOut.model_validate(r) for r in replies]}


@router.post("/{review_id}/replies", response_model=DataResponse[ReplyOut])
async def create_reply(
    review_id: str,
    body: ReplyCreate,
    principal: Principal = Depends(_vendor_or_customer),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Reply as the vendor owning the reviewed branch, or as the review's author."""
    reply = await ReplyService(session, notifier).create(principal, review_id, body)
    return {"data": ReplyOut.model_validate(reply)}


@router.put("/{review_id}/replies/{reply_id}", response_model=DataResponse[ReplyOut])
async def update_reply(
    review_id: str,
    reply_id: str,
    body: ReplyCreate,
    principal: Principal = Depends(_vendor_or_customer),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    reply = await ReplyService(session, notifier).update(principal, review_id, reply_id, body)
    return {"data": ReplyOut.model_validate(reply)}


@router.delete("/{review_id}/replies/{reply_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reply(
    review_id: str,
    reply_id: str,
    principal: Principal = Depends(_vendor_or_customer),
    session: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    await ReplyService(session, notifier).delete(principal, review_id, reply_id)


# ------------------------------------------------------------------
# Likes
# ------------------------------------------------------------------

@router.post("/{review_id}/like", response_model=DataResponse[LikeOut])
async def like_review(
    review_id: str,
    body: LikeCreate,
    principal: Principal = Depends(_customer_only),
    session: AsyncSession = Depends(get_db),
):
    """Like (`isLike: true`) or dislike a review; a repeat vote overwrites the previous one."""
    vote = await LikeService(session).set_like(principal, review_id, body.is_like)
    return {"data": LikeOut.model_validate(vote)}


@router.get("/{review_id}/likes", response_model=DataResponse[LikeSummary])
async def like_summary(
    review_id: str,
    session: AsyncSession = Depends(get_db),
):
    summary = await LikeService(session).summary(review_id)
    return {"data": summary}
