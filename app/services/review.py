"""Reviews, replies and like/dislike votes.

Reviews and replies are edited and deleted only by their author; the author
filter is part of the single UPDATE statement, so a foreign id simply matches
nothing and surfaces as 404.
"""


import logging

from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.core.pagination import PaginationParams
from app.core.security import Principal
from app.domain.enums import Role
from app.domain.references import REVIEW_KINDS, TargetRef
from app.domain.review import Review, ReviewLike, ReviewReply
from app.repositories.review import ReviewLikeRepository, ReviewReplyRepository, ReviewRepository
from app.repositories.vendor import BranchRepository
from app.schemas.review import LikeSummary, ReplyCreate, ReplyOut, ReviewCreate, ReviewOut, ReviewUpdate
from app.services.base import ServiceBase
from app.services.notifications import EventType
from app.services.ownership import OwnershipResolver
from app.services.targets import TargetLookup

logger = logging.getLogger(__name__)

class ReviewService(ServiceBase):
    def __init__(self, session, notifier=None):
        super().__init__(session, notifier)
        self._repo = ReviewRepository(session)
        self._branches = BranchRepository(session)
        self._targets = TargetLookup(session)

    async def get_review(self, review_id: str) -> Review:
        review = await self._repo.get_by_id(review_id)
        if not review:
            raise NotFoundError("Review", review_id)
        return review

    async def create(self, principal: Principal, data: ReviewCreate) -> Review:
        target = TargetRef.parse(
            data.type,
            branch_id=data.branch_id,
            menu_item_id=data.menu_item_id,
            offer_id=data.offer_id,
            allowed=REVIEW_KINDS,
        )
        await self._targets.ensure_exists(target)
        review = await self._repo.create(
            user_id=principal.user_id,
            rating=data.rating,
            comment=data.comment,
            **target.to_columns(),
        )
        await self._commit_and_publish(EventType.REVIEW_ADDED, ReviewOut.model_validate(review))
        return review

    async def update(self, principal: Principal, review_id: str, data: ReviewUpdate) -> Review:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("Nothing to update", details={"fields": ["rating", "comment"]})
        if "rating" in changes and changes["rating"] is None:
            raise ValidationError("rating cannot be null", details={"fields": ["rating"]})

        review = await self._repo.update_owned(review_id, principal.user_id, **changes)
        if review is None:
            raise NotFoundError("Review", review_id)
        await self._commit_and_publish(EventType.REVIEW_UPDATED, ReviewOut.model_validate(review))
        return review

    async def delete(self, principal: Principal, review_id: str) -> None:
        if not await self._repo.soft_delete_owned(review_id, principal.user_id):
            raise NotFoundError("Review", review_id)
        await self._commit_and_publish(EventType.REVIEW_DELETED, {"reviewId": review_id})

    async def list_for_branch(self, branch_id: str, pagination: PaginationParams):
        if not await self._branches.exists(branch_id):
            raise NotFoundError("Branch", branch_id)
        return await self._repo.list_for_branch(
            branch_id,
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
        )

class ReplyService(ServiceBase):
    def __init__(self, session, notifier=None):
        super().__init__(session, notifier)
        self._repo = ReviewReplyRepository(session)
        self._reviews = ReviewRepository(session)
        self._ownership = OwnershipResolver(session)

    async def create(self, principal: Principal, review_id: str, data: ReplyCreate) -> ReviewReply:
        review = await self._reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review", review_id)

        if principal.role is Role.VENDOR:
            if not await self._ownership.review_reachable_by_vendor(review_id, principal.user_id):
                raise ForbiddenError("Unauthorized vendor")
        elif principal.role is Role.CUSTOMER:
            if review.user_id != principal.user_id:
                raise ForbiddenError("Only the review author can reply as a customer")
        else:
            raise ForbiddenError("Access denied. Required role(s): customer, vendor")

        reply = await self._repo.create(
            review_id=review_id,
            user_id=principal.user_id,
            comment=data.comment,
            is_vendor_reply=principal.role is Role.VENDOR,
        )
        logger.info("Reply %s added to review %s (vendor=%s)", reply.id, review_id, reply.is_vendor_reply)
        await self._commit_and_publish(EventType.REVIEW_REPLY_ADDED, ReplyOut.model_validate(reply))
        return reply

    async def update(
        self, principal: Principal, review_id: str, reply_id: str, data: ReplyCreate
    ) -> ReviewReply:
        reply = await self._repo.get_by_id(reply_id)
        if reply is None or reply.review_id != review_id:
            raise NotFoundError("Reply", reply_id)
        updated = await self._repo.update_owned(reply_id, principal.user_id, comment=data.comment)
        if updated is None:
            raise NotFoundError("Reply", reply_id)
        await self._commit_and_publish(EventType.REVIEW_REPLY_UPDATED, ReplyOut.model_validate(updated))
        return updated

    async def delete(self, principal: Principal, review_id: str, reply_id: str) -> None:
        reply = await self._repo.get_by_id(reply_id)
        if reply is None or reply.review_id != review_id:
            raise NotFoundError("Reply", reply_id)
        if not await self._repo.soft_delete_owned(reply_id, principal.user_id):
            raise NotFoundError("Reply", reply_id)
        await self._commit_and_publish(
            EventType.REVIEW_REPLY_DELETED, {"reviewId": review_id, "replyId": reply_id}
        )

    async def list_for_review(self, review_id: str) -> list[ReviewReply]:
        if not await self._reviews.exists(review_id):
            raise NotFoundError("Review", review_id)
        return await self._repo.list_for_review(review_id)

class LikeService(ServiceBase):
    def __init__(self, session, notifier=None):
        super().__init__(session, notifier)
        self._repo = ReviewLikeRepository(session)
        self._reviews = ReviewRepository(session)

    async def set_like(self, principal: Principal, review_id: str, is_like: bool) -> ReviewLike:
        if not await self._reviews.exists(review_id):
            raise NotFoundError("Review", review_id)
        vote = await self._repo.upsert(review_id, principal.user_id, is_like)
        await self._session.commit()
        return vote

    async def summary(self, review_id: str) -> LikeSummary:
        if not await self._reviews.exists(review_id):
            raise NotFoundError("Review", review_id)
        likes, dislikes = await self._repo.counts(review_id)
        return LikeSummary(review_id=review_id, likes=likes, dislikes=dislikes)
