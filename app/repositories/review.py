"""Review, reply and like repositories.

Author-scoped writes are single ``UPDATE … WHERE id = :id AND user_id = :uid``
statements so there is no window between the ownership check and the write.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import case, func, select, update
from sqlalchemy.dialects import postgresql, sqlite

from app.domain.mixins import new_uuid
from app.domain.review import Review, ReviewLike, ReviewReply
from app.repositories.base import BaseRepository, utcnow

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class _AuthoredRepository(BaseRepository):
    """Adds author-scoped atomic update / soft delete."""

    async def update_owned(self, entity_id: str, user_id: str, **values: Any):
        values["updated_at"] = utcnow()
        result = await self._session.execute(
            self._live(update(self.model).where(self.model.id == entity_id))
            .where(self.model.user_id == user_id)
            .values(**values)
            .returning(self.model),
            execution_options={"populate_existing": True},
        )
        return result.scalars().first()

    async def soft_delete_owned(self, entity_id: str, user_id: str) -> bool:
        result = await self._session.execute(
            self._live(update(self.model).where(self.model.id == entity_id))
            .where(self.model.user_id == user_id)
            .values(deleted_at=utcnow())
        )
        return result.rowcount > 0


class ReviewRepository(_AuthoredRepository):
    model = Review

    async def list_for_branch(
        self,
        branch_id: str,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
    ) -> tuple[list[Review], int]:
        """Branch-level reviews (``branch`` and ``overall`` kinds)."""
        return await self.list(
            offset=offset,
            limit=limit,
            order_by=order_by,
            order=order,
            filters={"branch_id": branch_id},
        )


class ReviewReplyRepository(_AuthoredRepository):
    model = ReviewReply

    async def list_for_review(self, review_id: str) -> list[ReviewReply]:
        result = await self._session.execute(
            self._base_query()
            .where(ReviewReply.review_id == review_id)
            .order_by(ReviewReply.created_at.asc(), ReviewReply.id.asc())
        )
        return list(result.scalars().all())


class ReviewLikeRepository(BaseRepository[ReviewLike]):
    model = ReviewLike

    async def upsert(self, review_id: str, user_id: str, is_like: bool) -> ReviewLike:
        """Insert a vote or overwrite the existing one for (review, user)."""
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Vote upsert is not supported on {dialect}")

        stmt = insert(ReviewLike).values(
            id=new_uuid(), review_id=review_id, user_id=user_id, is_like=is_like
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ReviewLike.review_id, ReviewLike.user_id],
            set_={"is_like": stmt.excluded.is_like, "updated_at": utcnow()},
        )
        result = await self._session.execute(
            stmt.returning(ReviewLike),
            execution_options={"populate_existing": True},
        )
        return result.scalars().one()

    async def counts(self, review_id: str) -> tuple[int, int]:
        """Return (likes, dislikes) for a review."""
        result = await self._session.execute(
            select(
                func.coalesce(func.sum(case((ReviewLike.is_like.is_(True), 1), else_=0)), 0),
                func.coalesce(func.sum(case((ReviewLike.is_like.is_(False), 1), else_=0)), 0),
            ).where(ReviewLike.review_id == review_id)
        )
        likes, dislikes = result.one()
        return int(likes), int(dislikes)
