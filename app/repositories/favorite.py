"""Favorite repository."""

from __future__ import annotations

from sqlalchemy import select, update

from app.domain.favorite import Favorite
from app.domain.references import TargetRef
from app.repositories.base import BaseRepository, utcnow


class FavoriteRepository(BaseRepository[Favorite]):
    model = Favorite

    async def find_for_target(self, user_id: str, target: TargetRef) -> Favorite | None:
        """Return the user's favorite for ``target``, soft-deleted or not."""
        column = getattr(Favorite, target.column)
        result = await self._session.execute(
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .where(Favorite.type == target.kind.value)
            .where(column == target.target_id)
        )
        return result.scalars().first()

    async def restore(self, favorite_id: str) -> Favorite | None:
        result = await self._session.execute(
            update(Favorite)
            .where(Favorite.id == favorite_id)
            .values(deleted_at=None, updated_at=utcnow())
            .returning(Favorite),
            execution_options={"populate_existing": True},
        )
        return result.scalars().first()

    async def list_for_user(self, user_id: str, kind: str | None = None) -> list[Favorite]:
        q = self._base_query().where(Favorite.user_id == user_id)
        if kind:
            q = q.where(Favorite.type == kind)
        result = await self._session.execute(
            q.order_by(Favorite.created_at.desc(), Favorite.id.asc())
        )
        return list(result.scalars().all())

    async def soft_delete_owned(self, favorite_id: str, user_id: str) -> bool:
        result = await self._session.execute(
            self._live(update(Favorite).where(Favorite.id == favorite_id))
            .where(Favorite.user_id == user_id)
            .values(deleted_at=utcnow())
        )
        return result.rowcount > 0
