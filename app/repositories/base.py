"""Generic async repository with soft-delete and pagination."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Soft-deletes: rows with `deleted_at IS NOT NULL` are excluded from all
    standard reads. Hard-delete is intentionally never exposed.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        """Return a SELECT excluding soft-deleted rows."""
        q = select(self.model)
        if hasattr(self.model, "deleted_at"):
            q = q.where(self.model.deleted_at.is_(None))
        return q

    def _live(self, stmt):
        """Restrict an UPDATE to rows that are not soft-deleted."""
        if hasattr(self.model, "deleted_at"):
            stmt = stmt.where(self.model.deleted_at.is_(None))
        return stmt

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def exists(self, entity_id: str) -> bool:
        return await self.get_by_id(entity_id) is not None

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
        filters: dict[str, Any] | None = None,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) with pagination and optional column filters."""
        q = self._base_query()

        # Apply simple equality filters
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)

        # Count
        count_q = select(func.count()).select_from(q.subquery())
        total = (await self._session.execute(count_q)).scalar_one()

        # Order + paginate (id as tie-breaker keeps pages stable)
        col = getattr(self.model, order_by, None)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())
        q = q.order_by(self.model.id.asc())
        q = q.offset(offset).limit(limit)

        items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id / server defaults
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        kwargs.pop("id", None)
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = utcnow()

        result = await self._session.execute(
            self._live(update(self.model).where(self.model.id == entity_id))
            .values(**kwargs)
            .returning(self.model),
            execution_options={"populate_existing": True},
        )
        return result.scalars().first()

    async def soft_delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            self._live(update(self.model).where(self.model.id == entity_id))
            .values(deleted_at=utcnow())
        )
        await self._session.flush()
        return result.rowcount > 0
