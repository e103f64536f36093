"""Customer favorites."""


from app.core.exceptions import ConflictError, NotFoundError
from app.core.security import Principal
from app.domain.favorite import Favorite
from app.domain.references import FAVORITE_KINDS, TargetRef
from app.repositories.favorite import FavoriteRepository
from app.schemas.favorite import FavoriteCreate
from app.services.base import ServiceBase
from app.services.targets import TargetLookup

class FavoriteService(ServiceBase):
    def __init__(self, session, notifier=None):
        super().__init__(session, notifier)
        self._repo = FavoriteRepository(session)
        self._targets = TargetLookup(session)

    async def create(self, principal: Principal, data: FavoriteCreate) -> Favorite:
        target = TargetRef.parse(
            data.type,
            branch_id=data.branch_id,
            menu_item_id=data.menu_item_id,
            offer_id=data.offer_id,
            allowed=FAVORITE_KINDS,
        )
        await self._targets.ensure_exists(target)

        existing = await self._repo.find_for_target(principal.user_id, target)
        if existing is not None and existing.deleted_at is None:
            raise ConflictError(f"This {target.kind.value} is already in your favorites")
        if existing is not None:
            favorite = await self._repo.restore(existing.id)
        else:
            favorite = await self._repo.create(user_id=principal.user_id, **target.to_columns())
        await self._session.commit()
        return favorite  # type: ignore[return-value]

    async def list_mine(self, principal: Principal, kind: str | None = None) -> list[Favorite]:
        return await self._repo.list_for_user(principal.user_id, kind)

    async def delete(self, principal: Principal, favorite_id: str) -> None:
        if not await self._repo.soft_delete_owned(favorite_id, principal.user_id):
            raise NotFoundError("Favorite", favorite_id)
        await self._session.commit()
