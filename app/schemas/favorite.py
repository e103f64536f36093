"""Favorite Pydantic schemas."""


from datetime import datetime

from app.schemas.common import CamelModel

class FavoriteCreate(CamelModel):
    # Discriminant checked against the reference fields by TargetRef.parse
    type: str
    branch_id: str | None = None
    menu_item_id: str | None = None
    offer_id: str | None = None

class FavoriteOut(CamelModel):
    id: str
    user_id: str
    type: str
    branch_id: str | None = None
    menu_item_id: str | None = None
    offer_id: str | None = None
    created_at: datetime
