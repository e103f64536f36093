"""Review, reply and like Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel

class ReviewCreate(CamelModel):
    type: str
    branch_id: str | None = None
    menu_item_id: str | None = None
    offer_id: str | None = None
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=5000)

class ReviewUpdate(CamelModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = Field(default=None, max_length=5000)

class ReviewOut(CamelModel):
    id: str
    user_id: str
    type: str
    branch_id: str | None = None
    menu_item_id: str | None = None
    offer_id: str | None = None
    rating: int
    comment: str | None = None
    created_at: datetime
    updated_at: datetime

class ReplyCreate(CamelModel):
    comment: str = Field(min_length=1, max_length=5000)

class ReplyOut(CamelModel):
    id: str
    review_id: str
    user_id: str
    comment: str
    is_vendor_reply: bool
    created_at: datetime
    updated_at: datetime

class LikeCreate(CamelModel):
    is_like: bool

class LikeOut(CamelModel):
    id: str
    review_id: str
    user_id: str
    is_like: bool
    updated_at: datetime

class LikeSummary(CamelModel):
    review_id: str
    likes: int
    dislikes: int
