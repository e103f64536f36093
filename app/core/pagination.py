"""Pagination parameters and page metadata for list endpoints."""


import math

from fastapi import Query
from pydantic import BaseModel


class PaginationParams:
    """Page, limit, sort field and direction for one list request."""

    def __init__(self, page: int = 1, limit: int = 20, sort: str = "created_at", order: str = "desc"):
        self.page = page
        self.limit = limit
        self.sort = sort
        self.order = order

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate_by(*sortable: str):
    """FastAPI dependency for `?page=1&limit=20&sort=<field>&order=desc`.

    ``sortable`` lists the columns this endpoint can order by; any other
    ``sort`` value is rejected with 422. The first entry is the default.
    """
    if not sortable:
        raise ValueError("paginate_by needs at least one sortable field")
    pattern = f"^({'|'.join(sortable)})$"

    def _params(
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(default=20, ge=1, le=100, description="Items per page"),
        sort: str = Query(default=sortable[0], pattern=pattern, description="Sort field"),
        order: str = Query(default="desc", pattern="^(asc|desc)$", description="Sort order"),
    ) -> PaginationParams:
        return PaginationParams(page=page, limit=limit, sort=sort, order=order)

    return _params


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit) if limit else 1)
