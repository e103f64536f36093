"""Response envelopes: `{data}` for single results, `{data, meta}` for pages."""


from typing import Generic, TypeVar

from pydantic import BaseModel

from app.core.pagination import PageMeta, PaginationParams

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    data: T


class ListResponse(BaseModel, Generic[T]):
    data: list[T]
    meta: PageMeta


def paginated(items: list, total: int, pagination: PaginationParams) -> dict:
    """Build the ListResponse body for one page of ``items`` out of ``total``."""
    return {
        "data": items,
        "meta": PageMeta.build(total, pagination.page, pagination.limit),
    }
