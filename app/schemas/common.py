"""Shared Pydantic schema base with camelCase aliases."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }

    def to_event(self) -> dict:
        """JSON-safe camelCase dict used as webhook ``data``."""
        return self.model_dump(mode="json", by_alias=True)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalise to aware UTC; naive datetimes are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class HealthResponse(BaseModel):
    """Health-check response returned by /health."""
    status: str = "ok"
    app: str
    env: str
    database: str = "ok"
