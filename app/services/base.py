"""Shared plumbing for write services: commit first, then fan out."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.common import CamelModel
from app.services.notifications import Notifier


class ServiceBase:
    def __init__(self, session: AsyncSession, notifier: Optional[Notifier] = None):
        self._session = session
        self._notifier = notifier

    async def _commit_and_publish(self, event_type: str, payload: CamelModel | dict) -> None:
        """Commit the unit of work, then hand the event to the notifier.

        Events are only published for committed state; a failed commit raises
        before anything is scheduled.
        """
        await self._session.commit()
        if self._notifier is not None:
            data = payload.to_event() if isinstance(payload, CamelModel) else payload
            self._notifier.publish(event_type, data)
