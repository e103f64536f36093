"""Webhook fan-out of entity-change events.

Each publish schedules one independent task per subscriber URL. Publishing
returns immediately; deliveries run after the request's write has committed
and their failures are logged, never raised.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from fastapi import Request

logger = logging.getLogger(__name__)


class EventType:
    VENDOR_REGISTERED = "vendor_registered"
    VENDOR_STATUS_UPDATED = "vendor_status_updated"
    BRANCH_ADDED = "branch_added"
    BRANCH_UPDATED = "branch_updated"
    MENU_ITEM_ADDED = "menu_item_added"
    MENU_ITEM_UPDATED = "menu_item_updated"
    OFFER_ADDED = "offer_added"
    OFFER_UPDATED = "offer_updated"
    REVIEW_ADDED = "review_added"
    REVIEW_UPDATED = "review_updated"
    REVIEW_DELETED = "review_deleted"
    REVIEW_REPLY_ADDED = "review_reply_added"
    REVIEW_REPLY_UPDATED = "review_reply_updated"
    REVIEW_REPLY_DELETED = "review_reply_deleted"


class Notifier:
    def __init__(self, http: httpx.AsyncClient, urls: list[str], timeout: float = 10.0):
        self._http = http
        self._urls = list(urls)
        self._timeout = timeout
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def publish(self, event_type: str, data: Any) -> None:
        """Schedule delivery of ``{data, type}`` to every subscriber."""
        body = {"data": data, "type": event_type}
        for url in self._urls:
            task = asyncio.create_task(self._deliver(url, body), name=f"webhook:{event_type}:{url}")
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _deliver(self, url: str, body: dict) -> None:
        try:
            response = await self._http.post(url, json=body, timeout=self._timeout)
            response.raise_for_status()
            logger.debug("Webhook %s delivered to %s", body["type"], url)
        except Exception as exc:
            logger.warning("Webhook %s failed for %s: %s", body["type"], url, exc)

    async def drain(self) -> None:
        """Wait for in-flight deliveries (used at shutdown and in tests)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier
