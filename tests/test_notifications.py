"""Tests for webhook fan-out."""

import asyncio

import httpx

from app.services.notifications import Notifier

from tests.conftest import WEBHOOK_URLS, WebhookRecorder, auth_header


async def test_each_subscriber_gets_the_event():
    recorder = WebhookRecorder()
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        notifier = Notifier(http, WEBHOOK_URLS)
        notifier.publish("branch_added", {"id": "b1"})
        await notifier.drain()

    assert sorted(url for url, _ in recorder.calls) == sorted(WEBHOOK_URLS)
    assert all(body == {"data": {"id": "b1"}, "type": "branch_added"} for _, body in recorder.calls)


async def test_failing_subscriber_does_not_block_others():
    recorder = WebhookRecorder()
    recorder.failing.add(WEBHOOK_URLS[0])
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as http:
        notifier = Notifier(http, WEBHOOK_URLS)
        notifier.publish("offer_added", {"id": "o1"})
        await notifier.drain()
        assert notifier.pending == 0

    assert recorder.events(WEBHOOK_URLS[1]) == [{"data": {"id": "o1"}, "type": "offer_added"}]


async def test_unreachable_subscriber_is_swallowed():
    def handler(request):
        if "a" in request.url.path:
            raise httpx.ConnectError("down", request=request)
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        notifier = Notifier(http, WEBHOOK_URLS)
        notifier.publish("review_added", {"id": "r1"})
        await notifier.drain()


async def test_publish_does_not_wait_for_delivery():
    release = asyncio.Event()

    async def slow(request):
        await release.wait()
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(slow)) as http:
        notifier = Notifier(http, WEBHOOK_URLS[:1])
        notifier.publish("vendor_registered", {"id": "v1"})
        await asyncio.sleep(0)
        assert notifier.pending == 1
        release.set()
        await notifier.drain()
        assert notifier.pending == 0


async def test_no_event_when_write_is_rejected(client, branch_b, vendor_c, webhooks, notifier):
    resp = await client.post(
        f"/api/v1/vendors/{branch_b.vendor_id}/branches",
        json={"name": "Nope", "address": "x"},
        headers=auth_header("vendor-c-token"),
    )
    assert resp.status_code == 403
    await notifier.drain()
    assert webhooks.calls == []


async def test_review_delete_event_carries_id(client, branch_b, webhooks, notifier):
    created = await client.post(
        "/api/v1/reviews",
        json={"type": "branch", "branchId": branch_b.id, "rating": 5},
        headers=auth_header("customer-token"),
    )
    review_id = created.json()["data"]["id"]
    await client.delete(f"/api/v1/reviews/{review_id}", headers=auth_header("customer-token"))
    await notifier.drain()

    events = webhooks.events()
    assert [e["type"] for e in events] == ["review_added", "review_deleted"]
    assert events[0]["data"]["rating"] == 5
    assert events[1]["data"] == {"reviewId": review_id}
