"""Tests for customer favorites."""

import pytest
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError

from app.domain import Favorite

from tests.conftest import auth_header

CUSTOMER = auth_header("customer-token")
CUSTOMER_2 = auth_header("customer-2-token")


class TestCreateFavorite:
    async def test_favorite_a_branch(self, client, branch_b):
        resp = await client.post(
            "/api/v1/favorites", json={"type": "branch", "branchId": branch_b.id}, headers=CUSTOMER
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["type"] == "branch"
        assert data["branchId"] == branch_b.id
        assert data["menuItemId"] is None and data["offerId"] is None

    async def test_discriminant_must_match_reference(self, client, branch_b, menu_item):
        resp = await client.post(
            "/api/v1/favorites",
            json={"type": "menu_item", "branchId": branch_b.id, "menuItemId": menu_item.id},
            headers=CUSTOMER,
        )
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"]["conflicting"] == ["branch_id"]

    async def test_overall_is_not_a_favorite_kind(self, client, branch_b):
        resp = await client.post(
            "/api/v1/favorites", json={"type": "overall", "branchId": branch_b.id}, headers=CUSTOMER
        )
        assert resp.status_code == 422

    async def test_missing_target_is_404(self, client, users):
        resp = await client.post(
            "/api/v1/favorites", json={"type": "offer", "offerId": "ghost"}, headers=CUSTOMER
        )
        assert resp.status_code == 404

    async def test_duplicate_conflicts(self, client, db_session, menu_item):
        body = {"type": "menu_item", "menuItemId": menu_item.id}
        first = await client.post("/api/v1/favorites", json=body, headers=CUSTOMER)
        second = await client.post("/api/v1/favorites", json=body, headers=CUSTOMER)
        assert first.status_code == 200
        assert second.status_code == 409

        count = await db_session.scalar(select(func.count()).select_from(Favorite))
        assert count == 1

    async def test_other_customer_may_favorite_same_target(self, client, menu_item):
        body = {"type": "menu_item", "menuItemId": menu_item.id}
        assert (await client.post("/api/v1/favorites", json=body, headers=CUSTOMER)).status_code == 200
        assert (await client.post("/api/v1/favorites", json=body, headers=CUSTOMER_2)).status_code == 200

    async def test_refavorite_after_delete_restores_row(self, client, offer):
        body = {"type": "offer", "offerId": offer.id}
        created = (await client.post("/api/v1/favorites", json=body, headers=CUSTOMER)).json()["data"]

        deleted = await client.delete(f"/api/v1/favorites/{created['id']}", headers=CUSTOMER)
        assert deleted.status_code == 204

        again = await client.post("/api/v1/favorites", json=body, headers=CUSTOMER)
        assert again.status_code == 200
        assert again.json()["data"]["id"] == created["id"]


class TestListAndDelete:
    async def test_list_only_mine_and_filter_by_type(self, client, branch_b, menu_item):
        await client.post(
            "/api/v1/favorites", json={"type": "branch", "branchId": branch_b.id}, headers=CUSTOMER
        )
        await client.post(
            "/api/v1/favorites", json={"type": "menu_item", "menuItemId": menu_item.id}, headers=CUSTOMER
        )
        await client.post(
            "/api/v1/favorites", json={"type": "branch", "branchId": branch_b.id}, headers=CUSTOMER_2
        )

        mine = (await client.get("/api/v1/favorites", headers=CUSTOMER)).json()["data"]
        assert {f["type"] for f in mine} == {"branch", "menu_item"}
        assert all(f["userId"] == "user-customer" for f in mine)

        only_items = await client.get("/api/v1/favorites?type=menu_item", headers=CUSTOMER)
        assert [f["menuItemId"] for f in only_items.json()["data"]] == [menu_item.id]

    async def test_cannot_delete_someone_elses_favorite(self, client, branch_b):
        created = await client.post(
            "/api/v1/favorites", json={"type": "branch", "branchId": branch_b.id}, headers=CUSTOMER
        )
        resp = await client.delete(
            f"/api/v1/favorites/{created.json()['data']['id']}", headers=CUSTOMER_2
        )
        assert resp.status_code == 404

    async def test_deleted_favorite_disappears_from_list(self, client, branch_b):
        created = await client.post(
            "/api/v1/favorites", json={"type": "branch", "branchId": branch_b.id}, headers=CUSTOMER
        )
        await client.delete(f"/api/v1/favorites/{created.json()['data']['id']}", headers=CUSTOMER)
        assert (await client.get("/api/v1/favorites", headers=CUSTOMER)).json()["data"] == []


class TestSchema:
    async def test_one_partial_unique_index_per_target(self, engine):
        async with engine.connect() as conn:
            indexes = await conn.run_sync(lambda sync: inspect(sync).get_indexes("favorites"))
        unique = {ix["name"]: ix["column_names"] for ix in indexes if ix["unique"]}
        assert unique == {
            "uq_favorites_user_branch_id": ["user_id", "branch_id"],
            "uq_favorites_user_menu_item_id": ["user_id", "menu_item_id"],
            "uq_favorites_user_offer_id": ["user_id", "offer_id"],
        }

    async def test_store_rejects_second_row_for_same_target(self, db_session, branch_b):
        db_session.add(Favorite(user_id="user-customer", type="branch", branch_id=branch_b.id))
        await db_session.commit()

        db_session.add(Favorite(user_id="user-customer", type="branch", branch_id=branch_b.id))
        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()
