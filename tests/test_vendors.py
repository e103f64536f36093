"""Tests for vendor registration, approval and branch management."""

from app.domain import Vendor

from tests.conftest import auth_header

VENDOR_A = auth_header("vendor-a-token")
VENDOR_C = auth_header("vendor-c-token")
ADMIN = auth_header("admin-token")
CUSTOMER = auth_header("customer-token")


class TestRegistration:
    async def test_register_starts_pending(self, client, users, webhooks, notifier):
        resp = await client.post(
            "/api/v1/vendors/register",
            json={"name": "Pizza Place", "commercialRegistration": "CR-100"},
            headers=VENDOR_A,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["registrationStatus"] == "pending"
        assert data["userId"] == "user-vendor-a"

        await notifier.drain()
        assert [e["type"] for e in webhooks.events()] == ["vendor_registered"]

    async def test_duplicate_commercial_registration_conflicts(self, client, vendor_a):
        resp = await client.post(
            "/api/v1/vendors/register",
            json={"name": "Copycat", "commercialRegistration": vendor_a.commercial_registration},
            headers=VENDOR_C,
        )
        assert resp.status_code == 409
        assert resp.json()["error"] == "CONFLICT"

    async def test_customer_cannot_register(self, client, users):
        resp = await client.post(
            "/api/v1/vendors/register",
            json={"name": "Nope", "commercialRegistration": "CR-1"},
            headers=CUSTOMER,
        )
        assert resp.status_code == 403

    async def test_invalid_phone_is_422(self, client, users):
        resp = await client.post(
            "/api/v1/vendors/register",
            json={"name": "Bad", "commercialRegistration": "CR-2", "businessPhone": "call me"},
            headers=VENDOR_A,
        )
        assert resp.status_code == 422
        assert resp.json()["error"] == "VALIDATION_ERROR"


class TestApproval:
    async def test_admin_approves_pending_vendor(self, client, db_session, users):
        db_session.add(
            Vendor(id="v-pending", user_id="user-vendor-c", name="Later", commercial_registration="CR-P")
        )
        await db_session.commit()

        resp = await client.put(
            "/api/v1/vendors/v-pending/approve", json={"status": "approved"}, headers=ADMIN
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["registrationStatus"] == "approved"
        assert data["approvedBy"] == "user-admin"
        assert data["approvalDate"] is not None

    async def test_reject_keeps_reason(self, client, vendor_c):
        resp = await client.put(
            f"/api/v1/vendors/{vendor_c.id}/approve",
            json={"status": "rejected", "rejectionReason": "Missing documents"},
            headers=ADMIN,
        )
        assert resp.json()["data"]["rejectionReason"] == "Missing documents"

    async def test_vendor_cannot_approve(self, client, vendor_a):
        resp = await client.put(
            f"/api/v1/vendors/{vendor_a.id}/approve", json={"status": "approved"}, headers=VENDOR_A
        )
        assert resp.status_code == 403

    async def test_unknown_status_is_422(self, client, vendor_a):
        resp = await client.put(
            f"/api/v1/vendors/{vendor_a.id}/approve", json={"status": "pending"}, headers=ADMIN
        )
        assert resp.status_code == 422

    async def test_admin_lists_with_status_filter(self, client, vendor_a, db_session):
        db_session.add(
            Vendor(id="v-pending", user_id="user-vendor-c", name="Later", commercial_registration="CR-P")
        )
        await db_session.commit()

        resp = await client.get("/api/v1/vendors?status=pending", headers=ADMIN)
        body = resp.json()
        assert resp.status_code == 200
        assert [v["id"] for v in body["data"]] == ["v-pending"]
        assert body["meta"] == {"total": 1, "page": 1, "limit": 20, "pages": 1}

    async def test_pending_vendor_hidden_from_public(self, client, db_session, users):
        db_session.add(
            Vendor(id="v-pending", user_id="user-vendor-c", name="Later", commercial_registration="CR-P")
        )
        await db_session.commit()

        assert (await client.get("/api/v1/vendors/v-pending")).status_code == 404
        owner_view = await client.get("/api/v1/vendors/v-pending", headers=VENDOR_C)
        assert owner_view.status_code == 200


class TestBranches:
    async def test_owner_of_approved_vendor_creates_branch(self, client, vendor_a, webhooks, notifier):
        resp = await client.post(
            f"/api/v1/vendors/{vendor_a.id}/branches",
            json={"name": "Harbor", "address": "2 Pier Rd", "latitude": 25.2, "longitude": 55.3},
            headers=VENDOR_A,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["vendorId"] == vendor_a.id
        assert data["latitude"] == 25.2
        assert data["isActive"] is True

        await notifier.drain()
        assert webhooks.events()[-1]["type"] == "branch_added"

    async def test_other_vendor_is_forbidden(self, client, vendor_a, vendor_c):
        resp = await client.post(
            f"/api/v1/vendors/{vendor_a.id}/branches",
            json={"name": "Sneaky", "address": "x"},
            headers=VENDOR_C,
        )
        assert resp.status_code == 403

    async def test_unapproved_vendor_is_forbidden(self, client, db_session, users):
        db_session.add(
            Vendor(
                id="v-suspended",
                user_id="user-vendor-a",
                name="Suspended",
                commercial_registration="CR-S",
                registration_status="suspended",
            )
        )
        await db_session.commit()

        resp = await client.post(
            "/api/v1/vendors/v-suspended/branches",
            json={"name": "Any", "address": "x"},
            headers=VENDOR_A,
        )
        assert resp.status_code == 403
        assert resp.json()["message"] == "Unauthorized or unapproved vendor"

    async def test_suspension_applies_to_next_request(self, client, db_session, vendor_a):
        await client.put(
            f"/api/v1/vendors/{vendor_a.id}/approve", json={"status": "suspended"}, headers=ADMIN
        )
        resp = await client.post(
            f"/api/v1/vendors/{vendor_a.id}/branches",
            json={"name": "Too late", "address": "x"},
            headers=VENDOR_A,
        )
        assert resp.status_code == 403

    async def test_latitude_out_of_range_is_422(self, client, vendor_a):
        resp = await client.post(
            f"/api/v1/vendors/{vendor_a.id}/branches",
            json={"name": "North", "address": "x", "latitude": 91},
            headers=VENDOR_A,
        )
        assert resp.status_code == 422

    async def test_update_branch(self, client, branch_b):
        resp = await client.put(
            f"/api/v1/vendors/{branch_b.vendor_id}/branches/{branch_b.id}",
            json={"name": "Downtown 2", "isActive": False},
            headers=VENDOR_A,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["name"] == "Downtown 2"
        assert data["isActive"] is False
        assert data["address"] == "1 Main St"

    async def test_branch_of_other_vendor_is_404(self, client, branch_b, vendor_c):
        resp = await client.put(
            f"/api/v1/vendors/{vendor_c.id}/branches/{branch_b.id}",
            json={"name": "Hijack"},
            headers=VENDOR_C,
        )
        assert resp.status_code == 404

    async def test_public_branch_listing(self, client, branch_b):
        resp = await client.get(f"/api/v1/vendors/{branch_b.vendor_id}/branches")
        assert [b["id"] for b in resp.json()["data"]] == [branch_b.id]

        single = await client.get(f"/api/v1/branches/{branch_b.id}")
        assert single.json()["data"]["name"] == "Downtown"


class TestVendorListing:
    async def test_sort_by_name(self, client, vendor_a, vendor_c):
        resp = await client.get(
            "/api/v1/vendors", params={"sort": "name", "order": "asc"}, headers=ADMIN
        )
        assert [v["name"] for v in resp.json()["data"]] == ["Vendor A", "Vendor C"]

        desc = await client.get(
            "/api/v1/vendors", params={"sort": "name", "order": "desc"}, headers=ADMIN
        )
        assert [v["name"] for v in desc.json()["data"]] == ["Vendor C", "Vendor A"]

    async def test_rating_is_not_a_vendor_sort_field(self, client, vendor_a):
        resp = await client.get("/api/v1/vendors", params={"sort": "rating"}, headers=ADMIN)
        assert resp.status_code == 422
