"""Tests for token delegation to the auth service and role gates."""

import httpx
import pytest

from app.core.exceptions import ForbiddenError, ServiceUnavailableError, UnauthorizedError
from app.core.security import AuthClient, Principal, require_role
from app.domain.enums import Role

from tests.conftest import VALIDATE_URL, auth_header, fake_auth_service


@pytest.fixture
async def auth_client():
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_auth_service))
    yield AuthClient(http, VALIDATE_URL, timeout=1.0)
    await http.aclose()


class TestAuthClient:
    async def test_valid_token_yields_principal(self, auth_client):
        principal = await auth_client.authenticate("vendor-a-token")
        assert principal == Principal(user_id="user-vendor-a", role=Role.VENDOR)

    async def test_invalid_token_is_unauthorized(self, auth_client):
        with pytest.raises(UnauthorizedError):
            await auth_client.authenticate("nope")

    async def test_unreachable_service_is_unavailable(self, auth_client):
        with pytest.raises(ServiceUnavailableError):
            await auth_client.authenticate("unreachable")

    async def test_upstream_error_is_unavailable(self, auth_client):
        with pytest.raises(ServiceUnavailableError):
            await auth_client.authenticate("broken")

    async def test_rejection_status_is_unauthorized(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(401)))
        client = AuthClient(http, VALIDATE_URL)
        with pytest.raises(UnauthorizedError):
            await client.authenticate("anything")
        await http.aclose()

    async def test_unknown_role_is_unauthorized(self):
        def handler(request):
            return httpx.Response(200, json={"valid": True, "payload": {"uid": "u", "role": "chef"}})

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        with pytest.raises(UnauthorizedError):
            await AuthClient(http, VALIDATE_URL).authenticate("t")
        await http.aclose()

    @pytest.mark.parametrize(
        "body",
        [[], "ok", {"valid": True, "payload": "uid-1"}, {"valid": True, "payload": ["uid-1"]}],
    )
    async def test_malformed_body_is_unavailable(self, body):
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=body))
        )
        with pytest.raises(ServiceUnavailableError):
            await AuthClient(http, VALIDATE_URL).authenticate("t")
        await http.aclose()


class TestRequireRole:
    async def test_accepts_a_set_of_roles(self):
        checker = require_role({Role.VENDOR, Role.CUSTOMER})
        vendor = Principal(user_id="u1", role=Role.VENDOR)
        assert await checker(principal=vendor) is vendor

    async def test_set_and_varargs_are_equivalent(self):
        admin = Principal(user_id="u2", role=Role.ADMIN)
        for checker in (require_role({Role.VENDOR}), require_role(Role.VENDOR)):
            with pytest.raises(ForbiddenError):
                await checker(principal=admin)

    async def test_single_role(self):
        customer = Principal(user_id="u3", role=Role.CUSTOMER)
        assert await require_role(Role.CUSTOMER)(principal=customer) is customer

    def test_empty_is_rejected(self):
        with pytest.raises(ValueError):
            require_role(set())


class TestEndpointsAuth:
    async def test_missing_token_is_401(self, client, users):
        resp = await client.post("/api/v1/favorites", json={"type": "branch", "branchId": "x"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "UNAUTHORIZED"

    async def test_invalid_token_is_401(self, client, users):
        resp = await client.get("/api/v1/favorites", headers=auth_header("bogus"))
        assert resp.status_code == 401

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/v1/favorites"),
            ("get", "/api/v1/vendors"),
            ("delete", "/api/v1/reviews/r1"),
        ],
    )
    async def test_unreachable_auth_is_503_everywhere(self, client, users, method, path):
        resp = await client.request(method, path, headers=auth_header("unreachable"))
        assert resp.status_code == 503
        assert resp.json()["error"] == "SERVICE_UNAVAILABLE"

    async def test_wrong_role_is_403(self, client, users):
        resp = await client.get("/api/v1/favorites", headers=auth_header("vendor-a-token"))
        assert resp.status_code == 403
        assert "customer" in resp.json()["message"]

    async def test_optional_auth_degrades_to_anonymous(self, client, vendor_a):
        resp = await client.get(
            f"/api/v1/vendors/{vendor_a.id}", headers=auth_header("unreachable")
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == vendor_a.id
