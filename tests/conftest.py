"""
Pytest configuration and fixtures for the vendors service tests.

Every test gets a fresh in-memory SQLite schema. The auth service and the
webhook subscribers are replaced by httpx.MockTransport handlers, so no
network is involved.
"""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security import AuthClient
from app.db.base import Base, get_db
from app.domain import Branch, MenuItem, Offer, User, Vendor
from app.main import app
from app.services.notifications import Notifier

VALIDATE_URL = "http://auth.test/auth/validate"
WEBHOOK_URLS = ["http://hooks.test/a", "http://hooks.test/b"]

# token -> (uid, role) as the fake auth service would answer
TOKENS = {
    "admin-token": ("user-admin", "admin"),
    "vendor-a-token": ("user-vendor-a", "vendor"),
    "vendor-c-token": ("user-vendor-c", "vendor"),
    "customer-token": ("user-customer", "customer"),
    "customer-2-token": ("user-customer-2", "customer"),
    "courier-token": ("user-courier", "delivery_partner"),
}


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def fake_auth_service(request: httpx.Request) -> httpx.Response:
    token = json.loads(request.content)["token"]
    if token == "unreachable":
        raise httpx.ConnectError("connection refused", request=request)
    if token == "broken":
        return httpx.Response(502, text="bad gateway")
    if token not in TOKENS:
        return httpx.Response(200, json={"valid": False, "message": "Invalid token"})
    uid, role = TOKENS[token]
    return httpx.Response(200, json={"valid": True, "payload": {"uid": uid, "role": role}})


class WebhookRecorder:
    """Collects webhook deliveries; URLs listed in ``failing`` answer 500."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.failing: set[str] = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append((url, json.loads(request.content)))
        if url in self.failing:
            return httpx.Response(500)
        return httpx.Response(204)

    def events(self, url: str = WEBHOOK_URLS[0]) -> list[dict]:
        return [body for called, body in self.calls if called == url]


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Collaborators and HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture
def webhooks():
    return WebhookRecorder()


@pytest.fixture
async def http_clients(webhooks):
    auth_http = httpx.AsyncClient(transport=httpx.MockTransport(fake_auth_service))
    hook_http = httpx.AsyncClient(transport=httpx.MockTransport(webhooks))
    yield auth_http, hook_http
    await auth_http.aclose()
    await hook_http.aclose()


@pytest.fixture
def notifier(http_clients):
    return Notifier(http_clients[1], WEBHOOK_URLS, timeout=1.0)


@pytest.fixture
async def client(session_factory, http_clients, notifier):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.state.auth_client = AuthClient(http_clients[0], VALIDATE_URL, timeout=1.0)
    app.state.notifier = notifier

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    await notifier.drain()
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

@pytest.fixture
async def users(db_session):
    rows = [
        User(id=uid, email=f"{uid}@example.com", name=uid, role=role)
        for uid, role in TOKENS.values()
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return {row.id: row for row in rows}


@pytest.fixture
async def vendor_a(db_session, users):
    """Approved vendor owned by user-vendor-a."""
    vendor = Vendor(
        id="vendor-a",
        user_id="user-vendor-a",
        name="Vendor A",
        commercial_registration="CR-A",
        registration_status="approved",
    )
    db_session.add(vendor)
    await db_session.commit()
    return vendor


@pytest.fixture
async def vendor_c(db_session, users):
    """Approved vendor owned by user-vendor-c."""
    vendor = Vendor(
        id="vendor-c",
        user_id="user-vendor-c",
        name="Vendor C",
        commercial_registration="CR-C",
        registration_status="approved",
    )
    db_session.add(vendor)
    await db_session.commit()
    return vendor


@pytest.fixture
async def branch_b(db_session, vendor_a):
    branch = Branch(id="branch-b", vendor_id=vendor_a.id, name="Downtown", address="1 Main St")
    db_session.add(branch)
    await db_session.commit()
    return branch


@pytest.fixture
async def menu_item(db_session, branch_b):
    item = MenuItem(id="item-m", branch_id=branch_b.id, name="Burger", price=Decimal("9.50"))
    db_session.add(item)
    await db_session.commit()
    return item


@pytest.fixture
async def offer(db_session, branch_b):
    now = datetime.now(timezone.utc)
    row = Offer(
        id="offer-o",
        branch_id=branch_b.id,
        title="Lunch deal",
        discount_type="percentage",
        discount_value=Decimal("10"),
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=7),
    )
    db_session.add(row)
    await db_session.commit()
    return row
