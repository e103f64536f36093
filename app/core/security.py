"""Bearer-token authentication delegated to the external auth service.

The service never verifies tokens itself: every authenticated request posts the
token to ``AUTH_SERVICE_URL + AUTH_VALIDATE_PATH`` and trusts the answer.

Outcomes are kept apart on purpose:
  - the auth service says the token is bad      -> UnauthorizedError (401)
  - the auth service cannot be reached / errors  -> ServiceUnavailableError (503)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.exceptions import ForbiddenError, ServiceUnavailableError, UnauthorizedError
from app.domain.enums import Role

logger = logging.getLogger(__name__)

_USER_AGENT = "vendors-service/1.0"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller attached to a request."""

    user_id: str
    role: Role

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles


class AuthClient:
    """Thin client for the auth service's token validation endpoint."""

    def __init__(self, http: httpx.AsyncClient, validate_url: str, timeout: float = 5.0):
        self._http = http
        self._validate_url = validate_url
        self._timeout = timeout

    async def authenticate(self, token: str) -> Principal:
        try:
            response = await self._http.post(
                self._validate_url,
                json={"token": token},
                headers={"User-Agent": _USER_AGENT},
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            logger.error("Auth service unreachable at %s: %s", self._validate_url, exc)
            raise ServiceUnavailableError("Authentication service unavailable") from exc

        if response.status_code in (401, 403):
            logger.info("Auth service rejected token (status %s)", response.status_code)
            raise UnauthorizedError("Invalid token")
        if response.status_code != 200:
            logger.error("Auth service returned unexpected status %s", response.status_code)
            raise ServiceUnavailableError("Authentication service error")

        try:
            body = response.json()
        except ValueError as exc:
            logger.error("Auth service returned a non-JSON body")
            raise ServiceUnavailableError("Authentication service error") from exc

        if not isinstance(body, dict):
            logger.error("Auth service returned a non-object body")
            raise ServiceUnavailableError("Authentication service error")
        if not body.get("valid"):
            raise UnauthorizedError(body.get("message") or "Token validation failed")

        payload = body.get("payload") or {}
        if not isinstance(payload, dict):
            logger.error("Auth service returned a malformed payload")
            raise ServiceUnavailableError("Authentication service error")
        uid = payload.get("uid")
        try:
            role = Role(payload.get("role"))
        except ValueError:
            logger.warning("Token for uid=%s carries unknown role %r", uid, payload.get("role"))
            raise UnauthorizedError("Token carries an unrecognised role") from None
        if not uid:
            raise UnauthorizedError("Token payload has no user id")

        return Principal(user_id=str(uid), role=role)


def build_auth_client(http: httpx.AsyncClient) -> AuthClient:
    return AuthClient(http, settings.auth_validate_url, timeout=settings.auth_timeout)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

_bearer = HTTPBearer(auto_error=False)


def get_auth_client(request: Request) -> AuthClient:
    return request.app.state.auth_client


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth: AuthClient = Depends(get_auth_client),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Bearer token is required in Authorization header")
    return await auth.authenticate(credentials.credentials)


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth: AuthClient = Depends(get_auth_client),
) -> Optional[Principal]:
    """Attach the principal when a valid token is present; otherwise stay anonymous."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await auth.authenticate(credentials.credentials)
    except (UnauthorizedError, ServiceUnavailableError) as exc:
        logger.debug("Optional authentication skipped: %s", exc.message)
        return None


def require_role(*roles: Role | Iterable[Role]):
    """Dependency factory: authenticate, then allow only the given role(s).

    Accepts roles as separate arguments or as one set, e.g.
    `require_role(Role.VENDOR, Role.CUSTOMER)` or `require_role({Role.VENDOR, Role.CUSTOMER})`.
    """
    allowed: set[Role] = set()
    for item in roles:
        if isinstance(item, Role):
            allowed.add(item)
        else:
            allowed.update(Role(r) for r in item)
    if not allowed:
        raise ValueError("require_role needs at least one role")

    async def _checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            names = ", ".join(sorted(role.value for role in allowed))
            logger.warning(
                "Role %s denied (uid=%s, required: %s)", principal.role.value, principal.user_id, names
            )
            raise ForbiddenError(f"Access denied. Required role(s): {names}")
        return principal

    return _checker
