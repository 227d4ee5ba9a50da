"""Access control: bearer tokens, roles and the permissions they grant.

A request's role is resolved exactly once, at this boundary, into a
``Principal`` carrying a frozen capability set. Route handlers ask
``principal.can(Permission.X)`` instead of comparing role names.

Tokens are HS256 JSON Web Tokens carrying the user id, display name and role,
delivered as an HTTP-only ``token`` cookie and accepted either from that cookie
or from an ``Authorization: Bearer`` header. The token only identifies the
caller: the role a request acts with is always the one currently stored on the
account, read through the account directory.
"""

import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt
import structlog
from fastapi import Depends, Request, Response

from shared.accounts import get_account_directory
from shared.errors import AuthenticationFailed, PermissionDenied

logger = structlog.get_logger(__name__)

COOKIE_NAME = "token"
_ALGORITHM = "HS256"
_DEV_SECRET = "storefront-development-secret-change-me"


class Role(Enum):
    USER = "user"
    SELLER = "seller"
    ADMIN = "admin"


class Permission(Enum):
    PLACE_ORDERS = "place_orders"
    WRITE_REVIEWS = "write_reviews"
    MANAGE_OWN_PRODUCTS = "manage_own_products"
    VIEW_SELLER_REPORTS = "view_seller_reports"
    MANAGE_ALL_PRODUCTS = "manage_all_products"
    MANAGE_ORDERS = "manage_orders"
    MANAGE_USERS = "manage_users"
    MODERATE_REVIEWS = "moderate_reviews"


_CUSTOMER = frozenset({Permission.PLACE_ORDERS, Permission.WRITE_REVIEWS})
_SELLER = _CUSTOMER | {Permission.MANAGE_OWN_PRODUCTS, Permission.VIEW_SELLER_REPORTS}

ROLE_PERMISSIONS = {
    Role.USER: _CUSTOMER,
    Role.SELLER: frozenset(_SELLER),
    Role.ADMIN: frozenset(Permission),
}


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    user_id: str
    name: str
    role: Role
    permissions: frozenset

    @classmethod
    def for_role(cls, user_id, name, role):
        role = Role(role)
        return cls(
            user_id=str(user_id),
            name=name,
            role=role,
            permissions=ROLE_PERMISSIONS[role],
        )

    def can(self, permission: Permission) -> bool:
        return permission in self.permissions

    def require(self, permission: Permission, message: str | None = None) -> None:
        if not self.can(permission):
            raise PermissionDenied(message or f"Role ({self.role.value}) is not allowed to access this resource")

    def owns(self, owner_id) -> bool:
        return owner_id is not None and str(owner_id) == self.user_id

    def require_owner_or(self, owner_id, permission: Permission, message: str | None = None) -> None:
        """Allow the owner of a resource, or anyone holding ``permission``."""
        if not (self.owns(owner_id) or self.can(permission)):
            raise PermissionDenied(message)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------
def _secret() -> str:
    return os.getenv("JWT_SECRET", _DEV_SECRET)


def token_lifetime() -> timedelta:
    return timedelta(days=int(os.getenv("JWT_EXPIRES_DAYS", "7")))


def issue_token(user_id, name, role, now: datetime | None = None) -> str:
    """Sign a token for a user; ``role`` may be a ``Role`` or its value."""
    issued_at = now or datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "name": name,
        "role": Role(role).value,
        "iat": issued_at,
        "exp": issued_at + token_lifetime(),
    }
    return jwt.encode(claims, _secret(), algorithm=_ALGORITHM)


def decode_token(token: str) -> Principal:
    try:
        claims = jwt.decode(token, _secret(), algorithms=[_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationFailed("Token is expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationFailed("Token is invalid") from None

    try:
        return Principal.for_role(claims["sub"], claims.get("name", ""), claims["role"])
    except (KeyError, ValueError):
        raise AuthenticationFailed("Token is invalid") from None


def set_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=int(token_lifetime().total_seconds()),
        httponly=True,
        secure=os.getenv("COOKIE_SECURE", "false").lower() == "true",
        samesite="lax",
    )


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(key=COOKIE_NAME, httponly=True, samesite="lax")


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------
def _extract_token(request: Request) -> str | None:
    token = request.cookies.get(COOKIE_NAME)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def current_principal(request: Request) -> Principal:
    token = _extract_token(request)
    if not token:
        raise AuthenticationFailed()

    claimed = decode_token(token)
    account = get_account_directory().find(claimed.user_id)
    if account is None:
        raise AuthenticationFailed("User not found")

    principal = Principal.for_role(account.user_id, account.name, account.role)
    structlog.contextvars.bind_contextvars(user_id=principal.user_id, role=principal.role.value)
    return principal


def requires(*permissions: Permission):
    """Dependency factory: authenticate, then demand every listed permission."""

    async def _dependency(principal: Principal = Depends(current_principal)) -> Principal:
        for permission in permissions:
            principal.require(permission)
        return principal

    return _dependency
