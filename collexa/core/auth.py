"""
Access Control Gate - FastAPI dependencies for protected routes.

Token lookup order: `token` cookie first, then `Authorization: Bearer`.
An admin token resolves to a VirtualAdminPrincipal without touching the
database; every other token is re-checked against the users collection so a
deactivated account is rejected even while its token is still valid.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from collexa.core.config import Settings, get_settings
from collexa.core.errors import AccountDisabled, Forbidden, Unauthenticated
from collexa.core.security import ADMIN_ROLE, InvalidToken, TokenService
from collexa.db.mongodb import COLLECTIONS, get_mongo_db

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

# Bearer token extractor; missing header is not an error here, the cookie may carry it
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class StoredUserPrincipal:
    id: str
    role: str
    user: dict = field(repr=False, compare=False)
    is_admin: bool = False


@dataclass(frozen=True)
class VirtualAdminPrincipal:
    id: str
    role: str = ADMIN_ROLE
    is_admin: bool = True


Principal = Union[StoredUserPrincipal, VirtualAdminPrincipal]


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


def resolve_principal(token: Optional[str], tokens: TokenService, db: Database) -> Principal:
    """Turn a raw token into a principal or raise Unauthenticated / AccountDisabled."""
    if not token:
        raise Unauthenticated("Not authorized, token missing")

    try:
        claims = tokens.verify(token)
    except InvalidToken:
        raise Unauthenticated("Not authorized, token failed")

    if claims.role == ADMIN_ROLE:
        return VirtualAdminPrincipal(id=claims.principal_id)

    try:
        user_id = ObjectId(claims.principal_id)
    except (InvalidId, TypeError):
        raise Unauthenticated("Not authorized, token failed")

    user = db[COLLECTIONS["users"]].find_one({"_id": user_id})
    if not user:
        raise Unauthenticated("User not found")
    if user.get("is_active") is False:
        raise AccountDisabled()

    return StoredUserPrincipal(id=str(user["_id"]), role=user["role"], user=user)


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: Database = Depends(get_mongo_db),
) -> Principal:
    """
    FastAPI dependency - Get current authenticated principal.

    Usage:
        @router.get("/protected")
        async def route(principal: Principal = Depends(get_current_principal)):
            ...
    """
    return resolve_principal(extract_token(request, credentials), tokens, db)


def require_roles(*allowed: str) -> Callable:
    """Dependency factory - authenticate, then require one of `allowed` roles."""

    async def checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            logger.info("Role %s denied (allowed: %s)", principal.role, ", ".join(allowed))
            raise Forbidden()
        return principal

    return checker


require_admin = require_roles(ADMIN_ROLE)

USER_ROLES = ("student", "employer", "company")

# Any stored account; the virtual admin has no profile or applications
require_user = require_roles(*USER_ROLES)
