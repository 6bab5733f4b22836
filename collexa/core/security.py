"""
Security primitives - password hashing and session tokens.

Provides:
- Password hashing with bcrypt (passlib)
- TokenService: stateless JWT issue/verify carrying principal id + role
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from collexa.core.config import Settings

ADMIN_ROLE = "admin"

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_otp(digits: int = 6) -> str:
    """Random numeric one-time code, zero padded."""
    return str(secrets.randbelow(10 ** digits)).zfill(digits)


def hash_otp(otp: str) -> str:
    return hashlib.sha256(otp.encode("utf-8")).hexdigest()


class InvalidToken(Exception):
    """Token is malformed, has a bad signature, is expired or lacks claims."""


@dataclass(frozen=True)
class TokenClaims:
    principal_id: str
    role: str


class TokenService:
    """Issues and verifies signed, time-bounded session tokens."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.default_expiry = timedelta(minutes=settings.jwt_expire_minutes)

    def issue(self, principal_id: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.utcnow() + (expires_delta or self.default_expiry)
        claims = {"sub": str(principal_id), "role": role, "exp": expire}
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        # Every failure mode collapses into InvalidToken
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken() from exc

        principal_id = payload.get("sub")
        role = payload.get("role")
        if not principal_id or not role:
            raise InvalidToken()
        return TokenClaims(principal_id=principal_id, role=role)
