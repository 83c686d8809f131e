"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from jobboard.core.config import get_settings
from jobboard.core.errors import Unauthenticated
from jobboard.models import UserRole

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; missing header is reported by get_current_identity
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The (user id, email, role) triple carried by a session token."""
    user_id: int
    email: str
    role: UserRole


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def token_lifetime(role: UserRole) -> timedelta:
    """24 hours for students and companies, 8 hours for admins."""
    if role == UserRole.ADMIN:
        return timedelta(minutes=settings.admin_jwt_expire_minutes)
    return timedelta(minutes=settings.jwt_expire_minutes)


def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    expire = datetime.now(timezone.utc) + (expires_delta or token_lifetime(identity.role))
    to_encode = {
        "sub": str(identity.user_id),
        "email": identity.email,
        "role": identity.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Identity:
    """Decode and verify JWT token. Raises Unauthenticated on any failure."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        return Identity(
            user_id=int(payload["sub"]),
            email=payload["email"],
            role=UserRole(payload["role"]),
        )
    except (JWTError, KeyError, TypeError, ValueError):
        raise Unauthenticated("Invalid or expired token")


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    FastAPI dependency - Get current authenticated identity.

    Usage:
        @app.get("/protected")
        async def route(identity: Identity = Depends(get_current_identity)):
            return identity
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated("Authentication required")
    return decode_token(credentials.credentials)
