"""JWT access tokens carrying the caller's identity and tenant."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from printpress.config import get_logger
from printpress.config.settings import AuthSettings, get_settings
from printpress.core.entities.tenant import Principal, UserRole
from printpress.core.exceptions import AuthenticationError

logger = get_logger(__name__)


def _auth_settings(settings: AuthSettings | None) -> AuthSettings:
    return settings or get_settings().auth


def create_access_token(
    principal: Principal,
    expires_delta: timedelta | None = None,
    settings: AuthSettings | None = None,
) -> str:
    """Issue a signed token for *principal*."""
    auth = _auth_settings(settings)
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=auth.access_token_expire_minutes))
    claims: dict[str, Any] = {
        "sub": principal.id,
        "email": principal.email,
        "role": principal.role.value,
        "adminId": principal.admin_id,
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(claims, auth.secret_key, algorithm=auth.algorithm)


def decode_access_token(token: str, settings: AuthSettings | None = None) -> Principal:
    """
    Verify *token* and return the principal it names.

    Raises:
        AuthenticationError: if the token is malformed, expired, badly
            signed, or names no tenant.
    """
    auth = _auth_settings(settings)
    try:
        payload = jwt.decode(token, auth.secret_key, algorithms=[auth.algorithm])
    except JWTError as e:
        logger.info("access_token_rejected", error=str(e))
        raise AuthenticationError("Invalid or expired token") from e

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Token has no subject")

    try:
        role = UserRole(payload.get("role", UserRole.USER.value))
    except ValueError as e:
        raise AuthenticationError("Token has an unknown role") from e

    principal = Principal(
        id=str(subject),
        email=payload.get("email"),
        role=role,
        admin_id=payload.get("adminId"),
    )
    if not principal.tenant_id:
        raise AuthenticationError("Token is not bound to a tenant")
    return principal
