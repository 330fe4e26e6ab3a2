# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Verifies Supabase access tokens. The mobile app signs in with Supabase Auth
# and sends the session's access token as a Bearer header (or, for the karma
# WebSocket, as a ?token= query parameter).
#
# Supports both:
# - ES256 (Supabase JWT signing keys) via the project's JWKS endpoint
# - HS256 (legacy Supabase JWT secret)
# =============================================================================

import logging
import time
from typing import Any
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AuthUser

logger = logging.getLogger(__name__)

security = HTTPBearer()
security_optional = HTTPBearer(auto_error=False)

JWKS_CACHE_TTL = 3600  # 1 hour
TOKEN_AUDIENCE = "authenticated"

_jwks_cache: dict[str, Any] = {}
_jwks_cache_time: float = 0


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _fetch_jwks() -> dict[str, Any]:
    """Fetch the Supabase JWKS, cached for an hour."""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    jwks_url = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"
    try:
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        return _jwks_cache or {"keys": []}

    _jwks_cache = response.json()
    _jwks_cache_time = now
    logger.debug(f"Fetched JWKS from {jwks_url}")
    return _jwks_cache


def _legacy_secret_key() -> tuple[str, str]:
    """HS256 key pair. Refused when no JWT secret is configured."""
    if not settings.SUPABASE_JWT_SECRET:
        logger.warning("HS256 token rejected: SUPABASE_JWT_SECRET is not set")
        raise _unauthorized("Invalid token: HS256 tokens are not accepted")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Pick the verification key for a token from its header.

    Returns:
        Tuple of (key, algorithm)

    Raises:
        HTTPException: 401 if the token needs the legacy secret and none is set
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return _legacy_secret_key()

    alg = header.get("alg", "HS256")
    kid = header.get("kid")

    if alg == "HS256":
        return _legacy_secret_key()

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"No JWKS key for alg={alg}, kid={kid}, falling back to HS256")
    return _legacy_secret_key()


def decode_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if not token:
        raise _unauthorized("Missing token")

    try:
        signing_key, algorithm = _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise _unauthorized("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_uuid, email=payload.get("email"))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Authenticated user from the Authorization: Bearer header.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return decode_token(credentials.credentials)


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_optional)
) -> AuthUser | None:
    """
    Authenticated user, or None for anonymous visitors.

    The public project page uses this to add the viewer's follow state when
    they are signed in. An invalid token is treated as no token.
    """
    if credentials is None:
        return None

    try:
        return decode_token(credentials.credentials)
    except HTTPException:
        return None
