"""Authentication dependencies for FastAPI."""

import logging
from typing import Optional

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from linkstash.config import get_settings

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

# Cache for JWKS to avoid fetching on every request
_jwks_cache: dict | None = None


async def _fetch_jwks(supabase_url: str) -> dict:
    """Fetch JWKS from Supabase."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = f"{supabase_url}/auth/v1/.well-known/jwks.json"
    async with httpx.AsyncClient() as client:
        response = await client.get(jwks_url)
        response.raise_for_status()
        _jwks_cache = response.json()
        return _jwks_cache


def _get_signing_key(token: str, jwks: dict) -> dict:
    """Get the signing key from JWKS that matches the token's kid."""
    kid = jwt.get_unverified_header(token).get("kid")

    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key

    raise JWTError("Unable to find matching key in JWKS")


async def _decode_token(token: str) -> dict:
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        )

    try:
        alg = jwt.get_unverified_header(token).get("alg", "HS256")

        if alg == "ES256":
            jwks = await _fetch_jwks(settings.supabase_url)
            payload = jwt.decode(
                token,
                _get_signing_key(token, jwks),
                algorithms=["ES256"],
                audience="authenticated",
            )
        else:
            payload = jwt.decode(
                token,
                settings.supabase_key,
                algorithms=["HS256"],
                audience="authenticated",
            )
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except httpx.HTTPError as e:
        logger.error(f"JWKS fetch failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        )

    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "user_id": payload.get("sub"),
        "email": payload.get("email"),
        "role": payload.get("role"),
    }


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Validate a Supabase JWT.

    Supports both ES256 (Supabase Auth v2, verified against JWKS) and
    legacy HS256 tokens.

    Returns:
        Dict with user_id, email, and role from token

    Raises:
        HTTPException: 401 if token is invalid or expired, 503 if the
            auth backend is not configured or unreachable
    """
    return await _decode_token(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[dict]:
    """Like :func:`get_current_user`, but anonymous requests yield ``None``.

    A token that is present but invalid is still rejected.  When Supabase
    auth is not configured the token is ignored and the caller is treated
    as anonymous.
    """
    if credentials is None:
        return None
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Bearer token ignored - Supabase auth is not configured")
        return None
    return await _decode_token(credentials.credentials)


def reset_jwks_cache() -> None:
    """Reset JWKS cache for testing."""
    global _jwks_cache
    _jwks_cache = None
