"""
Bearer-token auth for the orders API.

Tokens are HS256 JWTs carrying the user id in ``sub`` and a ``roles`` list.
Clients and staff use the same token format; only PATCH /orders is
restricted to order operators (see ``role_guard``).
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Callable, Iterable

import jwt
from fastapi import Depends, Header, HTTPException, status

from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET, settings
from shared.config.logging import auth_logger as logger


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Issue a token for ``payload`` (at least ``sub``; usually ``roles`` too).

    The lifetime defaults to JWT_ACCESS_TOKEN_EXPIRE_MINUTES. A negative
    ``ttl_seconds`` yields an already expired token.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    issued_at = int(time.time())
    claims = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> dict[str, Any]:
    """Decode ``token``, rejecting bad signatures, wrong audience and expiry with 401."""
    try:
        claims = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected bearer token", reason=str(e))
        raise _unauthorized("Invalid token")

    if not claims.get("sub"):
        raise _unauthorized("Token has no subject")
    return claims


def get_bearer_token(authorization: str | None) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if not scheme:
        raise _unauthorized("Missing Authorization header")
    if scheme != "Bearer" or not token.strip():
        raise _unauthorized("Authorization header must be 'Bearer <token>'")
    return token.strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """Dependency: claims of the caller's bearer token."""
    return verify_jwt(get_bearer_token(authorization))


def require_roles(ctx: dict[str, Any], allowed: Iterable[str]) -> None:
    """Raise 403 unless the caller holds one of ``allowed``."""
    allowed = sorted(allowed)
    if set(ctx.get("roles") or []).isdisjoint(allowed):
        logger.warning("Caller lacks order role", user_id=ctx.get("sub"), allowed=allowed)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role not permitted; expected one of {allowed}",
        )


def role_guard(allowed: Iterable[str]) -> Callable[..., dict[str, Any]]:
    """
    Dependency factory running ``require_roles`` on the caller's claims.

    Dependencies resolve before the request body is validated, so a caller
    without the role gets 403 whatever the body looks like.

    Usage:
        @router.patch("/{order_id}")
        async def patch_order(ctx = Depends(role_guard(ORDER_OPERATOR_ROLES))):
            ...
    """
    allowed = frozenset(allowed)

    def guard(ctx: dict[str, Any] = Depends(current_user_context)) -> dict[str, Any]:
        require_roles(ctx, allowed)
        return ctx

    return guard
