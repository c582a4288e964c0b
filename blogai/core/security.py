from __future__ import annotations

import hmac

from fastapi import Header, HTTPException, status

from blogai.core.config import settings


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def check_admin_token(token: str | None) -> None:
    # No configured token means no admin access at all.
    expected = settings.admin_token
    if not expected or not token or not hmac.compare_digest(token.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


def is_admin(authorization: str | None, x_admin_token: str | None) -> bool:
    try:
        check_admin_token(x_admin_token or _bearer_token(authorization))
    except HTTPException:
        return False
    return True


def require_admin(
    authorization: str | None = Header(default=None),
    x_admin_token: str | None = Header(default=None, alias="X-Admin-Token"),
) -> None:
    check_admin_token(x_admin_token or _bearer_token(authorization))
