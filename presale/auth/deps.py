from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request

from presale.auth.config import load_auth_config
from presale.auth.models import TokenClaims
from presale.auth.token import decode_token


def bearer_token(request: Request) -> Optional[str]:
    """Return the token part of `Authorization: Bearer <token>`, if any."""
    header = request.headers.get("authorization") or ""
    parts = header.split()
    if len(parts) < 2:
        return None
    return parts[1]


def require_admin_token(request: Request) -> TokenClaims:
    """
    FastAPI dependency guarding admin-only routes.

    Missing token -> 401. Present but invalid/expired -> 403. Any valid token grants access.
    """
    token = bearer_token(request)
    if not token:
        # No `WWW-Authenticate`: browsers would pop a basic-auth dialog.
        raise HTTPException(status_code=401, detail="Unauthorized")

    claims = decode_token(load_auth_config(), token)
    if claims is None:
        raise HTTPException(status_code=403, detail="Invalid token")

    return claims
