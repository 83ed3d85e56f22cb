from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt  # PyJWT

from presale.auth.config import AuthConfig
from presale.auth.models import TokenClaims

TOKEN_ALGORITHM = "HS256"


class TokenSigningNotConfiguredError(RuntimeError):
    """JWT_SECRET is not set, so tokens can be neither issued nor verified."""


def issue_token(cfg: AuthConfig, *, now: Optional[datetime] = None) -> str:
    """
    Sign an admin token valid for cfg.token_ttl_seconds.

    `now` exists so callers (and tests) can pin the issue time.
    """
    if not cfg.signing_enabled:
        raise TokenSigningNotConfiguredError("Token signing is not configured (JWT_SECRET)")
    issued = now or datetime.now(timezone.utc)
    payload = {
        "admin": True,
        "iat": issued,
        "exp": issued + timedelta(seconds=cfg.token_ttl_seconds),
    }
    return jwt.encode(payload, cfg.token_secret, algorithm=TOKEN_ALGORITHM)


def decode_token(cfg: AuthConfig, value: str | None) -> Optional[TokenClaims]:
    """
    Verify signature and expiry. Returns None for anything that does not check out.
    """
    if not value or not cfg.signing_enabled:
        return None
    try:
        data = jwt.decode(
            value,
            cfg.token_secret,
            algorithms=[TOKEN_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError:
        return None
    if not isinstance(data, dict):
        return None
    return TokenClaims(
        admin=bool(data.get("admin")),
        issued_at=datetime.fromtimestamp(int(data["iat"]), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(int(data["exp"]), tz=timezone.utc),
    )
