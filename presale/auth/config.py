from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

# Fixed token lifetime for admin sessions.
TOKEN_TTL_SECONDS = 60 * 60


@dataclass(frozen=True)
class AuthConfig:
    token_secret: Optional[str]  # Required for signing/verifying tokens
    token_ttl_seconds: int

    # Admin bootstrap password (consumed by init-admin only)
    admin_password: Optional[str]

    @property
    def signing_enabled(self) -> bool:
        return bool(self.token_secret)


@lru_cache(maxsize=1)
def load_auth_config() -> AuthConfig:
    """
    Load authentication configuration from environment variables.

    JWT_SECRET signs admin tokens. ADMIN_PASSWORD is read verbatim (no stripping) so the
    length check applies to exactly what gets hashed.
    """
    return AuthConfig(
        token_secret=(os.getenv("JWT_SECRET", "") or "").strip() or None,
        token_ttl_seconds=TOKEN_TTL_SECONDS,
        admin_password=os.getenv("ADMIN_PASSWORD") or None,
    )
