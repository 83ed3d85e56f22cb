from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AdminRecord:
    """The singleton admin row."""

    password_hash: str
    initialized: bool
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims carried by an admin bearer token."""

    admin: bool
    issued_at: datetime
    expires_at: datetime
