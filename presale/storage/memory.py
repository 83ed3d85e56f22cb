"""In-memory store for development and tests (same interface as PostgresStore)."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Optional

from presale.auth.models import AdminRecord


class InMemoryStore:
    def __init__(self) -> None:
        self.admin: Optional[AdminRecord] = None
        self.progress: Optional[int] = None
        self._lock = threading.Lock()

    def get_admin(self) -> Optional[AdminRecord]:
        return self.admin

    def upsert_admin(self, password_hash: str) -> AdminRecord:
        record = AdminRecord(
            password_hash=password_hash,
            initialized=True,
            updated_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self.admin = record
        return record

    def add_progress(self, delta: int) -> int:
        with self._lock:
            self.progress = delta if self.progress is None else self.progress + delta
            return self.progress

    def get_progress(self) -> Optional[int]:
        return self.progress

    def close(self) -> None:
        return None

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.admin = None
            self.progress = None
