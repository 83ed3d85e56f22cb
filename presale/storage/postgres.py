from __future__ import annotations

from typing import Optional

from presale.auth.models import AdminRecord
from presale.storage.db import ConnectionManager


class PostgresStore:
    """Singleton admin/progress rows in Postgres (row id is pinned to 1 by a CHECK constraint)."""

    def __init__(self, manager: ConnectionManager) -> None:
        self._manager = manager

    def get_admin(self) -> Optional[AdminRecord]:
        conn = self._manager.ensure_connected()
        row = conn.execute(
            """
            SELECT password_hash, initialized, updated_at
            FROM presale_admin
            WHERE id = 1
            """
        ).fetchone()
        if not row:
            return None
        password_hash, initialized, updated_at = row
        return AdminRecord(password_hash=password_hash, initialized=bool(initialized), updated_at=updated_at)

    def upsert_admin(self, password_hash: str) -> AdminRecord:
        conn = self._manager.ensure_connected()
        row = conn.execute(
            """
            INSERT INTO presale_admin (id, password_hash, initialized, updated_at)
            VALUES (1, %s, TRUE, NOW())
            ON CONFLICT (id) DO UPDATE
              SET password_hash = EXCLUDED.password_hash,
                  initialized = TRUE,
                  updated_at = EXCLUDED.updated_at
            RETURNING password_hash, initialized, updated_at
            """,
            (password_hash,),
        ).fetchone()
        if not row:
            raise ValueError("Failed to upsert admin")
        stored_hash, initialized, updated_at = row
        return AdminRecord(password_hash=stored_hash, initialized=bool(initialized), updated_at=updated_at)

    def add_progress(self, delta: int) -> int:
        conn = self._manager.ensure_connected()
        # Single statement: concurrent increments/decrements cannot lose updates.
        row = conn.execute(
            """
            INSERT INTO presale_progress (id, value)
            VALUES (1, %s)
            ON CONFLICT (id) DO UPDATE
              SET value = presale_progress.value + EXCLUDED.value
            RETURNING value
            """,
            (delta,),
        ).fetchone()
        if not row:
            raise ValueError("Failed to update progress")
        return int(row[0])

    def get_progress(self) -> Optional[int]:
        conn = self._manager.ensure_connected()
        row = conn.execute("SELECT value FROM presale_progress WHERE id = 1").fetchone()
        if not row:
            return None
        return int(row[0])

    def close(self) -> None:
        self._manager.close()
