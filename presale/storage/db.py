from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS presale_admin (
      id smallint PRIMARY KEY DEFAULT 1 CHECK (id = 1),
      password_hash text NOT NULL,
      initialized boolean NOT NULL DEFAULT FALSE,
      updated_at timestamptz NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS presale_progress (
      id smallint PRIMARY KEY DEFAULT 1 CHECK (id = 1),
      value bigint NOT NULL DEFAULT 0
    )
    """,
)


def ensure_schema(conn) -> None:
    """Create the singleton tables if they do not exist yet."""
    for stmt in SCHEMA_STATEMENTS:
        conn.execute(stmt)


def _connect(dsn: str, *, connect_timeout: int):
    # Lazy import so the in-memory store works without DB deps.
    import psycopg  # type: ignore[import-not-found]

    # Autocommit + bounded connect timeout: statements run immediately or fail fast,
    # nothing is queued while the database is unreachable.
    return psycopg.connect(dsn, autocommit=True, connect_timeout=connect_timeout)


class ConnectionManager:
    """
    Lazily opens one Postgres connection and hands the same one out for the process lifetime.

    `ensure_connected()` is idempotent and safe to call from concurrent request threads:
    the first caller opens the connection under a lock, later callers get it back. A
    connection that has been closed (server restart, network drop) is replaced on the next
    call. Connection errors propagate; there is no retry.
    """

    def __init__(
        self,
        dsn: str,
        *,
        connect_timeout: int = 10,
        connect: Optional[Callable[..., Any]] = None,
    ) -> None:
        self._dsn = dsn
        self._connect_timeout = connect_timeout
        self._connect = connect or _connect
        self._conn: Any = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        conn = self._conn
        return conn is not None and not conn.closed

    def ensure_connected(self):
        if self.connected:
            return self._conn
        with self._lock:
            if self.connected:
                return self._conn
            conn = None
            try:
                conn = self._connect(self._dsn, connect_timeout=self._connect_timeout)
                ensure_schema(conn)
            except Exception as e:
                logger.error("Postgres connection failed: %s", str(e))
                if conn is not None:
                    conn.close()
                raise
            self._conn = conn
            logger.info("Postgres connected")
            return conn

    def close(self) -> None:
        with self._lock:
            conn, self._conn = self._conn, None
        if conn is not None and not conn.closed:
            conn.close()
