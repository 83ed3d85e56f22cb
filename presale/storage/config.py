from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class StoreConfig:
    database_url: Optional[str]
    connect_timeout_seconds: int

    # Development toggle: keep state in process memory instead of Postgres
    use_in_memory: bool


@lru_cache(maxsize=1)
def load_store_config() -> StoreConfig:
    timeout_raw = (os.getenv("DB_CONNECT_TIMEOUT_SECONDS") or "").strip() or "10"
    try:
        timeout = int(timeout_raw)
    except ValueError:
        timeout = 10
    if timeout < 1:
        timeout = 1

    return StoreConfig(
        database_url=(os.getenv("DATABASE_URL") or "").strip() or None,
        connect_timeout_seconds=timeout,
        use_in_memory=_env_bool("PRESALE_IN_MEMORY_STORE", False),
    )
