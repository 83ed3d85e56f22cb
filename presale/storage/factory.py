from __future__ import annotations

import logging
from typing import Optional

from presale.storage.base import PresaleStore, StoreNotConfiguredError
from presale.storage.config import load_store_config
from presale.storage.db import ConnectionManager
from presale.storage.memory import InMemoryStore
from presale.storage.postgres import PostgresStore

logger = logging.getLogger(__name__)

_store: Optional[PresaleStore] = None


def get_store() -> PresaleStore:
    """
    Return the process-wide store so admin/progress state persists across requests.

    Nothing connects here: PostgresStore opens its connection on first use.
    """
    global _store
    if _store is not None:
        return _store

    cfg = load_store_config()
    if cfg.use_in_memory:
        logger.warning("Using in-memory store (PRESALE_IN_MEMORY_STORE); state is lost on restart")
        _store = InMemoryStore()
    elif cfg.database_url:
        _store = PostgresStore(ConnectionManager(cfg.database_url, connect_timeout=cfg.connect_timeout_seconds))
    else:
        raise StoreNotConfiguredError("Database not configured (DATABASE_URL)")
    return _store


def reset_store() -> None:
    """Close and drop the cached store (shutdown, tests, config reloads)."""
    global _store
    store, _store = _store, None
    if store is not None:
        store.close()
