from __future__ import annotations

from typing import Optional, Protocol

from presale.auth.models import AdminRecord


class StoreNotConfiguredError(RuntimeError):
    """Neither DATABASE_URL nor the in-memory store is configured."""


class PresaleStore(Protocol):
    """
    Interface for the two singleton entities.

    Implementations must keep at most one admin and one progress record, and apply
    progress deltas atomically.
    """

    def get_admin(self) -> Optional[AdminRecord]:
        ...

    def upsert_admin(self, password_hash: str) -> AdminRecord:
        """Create or overwrite the admin with `initialized=True`."""
        ...

    def add_progress(self, delta: int) -> int:
        """
        Add `delta` to the counter, creating it with value `delta` if absent.

        Returns the new value.
        """
        ...

    def get_progress(self) -> Optional[int]:
        """Return the counter value, or None if it was never written."""
        ...

    def close(self) -> None:
        ...
