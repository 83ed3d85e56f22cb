"""Storage for the singleton admin and progress rows.

Postgres drivers are imported lazily so the in-memory store (and the unit tests) can
run without database access.
"""

from __future__ import annotations
