from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

DEFAULT_PORT = 5000


def _parse_csv(value: str) -> List[str]:
    items = [x.strip() for x in (value or "").split(",")]
    return [x for x in items if x]


@dataclass(frozen=True)
class ServerConfig:
    port: int
    app_env: str
    cors_allow_origins: List[str]

    @property
    def production(self) -> bool:
        """In production the ASGI app is mounted by an external host; we never bind a socket."""
        return self.app_env == "production"


@lru_cache(maxsize=1)
def load_server_config() -> ServerConfig:
    port_raw = (os.getenv("PORT") or "").strip() or str(DEFAULT_PORT)
    try:
        port = int(port_raw)
    except ValueError:
        port = DEFAULT_PORT

    return ServerConfig(
        port=port,
        app_env=(os.getenv("APP_ENV") or "development").strip().lower(),
        cors_allow_origins=_parse_csv(os.getenv("CORS_ALLOW_ORIGINS", "")) or ["*"],
    )
