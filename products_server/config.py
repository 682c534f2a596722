# products_server/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import quote_plus

from products_server.domain.errors import ConfigError

DEFAULT_PORT = 5000
DEFAULT_MONGO_HOST = "cluster0.q9gvb.mongodb.net"


def parse_origins(raw: str) -> List[str]:
    return [o.strip().rstrip("/") for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    """
    Process configuration, read once at startup.

    DB_USER / DB_PASS are mandatory; everything else has a default so a bare
    `.env` with the two credentials is enough to boot against Atlas.
    """
    db_user: str
    db_pass: str
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    mongo_host: str = DEFAULT_MONGO_HOST
    mongo_uri_override: Optional[str] = None
    db_name: str = "ProductsKingDB"
    coll_name: str = "product"
    timeout_ms: int = 10000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        user = os.getenv("DB_USER")
        password = os.getenv("DB_PASS")
        if not user or not password:
            raise ConfigError("Database credentials are missing (DB_USER / DB_PASS).")

        return cls(
            db_user=user,
            db_pass=password,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT") or DEFAULT_PORT),
            mongo_host=os.getenv("MONGO_HOST", DEFAULT_MONGO_HOST),
            mongo_uri_override=os.getenv("MONGO_URI") or None,
            db_name=os.getenv("MONGO_DB", "ProductsKingDB"),
            coll_name=os.getenv("MONGO_COLL", "product"),
            timeout_ms=int(os.getenv("MONGO_TIMEOUT_MS", "10000")),
            cors_origins=parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def mongo_uri(self) -> str:
        if self.mongo_uri_override:
            return self.mongo_uri_override
        user = quote_plus(self.db_user)
        password = quote_plus(self.db_pass)
        return f"mongodb+srv://{user}:{password}@{self.mongo_host}/?retryWrites=true&w=majority"
