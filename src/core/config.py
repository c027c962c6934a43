from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    """Process-wide configuration, resolved once at startup.

    Env overrides:
      - MONGODB_URI (default mongodb://localhost:27017)
      - DATABASE_NAME (default sample_mflix)
      - COLLECTION_NAME (default movies)
      - SEARCH_INDEX_NAME (default default)
      - HOST / PORT (default localhost:3000)
      - ATLAS_SEARCH_ENABLED (default false)
    """

    mongodb_uri: str = "mongodb://localhost:27017"
    database: str = "sample_mflix"
    collection_name: str = "movies"
    search_index_name: str = "default"
    host: str = "localhost"
    port: int = 3000
    atlas_search_enabled: bool = False
    fulltext_limit: int = 20
    connect_timeout_ms: int = 10000
    log_level: str = "INFO"
    cors_allow_origins: Tuple[str, ...] = ("*",)

    def __post_init__(self) -> None:
        for name in ("mongodb_uri", "database", "collection_name", "search_index_name", "host"):
            if not getattr(self, name):
                raise ConfigError(f"{name} must not be empty")
        if not (0 < self.port < 65536):
            raise ConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.fulltext_limit < 1:
            raise ConfigError("fulltext_limit must be a positive integer")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build the config from environment variables (and a .env file when reading os.environ)."""

        if environ is None:
            load_dotenv(override=False)
            environ = os.environ

        defaults = cls()

        def _get(key: str, default: str) -> str:
            value = environ.get(key)
            if value is None or not value.strip():
                return default
            return value.strip()

        origins = tuple(
            o.strip() for o in _get("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
        )

        return cls(
            mongodb_uri=_get("MONGODB_URI", defaults.mongodb_uri),
            database=_get("DATABASE_NAME", defaults.database),
            collection_name=_get("COLLECTION_NAME", defaults.collection_name),
            search_index_name=_get("SEARCH_INDEX_NAME", defaults.search_index_name),
            host=_get("HOST", defaults.host),
            port=_parse_int("PORT", _get("PORT", str(defaults.port))),
            atlas_search_enabled=_get("ATLAS_SEARCH_ENABLED", "false").lower() in _TRUE_VALUES,
            fulltext_limit=_parse_int(
                "FULLTEXT_LIMIT", _get("FULLTEXT_LIMIT", str(defaults.fulltext_limit))
            ),
            connect_timeout_ms=_parse_int(
                "CONNECT_TIMEOUT_MS",
                _get("CONNECT_TIMEOUT_MS", str(defaults.connect_timeout_ms)),
            ),
            log_level=_get("LOG_LEVEL", defaults.log_level).upper(),
            cors_allow_origins=origins or defaults.cors_allow_origins,
        )


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc
