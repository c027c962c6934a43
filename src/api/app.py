from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import AppConfig
from src.core.lifecycle import Connector, LifecycleManager
from src.search import AtlasSearchStrategy, SearchService, SearchStrategy

from .errors import register_exception_handlers
from .routers.ops import router as ops_router
from .routers.search import router as search_router

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _default_strategy(config: AppConfig) -> Optional[SearchStrategy]:
    if not config.atlas_search_enabled:
        logger.info(
            "ℹ Atlas Search disabled: full-text, suggestions and facets return empty results"
        )
        return None
    return AtlasSearchStrategy(config.search_index_name, fulltext_limit=config.fulltext_limit)


def _log_banner(config: AppConfig) -> None:
    base = f"http://{config.host}:{config.port}"
    lines = [
        "",
        "╔════════════════════════════════════════╗",
        "║  MongoDB Movie Database API Started    ║",
        "╚════════════════════════════════════════╝",
        f"Server running at {base}",
        f"Health check: {base}/api/health",
    ]
    logger.info("\n".join(lines))


def create_app(
    config: AppConfig | None = None,
    *,
    connector: Connector | None = None,
    strategy: SearchStrategy | None = None,
) -> FastAPI:
    """Build the API. ``connector`` and ``strategy`` are injectable for tests.

    Also usable as `uvicorn --factory src.api.app:create_app`.
    """

    config = config or AppConfig.from_env()
    lifecycle = LifecycleManager(config, connector=connector)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Raises ConnectionFailure on a failed handshake; the server refuses to start.
        connection = lifecycle.connect()
        _log_banner(config)
        app.state.search_service = SearchService(
            connection.collection,
            strategy=strategy or _default_strategy(config),
        )
        try:
            yield
        finally:
            app.state.search_service = None
            lifecycle.shutdown()

    app = FastAPI(
        title="Movie Search API",
        description="Exact-match, full-text, autocomplete and facet search over a MongoDB movies collection.",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.lifecycle = lifecycle
    app.state.search_service = None

    # CORS: the browser front-end is opened from disk or another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount routers
    app.include_router(search_router)
    app.include_router(ops_router)

    return app
