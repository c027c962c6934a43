from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["ops"])

BANNER = "MongoDB Movie Database API is running. Open index.html in your browser."


@router.get("/api/health", summary="Health check")
def health(request: Request) -> Dict[str, Any]:
    config = request.app.state.config
    return {
        "status": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "config": {
            "database": config.database,
            "collection": config.collection_name,
        },
    }


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root() -> str:
    return BANNER
