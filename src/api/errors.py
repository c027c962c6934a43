"""JSON error bodies for the API: ``{"error": ...}`` plus an optional example payload."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Example request bodies echoed back on validation failures, keyed by path.
REQUEST_EXAMPLES: Dict[str, Dict[str, Any]] = {
    "/api/search/exact": {"query": "The Matrix", "field": "title", "sort": "year"},
    "/api/search/fulltext": {"query": "action adventure"},
    "/api/search/facets": {"query": "action"},
    "/api/suggestions": {"query": "The God"},
}


class ApiError(Exception):
    """Raised by endpoint code to produce a JSON error response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        example: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.example = example


def error_body(message: str, example: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if example is not None:
        body["example"] = example
    return body


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"API error on {request.url.path}: {exc.message}")
    else:
        logger.debug(f"Rejected request to {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.example))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies (bad JSON, wrong types) are 400s like any other missing field."""

    logger.debug(f"Malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Malformed request body", REQUEST_EXAMPLES.get(request.url.path)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
