from __future__ import annotations

import logging
from typing import Any, List, Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field

from src.api.errors import REQUEST_EXAMPLES, ApiError
from src.core.errors import QueryFailure
from src.search import (
    ExactMatch,
    Facets,
    FullText,
    SearchField,
    SearchRequest,
    SearchService,
    SortKey,
    Suggestions,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])

MIN_SUGGESTION_LENGTH = 2


class ExactSearchRequest(BaseModel):
    query: Optional[str] = Field(None, description="Value the field must equal.")
    field: Optional[str] = Field(None, description="One of: title, cast, plot.")
    sort: Optional[str] = Field(
        None, description="Optional descending sort: '', 'year' or 'rating'."
    )


class QueryRequest(BaseModel):
    query: Optional[str] = Field(None, description="Free-text search query.")


def get_search_service(request: Request) -> SearchService:
    """Search endpoints only answer once the database connection is ready."""

    lifecycle = getattr(request.app.state, "lifecycle", None)
    service = getattr(request.app.state, "search_service", None)
    if lifecycle is None or not lifecycle.is_ready or service is None:
        raise ApiError("Service is not ready", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return service


def _to_json(results: List[Any]) -> Any:
    return jsonable_encoder(results, custom_encoder={ObjectId: str})


def _run(service: SearchService, search_request: SearchRequest) -> List[dict]:
    try:
        return service.execute(search_request)
    except QueryFailure as exc:
        raise ApiError(
            str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ) from exc


@router.post("/search/exact", summary="Exact field match")
def search_exact(
    body: ExactSearchRequest,
    service: SearchService = Depends(get_search_service),
) -> Any:
    """Documents whose ``field`` equals ``query``, optionally sorted descending."""

    if not body.query or not body.field:
        raise ApiError(
            "Query and field are required",
            example=REQUEST_EXAMPLES["/api/search/exact"],
        )
    try:
        field = SearchField(body.field)
    except ValueError as exc:
        raise ApiError(
            f"Field must be one of: {', '.join(f.value for f in SearchField)}",
            example=REQUEST_EXAMPLES["/api/search/exact"],
        ) from exc
    try:
        sort = SortKey(body.sort or "")
    except ValueError as exc:
        raise ApiError(
            "Sort must be one of: year, rating (or empty)",
            example=REQUEST_EXAMPLES["/api/search/exact"],
        ) from exc

    results = _run(service, ExactMatch(query=body.query, field=field, sort=sort))
    return _to_json(results)


@router.post(
    "/suggestions", summary="Title autocomplete suggestions", response_model=None
)
def suggestions(
    body: QueryRequest,
    service: SearchService = Depends(get_search_service),
) -> List[Any]:
    if not body.query or len(body.query) < MIN_SUGGESTION_LENGTH:
        raise ApiError(f"Query must be at least {MIN_SUGGESTION_LENGTH} characters")

    results = _run(service, Suggestions(query=body.query))
    titles = [doc.get("title") for doc in results]
    logger.info(f'✓ Autocomplete suggestions: "{body.query}" - Found {len(titles)} suggestions')
    return _to_json(titles)


@router.post("/search/fulltext", summary="Full-text search")
def search_fulltext(
    body: QueryRequest,
    service: SearchService = Depends(get_search_service),
) -> Any:
    if not body.query:
        raise ApiError(
            "Query is required", example=REQUEST_EXAMPLES["/api/search/fulltext"]
        )

    return _to_json(_run(service, FullText(query=body.query)))


@router.post("/search/facets", summary="Facet counts for genres, ratings and release dates")
def search_facets(
    body: QueryRequest,
    service: SearchService = Depends(get_search_service),
) -> Any:
    """Facet buckets; an empty list when facets are unavailable."""

    if not body.query:
        raise ApiError(
            "Query is required", example=REQUEST_EXAMPLES["/api/search/facets"]
        )

    return _to_json(_run(service, Facets(query=body.query)))
