from __future__ import annotations

import logging
from typing import List, Optional

from pymongo import DESCENDING
from pymongo.collection import Collection

from src.core.errors import QueryFailure

from .schemas import (
    ExactMatch,
    Facets,
    FullText,
    SearchField,
    SearchRequest,
    SearchResult,
    SortKey,
    Suggestions,
)
from .strategies import DisabledSearchStrategy, Pipeline, SearchStrategy

logger = logging.getLogger(__name__)


class SearchService:
    """Query gateway over the movies collection.

    Implements:
      1) Exact field match (find + optional descending sort)
      2) Full-text search
      3) Title autocomplete
      4) Facet counts

    2-4 are delegated to a SearchStrategy; with no strategy configured they
    answer with an empty result and never contact the database.
    """

    def __init__(
        self,
        collection: Collection,
        strategy: Optional[SearchStrategy] = None,
    ):
        self.collection = collection
        self.strategy = strategy or DisabledSearchStrategy()

    def execute(self, request: SearchRequest) -> SearchResult:
        if isinstance(request, ExactMatch):
            return self.exact_match(request.query, request.field, request.sort)
        if isinstance(request, FullText):
            return self.full_text(request.query)
        if isinstance(request, Suggestions):
            return self.suggestions(request.query)
        if isinstance(request, Facets):
            return self.facets(request.query)
        raise TypeError(f"Unsupported search request: {request!r}")

    def exact_match(
        self,
        query: str,
        field: SearchField | str,
        sort: SortKey | str = SortKey.none,
    ) -> SearchResult:
        """Return every document whose ``field`` equals ``query``."""

        field = SearchField(field)
        sort = SortKey(sort or "")
        try:
            cursor = self.collection.find({field.value: query})
            if sort.path:
                cursor = cursor.sort(sort.path, DESCENDING)
            results = list(cursor)
        except Exception as exc:
            logger.error(f"✗ Exact match search error: {exc}")
            raise QueryFailure(str(exc)) from exc

        logger.info(
            f'✓ Exact match search: "{query}" in field "{field.value}" - Found {len(results)} results'
        )
        return results

    def full_text(self, query: str) -> SearchResult:
        try:
            results = self._aggregate(self.strategy.full_text_pipeline(query))
        except Exception as exc:
            logger.error(f"✗ Full text search error: {exc}")
            raise QueryFailure(str(exc)) from exc

        logger.info(f'ℹ Full text search: "{query}" - Found {len(results)} results')
        return results

    def suggestions(self, query: str) -> SearchResult:
        try:
            results = self._aggregate(self.strategy.suggestions_pipeline(query))
        except Exception as exc:
            logger.error(f"✗ Autocomplete search error: {exc}")
            raise QueryFailure(str(exc)) from exc

        logger.info(f'ℹ Autocomplete search: "{query}" - Found {len(results)} results')
        return results

    def facets(self, query: str) -> SearchResult:
        """Facet buckets for genres, ratings and release dates.

        Unlike the other operations, faults are not propagated: a failed
        $searchMeta yields an empty list.
        """

        try:
            results = self._aggregate(self.strategy.facets_pipeline(query))
        except Exception as exc:
            logger.warning(f"Facet search failed, returning no facets: {exc}")
            results = []

        logger.info(f'ℹ Facet search: "{query}" - Found {len(results)} results')
        return results

    def _aggregate(self, pipeline: Optional[Pipeline]) -> List[dict]:
        if not pipeline:
            return []
        return list(self.collection.aggregate(pipeline))
