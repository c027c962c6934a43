"""Search application layer.

This package translates the four search request kinds used by the API into
MongoDB queries:
- Exact field match
- Full-text search
- Title autocomplete suggestions
- Facet counts (genres, ratings, release dates)

Ranking, autocomplete matching and bucketing happen inside Atlas Search; the
pipelines sent to it live in ``strategies``.
"""

from .index_definition import build_search_index_definition, ensure_search_index
from .schemas import (
    ExactMatch,
    Facets,
    FullText,
    SearchField,
    SearchRequest,
    SortKey,
    Suggestions,
)
from .service import SearchService
from .strategies import AtlasSearchStrategy, DisabledSearchStrategy, SearchStrategy

__all__ = [
    "AtlasSearchStrategy",
    "DisabledSearchStrategy",
    "ExactMatch",
    "Facets",
    "FullText",
    "SearchField",
    "SearchRequest",
    "SearchService",
    "SearchStrategy",
    "SortKey",
    "Suggestions",
    "build_search_index_definition",
    "ensure_search_index",
]
