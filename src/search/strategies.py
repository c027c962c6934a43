"""Aggregation pipelines for the managed-search operations.

The search service never ranks, tokenizes or buckets anything itself; a
strategy only decides which pipeline (if any) is sent to MongoDB. ``None``
means "not configured": the operation answers with an empty result.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

Pipeline = List[Dict[str, Any]]

SUGGESTION_LIMIT = 8
FULLTEXT_PATHS = ["title", "plot", "fullplot"]
GENRE_BUCKETS = 3
RATING_BOUNDARIES = [0, 5, 8, 10]
RELEASE_BOUNDARIES = [
    datetime(2000, 1, 1, tzinfo=timezone.utc),
    datetime(2005, 1, 1, tzinfo=timezone.utc),
    datetime(2015, 1, 1, tzinfo=timezone.utc),
    datetime(2020, 1, 1, tzinfo=timezone.utc),
]
RELEASE_DEFAULT_BUCKET = "older"


class SearchStrategy(Protocol):
    def full_text_pipeline(self, query: str) -> Optional[Pipeline]: ...

    def suggestions_pipeline(self, query: str) -> Optional[Pipeline]: ...

    def facets_pipeline(self, query: str) -> Optional[Pipeline]: ...


class DisabledSearchStrategy:
    """Used until an Atlas Search index has been set up for the collection."""

    def full_text_pipeline(self, query: str) -> Optional[Pipeline]:
        return None

    def suggestions_pipeline(self, query: str) -> Optional[Pipeline]:
        return None

    def facets_pipeline(self, query: str) -> Optional[Pipeline]:
        return None


class AtlasSearchStrategy:
    """Pipelines for MongoDB Atlas Search ($search / $searchMeta)."""

    def __init__(self, index_name: str = "default", *, fulltext_limit: int = 20) -> None:
        self.index_name = index_name
        self.fulltext_limit = fulltext_limit

    def _text_operator(self, query: str) -> Dict[str, Any]:
        return {"text": {"query": query, "path": list(FULLTEXT_PATHS)}}

    def full_text_pipeline(self, query: str) -> Optional[Pipeline]:
        return [
            {"$search": {"index": self.index_name, **self._text_operator(query)}},
            {"$addFields": {"score": {"$meta": "searchScore"}}},
            {"$limit": self.fulltext_limit},
        ]

    def suggestions_pipeline(self, query: str) -> Optional[Pipeline]:
        return [
            {
                "$search": {
                    "index": self.index_name,
                    "autocomplete": {"query": query, "path": "title"},
                }
            },
            {"$project": {"title": 1}},
            {"$limit": SUGGESTION_LIMIT},
        ]

    def facets_pipeline(self, query: str) -> Optional[Pipeline]:
        return [
            {
                "$searchMeta": {
                    "index": self.index_name,
                    "facet": {
                        "operator": self._text_operator(query),
                        "facets": {
                            "genres": {
                                "type": "string",
                                "path": "genres",
                                "numBuckets": GENRE_BUCKETS,
                            },
                            "ratings": {
                                "type": "number",
                                "path": "imdb.rating",
                                "boundaries": list(RATING_BOUNDARIES),
                            },
                            "release_dates": {
                                "type": "date",
                                "path": "released",
                                "boundaries": list(RELEASE_BOUNDARIES),
                                "default": RELEASE_DEFAULT_BUCKET,
                            },
                        },
                    },
                }
            }
        ]
