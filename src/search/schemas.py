from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


Document = Dict[str, Any]
SearchResult = List[Document]


class SearchField(str, Enum):
    title = "title"
    cast = "cast"
    plot = "plot"


class SortKey(str, Enum):
    none = ""
    year = "year"
    rating = "rating"

    @property
    def path(self) -> Optional[str]:
        """Document path to sort on, or None for the collection's natural order."""
        return _SORT_PATHS[self]


_SORT_PATHS = {
    SortKey.none: None,
    SortKey.year: "year",
    SortKey.rating: "imdb.rating",
}


@dataclass(frozen=True)
class ExactMatch:
    kind: ClassVar[str] = "exact"
    query: str
    field: SearchField
    sort: SortKey = SortKey.none


@dataclass(frozen=True)
class FullText:
    kind: ClassVar[str] = "fulltext"
    query: str


@dataclass(frozen=True)
class Suggestions:
    kind: ClassVar[str] = "suggestions"
    query: str


@dataclass(frozen=True)
class Facets:
    kind: ClassVar[str] = "facets"
    query: str


SearchRequest = Union[ExactMatch, FullText, Suggestions, Facets]
