import pytest
from pymongo import DESCENDING
from pymongo.errors import OperationFailure

from src.core.errors import QueryFailure
from src.search import (
    AtlasSearchStrategy,
    ExactMatch,
    Facets,
    FullText,
    SearchField,
    SearchService,
    SortKey,
    Suggestions,
)

from .fakes import MOVIES, FakeCollection


@pytest.fixture
def service(collection):
    return SearchService(collection)


@pytest.fixture
def atlas_service(collection):
    return SearchService(collection, strategy=AtlasSearchStrategy("movies_search"))


def test_exact_match_returns_only_equal_documents(service):
    results = service.exact_match("The Matrix", "title")
    assert results == [
        {"title": "The Matrix", "year": 1999, "imdb": {"rating": 8.7}, "cast": ["Keanu Reeves"]}
    ]


def test_exact_match_without_sort_keeps_natural_order(service, collection):
    results = service.exact_match("Keanu Reeves", SearchField.cast)
    assert [m["title"] for m in results] == [
        "The Matrix",
        "The Matrix Reloaded",
        "John Wick",
        "Speed",
    ]
    assert collection.last_cursor.sort_spec is None


def test_exact_match_sorts_descending_by_year(service, collection):
    results = service.exact_match("Keanu Reeves", "cast", "year")
    years = [m["year"] for m in results]
    assert years == sorted(years, reverse=True)
    assert collection.last_cursor.sort_spec == ("year", DESCENDING)


def test_exact_match_rating_sort_uses_imdb_rating(service, collection):
    results = service.exact_match("Keanu Reeves", "cast", SortKey.rating)
    ratings = [m["imdb"]["rating"] for m in results]
    assert ratings == sorted(ratings, reverse=True)
    assert collection.last_cursor.sort_spec == ("imdb.rating", DESCENDING)


def test_exact_match_no_hits(service):
    assert service.exact_match("Nonexistent", "title") == []


def test_exact_match_wraps_driver_errors(service, collection):
    collection.error = OperationFailure("bad filter")
    with pytest.raises(QueryFailure, match="bad filter") as excinfo:
        service.exact_match("The Matrix", "title")
    assert isinstance(excinfo.value.__cause__, OperationFailure)


def test_unconfigured_search_operations_return_empty_without_querying(service, collection):
    assert service.full_text("matrix") == []
    assert service.suggestions("ma") == []
    assert service.facets("matrix") == []
    assert collection.calls == 0


def test_full_text_sends_strategy_pipeline(atlas_service, collection):
    collection.aggregate_results = [{"title": "The Matrix", "score": 3.2}]

    assert atlas_service.full_text("matrix") == [{"title": "The Matrix", "score": 3.2}]
    stage = collection.pipelines[0][0]["$search"]
    assert stage["index"] == "movies_search"
    assert stage["text"]["query"] == "matrix"


def test_full_text_and_suggestions_propagate_failures(atlas_service, collection):
    collection.error = OperationFailure("index not found")
    with pytest.raises(QueryFailure):
        atlas_service.full_text("matrix")
    with pytest.raises(QueryFailure):
        atlas_service.suggestions("ma")


def test_facets_swallow_failures(atlas_service, collection):
    collection.error = OperationFailure("$searchMeta is not allowed")
    assert atlas_service.facets("matrix") == []
    assert len(collection.pipelines) == 1


def test_execute_dispatches_on_request_kind(atlas_service, collection):
    collection.aggregate_results = [{"title": "The Matrix"}]

    assert atlas_service.execute(ExactMatch("Heat", SearchField.title)) == [MOVIES[4]]
    assert atlas_service.execute(FullText("matrix")) == [{"title": "The Matrix"}]
    assert atlas_service.execute(Suggestions("ma")) == [{"title": "The Matrix"}]
    assert atlas_service.execute(Facets("matrix")) == [{"title": "The Matrix"}]
    assert "$searchMeta" in collection.pipelines[-1][0]


def test_execute_rejects_unknown_request(service):
    with pytest.raises(TypeError):
        service.execute("matrix")  # type: ignore[arg-type]


def test_service_works_against_any_collection():
    service = SearchService(FakeCollection([{"title": "Alien", "year": 1979}]))
    assert service.exact_match("Alien", "title") == [{"title": "Alien", "year": 1979}]
