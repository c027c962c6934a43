"""Pytest fixtures: an in-memory stand-in for the movies collection and the app wired to it."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.core.config import AppConfig

from .fakes import MOVIES, FakeCollection, FakeConnection


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(database="test_mflix", collection_name="test_movies")


@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection(MOVIES)


@pytest.fixture
def connection(collection: FakeCollection) -> FakeConnection:
    return FakeConnection(collection)


@pytest.fixture
def app(config: AppConfig, connection: FakeConnection):
    return create_app(config, connector=lambda _config: connection)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    # Entering the context runs the lifespan (connect -> ready -> shutdown).
    with TestClient(app) as c:
        yield c
