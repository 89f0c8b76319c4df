"""Shared test fixtures and configuration."""

import os

import pytest

from searchx.config import Settings, get_settings
from searchx.domain.model import Document
from searchx.inmemory.searcher import InMemorySearcher


# Strip any SEARCHX_* overrides from the developer's shell before settings load
for key in [name for name in os.environ if name.upper().startswith("SEARCHX_")]:
    del os.environ[key]


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Reload settings from a clean environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def searcher(settings: Settings, request) -> InMemorySearcher:
    """Empty store with a per-test name so metric labels never collide."""
    return InMemorySearcher(settings, name=request.node.name[:60])


@pytest.fixture
def book_searcher(searcher: InMemorySearcher) -> InMemorySearcher:
    """Three-book catalogue used by the filter scenarios."""
    searcher.add_document(Document(id="1", fields={"category": "programming", "year": 2020, "price": 29.99}))
    searcher.add_document(Document(id="2", fields={"category": "programming", "year": 2021, "price": 24.99}))
    searcher.add_document(Document(id="3", fields={"category": "data", "year": 2020, "price": 39.99}))
    return searcher
