"""Shared fixtures: a temporary store, a fake fetcher and a small corpus."""

import pytest

from sveltedocs.config import Settings
from sveltedocs.errors import FetchError
from sveltedocs.indexer import Indexer
from sveltedocs.storage import DocStore

BASE_URL = "https://docs.test"

SVELTE_DOCS = """# Runes API

Use $state to declare reactive state. The $state rune makes state reactive.

## $derived

The $derived rune computes values. Derived values update when $state changes.

# Component lifecycle tutorial

A component mounts, updates and is destroyed. The lifecycle of a component is simple.

# Error reference

An error is thrown when the error boundary fails. Each error has a code.

## Warnings

A warning is not an error but should be fixed.
"""

KIT_DOCS = """# Routing

Routing in SvelteKit uses a filesystem-based router. Each route is a directory.

## Load functions

A load function runs on the server before the page renders.
"""

CLI_DOCS = """# sv create

Creates a new project. Use sv create to scaffold a routing-ready app.
"""


class FakeFetcher:
    """In-memory fetcher keyed by URL; missing URLs fail like a 404."""

    def __init__(self, pages: dict[str, str]):
        self.pages = pages
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(url, "Not Found (404)")
        return self.pages[url]


def package_pages(svelte: str = SVELTE_DOCS, kit: str = KIT_DOCS, cli: str = CLI_DOCS) -> dict[str, str]:
    return {
        f"{BASE_URL}/docs/svelte/llms.txt": svelte,
        f"{BASE_URL}/docs/kit/llms.txt": kit,
        f"{BASE_URL}/docs/cli/llms.txt": cli,
    }


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_path=str(tmp_path / "docs.db"), base_url=BASE_URL)


@pytest.fixture
def store(settings) -> DocStore:
    store = DocStore(settings.database_path)
    store.initialize()
    return store


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(package_pages())


@pytest.fixture
def indexer(store, fetcher, settings) -> Indexer:
    return Indexer(store, fetcher, settings)


@pytest.fixture
def populated_store(store, indexer) -> DocStore:
    indexer.initialize()
    return store
