"""End-to-end search behaviour against a populated SQLite index."""

import pytest

from sveltedocs.errors import InvalidQueryError
from sveltedocs.models import DocType, Package
from sveltedocs.search.engine import SearchEngine, parse_filters
from sveltedocs.storage import DocStore


class SpyStore:
    """Wraps a store and records every plan executed against it."""

    def __init__(self, store: DocStore):
        self.store = store
        self.plans = []

    def execute(self, candidates):
        self.plans.append(candidates)
        return self.store.execute(candidates)


@pytest.fixture
def spy(populated_store) -> SpyStore:
    return SpyStore(populated_store)


@pytest.fixture
def engine(spy) -> SearchEngine:
    return SearchEngine(spy)


def assert_sorted(results):
    scores = [r.relevance_score for r in results]
    assert scores == sorted(scores, reverse=True)


@pytest.mark.unit
class TestSearchScenarios:
    def test_phrase_only_uses_substring_matching(self, engine, spy):
        response = engine.search('"reactive state"')

        assert [r.hierarchy for r in response.results] == [["Runes API"]]
        assert all(r.relevance_score == 1.0 for r in response.results)
        assert [p.strategy for p in spy.plans] == ["phrase"]
        assert not any(p.uses_index for p in spy.plans)

    def test_sigil_query_is_weighted(self, engine, spy):
        response = engine.search("$state")

        assert [r.relevance_score for r in response.results] == [6.0, 1.5]
        assert response.results[0].hierarchy == ["Runes API"]
        assert response.results[0].category == "runes"
        assert [p.strategy for p in spy.plans] == ["weighted"]

    def test_error_type_collision_path(self, engine, spy):
        response = engine.search("error", doc_type="error")

        assert [p.strategy for p in spy.plans] == ["error"]
        assert [r.relevance_score for r in response.results] == [6.0, 1.0]
        assert all(r.type == DocType.ERROR for r in response.results)

    def test_error_without_type_filter_is_weighted(self, engine, spy):
        response = engine.search("error")

        assert [p.strategy for p in spy.plans] == ["weighted"]
        assert response.results[0].relevance_score == pytest.approx(7.2)

    def test_nonexistent_terms_fall_back_and_find_nothing(self, engine, spy):
        response = engine.search("nonexistent term")

        assert response.results == []
        assert response.related_suggestions is None
        assert [p.strategy for p in spy.plans] == ["weighted", "fallback"]

    def test_package_filter_is_strict(self, engine):
        unfiltered = engine.search("routing")
        filtered = engine.search("routing", package="kit")

        assert {r.package for r in unfiltered.results} == {Package.KIT, Package.CLI}
        assert filtered.results
        assert all(r.package == Package.KIT for r in filtered.results)

    def test_fallback_finds_substrings_the_index_missed(self, engine, spy):
        response = engine.search("system")

        assert [p.strategy for p in spy.plans] == ["weighted", "fallback"]
        assert len(response.results) == 1
        assert response.results[0].relevance_score == 1.0
        assert "filesystem" in response.results[0].content

    def test_related_suggestions_present_with_results(self, engine):
        response = engine.search("state")

        assert response.results
        assert [s.term for s in response.related_suggestions] == ["$state", "reactive", "store", "writable"]

    def test_suggestions_offered_without_results(self, engine):
        response = engine.search("store", package="cli")

        assert response.results == []
        assert response.related_suggestions


@pytest.mark.unit
class TestSearchProperties:
    @pytest.mark.parametrize(
        "query",
        [
            'state "derived values"',
            '"derived values"',
            'nonexistent "derived values"',
            'component "the lifecycle"',
        ],
    )
    def test_results_contain_every_phrase(self, engine, query):
        response = engine.search(query)

        for result in response.results:
            assert "derived values" in result.content.lower() or "the lifecycle" in result.content.lower()

    def test_phrase_narrows_term_results(self, engine):
        response = engine.search('state "derived values"')

        assert [r.hierarchy for r in response.results] == [["Runes API", "$derived"]]

    def test_type_filter(self, engine):
        response = engine.search("component", doc_type="tutorial")

        assert response.results
        assert all(r.type == DocType.TUTORIAL for r in response.results)

    def test_results_capped_and_sorted(self, store, indexer):
        sections = "\n\n".join(f"# Topic {i}\n\n" + "widget " * (i + 1) for i in range(15))
        indexer.persist(indexer.process(sections, package=Package.SVELTE))

        response = SearchEngine(store).search("widget")

        assert len(response.results) == 10
        assert_sorted(response.results)
        assert response.results[0].relevance_score == 30.0

    def test_empty_query_returns_nothing(self, engine, spy):
        response = engine.search("  ")

        assert response.results == []
        assert spy.plans == []


@pytest.mark.unit
class TestFilterValidation:
    def test_rejects_unknown_doc_type_before_store_access(self, engine, spy):
        with pytest.raises(InvalidQueryError, match="doc_type"):
            engine.search("state", doc_type="guide")
        assert spy.plans == []

    def test_rejects_unknown_package(self, engine, spy):
        with pytest.raises(InvalidQueryError, match="package"):
            engine.search("state", package="react")
        assert spy.plans == []

    def test_all_means_unfiltered(self):
        filters = parse_filters("all", None)

        assert filters.doc_type is None
        assert filters.package is None

    def test_parses_enum_values(self):
        filters = parse_filters("example", "cli")

        assert filters.doc_type == DocType.EXAMPLE
        assert filters.package == Package.CLI
