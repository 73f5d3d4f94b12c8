"""Tests for the static weight and related-term tables."""

import pytest

from sveltedocs.search.vocabulary import RELATED_TERMS, TERM_WEIGHTS, term_weight


@pytest.mark.unit
class TestTermWeights:
    def test_known_weights(self):
        assert term_weight("$state") == 1.5
        assert term_weight("routing") == 1.4
        assert term_weight("component") == 1.3
        assert term_weight("error") == 1.2

    def test_unknown_term_defaults_to_one(self):
        assert term_weight("banana") == 1.0

    def test_weights_stay_in_range(self):
        assert all(1.2 <= w <= 1.5 for w in TERM_WEIGHTS.values())

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            TERM_WEIGHTS["new"] = 2.0  # type: ignore[index]
        with pytest.raises(TypeError):
            RELATED_TERMS["new"] = ("x",)  # type: ignore[index]
