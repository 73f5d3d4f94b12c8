"""Tests for content categorization."""

import pytest

from sveltedocs.search.categorizer import determine_category


@pytest.mark.unit
class TestDetermineCategory:
    @pytest.mark.parametrize(
        "content, expected",
        [
            ("Runes are the new reactivity primitives", "runes"),
            ("Call $effect after mount", "runes"),
            ("A Component has a LIFECYCLE", "components"),
            ("Client-side navigation between pages", "routing"),
            ("SvelteKit apps", "routing"),
            ("Set a breakpoint to debug it", "error"),
            ("Plain text about nothing", None),
        ],
    )
    def test_keyword_categories(self, content, expected):
        assert determine_category(content) == expected

    def test_priority_order_first_match_wins(self):
        content = "A route component that uses $state and may throw an error"

        assert determine_category(content) == "runes"

    def test_components_beat_routing_and_error(self):
        assert determine_category("component route error") == "components"
