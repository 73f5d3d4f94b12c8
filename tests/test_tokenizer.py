"""Tests for query parsing and index-side term extraction."""

import pytest

from sveltedocs.search.tokenizer import ParsedQuery, extract_term_frequencies, parse_query


@pytest.mark.unit
class TestParseQuery:
    def test_extracts_phrases_in_order_and_lowercases(self):
        parsed = parse_query('"State Management" with "Two Way" binding')

        assert parsed.phrases == ("state management", "two way")
        assert parsed.terms == ("with", "binding")

    def test_drops_short_terms_and_punctuation(self):
        parsed = parse_query("how do I use on:click?")

        assert parsed.terms == ("how", "use", "click")

    def test_keeps_sigil_tokens_whole_regardless_of_length(self):
        parsed = parse_query("$state and $on")

        assert parsed.terms == ("$state", "and", "$on")

    def test_sigil_attached_to_text_is_split_out(self):
        parsed = parse_query("count=$state(0)")

        assert "$state" in parsed.terms
        assert "count" in parsed.terms

    def test_unique_terms_deduplicates_preserving_order(self):
        parsed = parse_query("store store derived store")

        assert parsed.terms == ("store", "store", "derived", "store")
        assert parsed.unique_terms == ("store", "derived")

    def test_phrase_only_query(self):
        parsed = parse_query('"state management"')

        assert parsed.phrase_only
        assert parsed.terms == ()

    def test_phrase_with_short_leftovers_is_still_phrase_only(self):
        parsed = parse_query('"state management" is it')

        assert parsed.phrase_only

    def test_empty_query(self):
        parsed = parse_query("  a b ")

        assert parsed.is_empty
        assert not parsed.phrase_only

    def test_suggestion_seeds_use_phrase_words_for_phrase_only(self):
        assert parse_query('"reactive state"').suggestion_seeds() == ["reactive", "state"]
        assert parse_query('route "x y"').suggestion_seeds() == ["route"]


@pytest.mark.unit
class TestExtractTermFrequencies:
    def test_counts_lowercased_terms_longer_than_two(self):
        terms = extract_term_frequencies("The store, the STORE and a store-like API.")

        assert terms["store"] == 3
        assert terms["the"] == 2
        assert terms["like"] == 1
        assert terms["api"] == 1
        assert "a" not in terms

    def test_sigil_terms_counted_even_when_short(self):
        terms = extract_term_frequencies("Use $on or $state; $state wins.")

        assert terms["$on"] == 1
        assert terms["$state"] == 2
        # the word part is also indexed as a plain term
        assert terms["state"] == 2
        assert "on" not in terms

    def test_empty_text(self):
        assert extract_term_frequencies("") == {}

    def test_matches_query_tokenization(self):
        query = parse_query("$derived values")
        terms = extract_term_frequencies("The $derived rune computes values.")

        assert all(term in terms for term in query.unique_terms)


@pytest.mark.unit
def test_parsed_query_is_immutable():
    parsed = ParsedQuery(terms=("a1b", "a1b"))

    assert parsed.unique_terms == ("a1b",)
    with pytest.raises(AttributeError):
        parsed.terms = ()  # type: ignore[misc]
