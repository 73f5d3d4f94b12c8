"""Tokenization, ranking and suggestion logic.

The planner and engine are imported from their modules directly; only the
dependency-free helpers are re-exported here.
"""

from sveltedocs.search.assembler import assemble
from sveltedocs.search.categorizer import determine_category
from sveltedocs.search.suggestions import generate_related_suggestions
from sveltedocs.search.tokenizer import ParsedQuery, extract_term_frequencies, parse_query
from sveltedocs.search.vocabulary import RELATED_TERMS, TERM_WEIGHTS, term_weight

__all__ = [
    "assemble",
    "determine_category",
    "extract_term_frequencies",
    "generate_related_suggestions",
    "parse_query",
    "ParsedQuery",
    "RELATED_TERMS",
    "TERM_WEIGHTS",
    "term_weight",
]
