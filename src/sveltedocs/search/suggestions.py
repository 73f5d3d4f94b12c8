"""Related-term suggestions for query reformulation."""

from collections.abc import Iterable, Mapping

from sveltedocs.models import RelatedSuggestion
from sveltedocs.search.vocabulary import RELATED_TERMS, term_weight

PARTIAL_MATCH_PENALTY = 0.8
DEFAULT_SUGGESTION_LIMIT = 5


def generate_related_suggestions(
    terms: Iterable[str],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
    related_terms: Mapping[str, Iterable[str]] = RELATED_TERMS,
) -> list[RelatedSuggestion]:
    """Expand query terms into related terms.

    Direct associations keep their term weight. Keys that merely overlap a
    query term (one is a substring of the other) contribute their
    associations at a reduced relevance.

    Args:
        terms: Query terms, in query order
        limit: Maximum number of suggestions to return
        related_terms: Seed term to associations mapping

    Returns:
        Suggestions sorted by descending relevance, never repeating a query term
    """
    terms = list(terms)
    query_terms = set(terms)
    seen: set[str] = set()
    suggestions: list[RelatedSuggestion] = []

    def add(candidate: str, factor: float) -> None:
        if candidate in query_terms or candidate in seen:
            return
        seen.add(candidate)
        suggestions.append(RelatedSuggestion(candidate, term_weight(candidate) * factor))

    for term in terms:
        if len(term) <= 2:
            continue

        for related in related_terms.get(term, ()):
            add(related, 1.0)

        for key, associations in related_terms.items():
            if key != term and (key in term or term in key):
                for related in associations:
                    add(related, PARTIAL_MATCH_PENALTY)

    suggestions.sort(key=lambda s: s.relevance, reverse=True)
    return suggestions[:limit]
