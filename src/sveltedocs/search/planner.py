"""Query planning: pick a retrieval strategy from the shape of the query.

States, in selection order:

1. error collision: ``doc_type=error`` and the only term is ``error``
2. weighted terms: at least one term, optional phrases
3. phrase only: phrases and no terms
4. substring fallback: only after 1 or 2 produced nothing

Results with equal scores come back in whatever order SQLite yields them.
That order is not guaranteed and must not be relied on.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from sveltedocs.models import DocType
from sveltedocs.protocols import ScoredCandidates, SearchFilters, SearchStrategy
from sveltedocs.search.tokenizer import SIGIL, ParsedQuery
from sveltedocs.search.vocabulary import TERM_WEIGHTS, is_weighted, term_weight

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

RESULT_COLUMNS = "d.id, d.content, d.type, d.package, d.hierarchy"

# Substring fallback weights
SIGIL_FALLBACK_WEIGHT = 1.5
PLAIN_FALLBACK_WEIGHT = 1.0
PHRASE_FALLBACK_WEIGHT = 2.0
MAX_PLAIN_FALLBACK_TERMS = 3
MIN_PLAIN_FALLBACK_LENGTH = 5


class CandidateExecutor(Protocol):
    def execute(self, candidates: ScoredCandidates) -> list[dict]:
        ...


def contains(column: str = "d.content") -> str:
    """SQL predicate for a case-insensitive literal substring match."""
    return f"instr(LOWER({column}), ?) > 0"


def filter_clauses(phrases: tuple[str, ...], filters: SearchFilters) -> tuple[list[str], list[Any]]:
    """Build the phrase, type and package constraints shared by every plan."""
    clauses: list[str] = []
    args: list[Any] = []

    for phrase in phrases:
        clauses.append(contains())
        args.append(phrase)

    if filters.doc_type is not None:
        clauses.append("d.type = ?")
        args.append(str(filters.doc_type))

    if filters.package is not None:
        clauses.append("d.package = ?")
        args.append(str(filters.package))

    return clauses, args


def _where(clauses: list[str]) -> str:
    return " AND ".join(clauses) if clauses else "1 = 1"


class PhraseOnlyStrategy:
    """Constant score for every document containing all phrases."""

    name = "phrase"

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self.limit = limit

    def applies(self, query: ParsedQuery, filters: SearchFilters) -> bool:
        return query.phrase_only

    def plan(self, query: ParsedQuery, filters: SearchFilters) -> Optional[ScoredCandidates]:
        clauses, args = filter_clauses(query.phrases, filters)
        sql = f"""SELECT {RESULT_COLUMNS}, 1.0 AS score
                  FROM docs AS d
                  WHERE {_where(clauses)}
                  LIMIT ?"""
        return ScoredCandidates(self.name, sql, (*args, self.limit), uses_index=False)


class WeightedTermStrategy:
    """Sum of frequency x section importance x term weight over index hits.

    A document qualifies when any query term is indexed for it (OR across
    terms); phrases are still AND requirements on the raw content.
    """

    name = "weighted"

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self.limit = limit

    def applies(self, query: ParsedQuery, filters: SearchFilters) -> bool:
        return bool(query.unique_terms)

    def plan(self, query: ParsedQuery, filters: SearchFilters) -> Optional[ScoredCandidates]:
        if not query.unique_terms:
            return None

        weight_rows = ", ".join("(?, ?)" for _ in query.unique_terms)
        weight_args: list[Any] = []
        for term in query.unique_terms:
            weight_args.extend((term, term_weight(term)))

        clauses, args = filter_clauses(query.phrases, filters)
        sql = f"""WITH weights(term, weight) AS (VALUES {weight_rows})
                  SELECT {RESULT_COLUMNS},
                         SUM(i.frequency * i.section_importance * w.weight) AS score
                  FROM search_index AS i
                  JOIN weights AS w ON w.term = i.term
                  JOIN docs AS d ON d.id = i.doc_id
                  WHERE {_where(clauses)}
                  GROUP BY d.id
                  HAVING score > 0
                  ORDER BY score DESC
                  LIMIT ?"""
        return ScoredCandidates(self.name, sql, (*weight_args, *args, self.limit), uses_index=True)


class ErrorCollisionStrategy:
    """Direct lookup for the word "error" among error documents.

    The term and the type filter share a name, so this case skips the
    generic weighted plan and scores by frequency x section importance.
    """

    name = "error"
    TERM = "error"

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self.limit = limit

    def applies(self, query: ParsedQuery, filters: SearchFilters) -> bool:
        return filters.doc_type == DocType.ERROR and query.unique_terms == (self.TERM,)

    def plan(self, query: ParsedQuery, filters: SearchFilters) -> Optional[ScoredCandidates]:
        clauses, args = filter_clauses(query.phrases, filters)
        clauses.insert(0, "i.term = ?")
        args.insert(0, self.TERM)
        sql = f"""SELECT {RESULT_COLUMNS},
                         i.frequency * i.section_importance AS score
                  FROM search_index AS i
                  JOIN docs AS d ON d.id = i.doc_id
                  WHERE {_where(clauses)}
                  ORDER BY score DESC
                  LIMIT ?"""
        return ScoredCandidates(self.name, sql, (*args, self.limit), uses_index=True)


def fallback_weights(query: ParsedQuery) -> list[tuple[str, float]]:
    """Weighted substrings scored by the fallback plan."""
    weighted: list[tuple[str, float]] = []
    plain: list[str] = []

    for term in query.unique_terms:
        if SIGIL in term or is_weighted(term):
            weighted.append((term, TERM_WEIGHTS.get(term, SIGIL_FALLBACK_WEIGHT)))
        elif len(term) >= MIN_PLAIN_FALLBACK_LENGTH and len(plain) < MAX_PLAIN_FALLBACK_TERMS:
            plain.append(term)

    weighted.extend((term, PLAIN_FALLBACK_WEIGHT) for term in plain)
    weighted.extend((phrase, PHRASE_FALLBACK_WEIGHT) for phrase in query.phrases)
    return weighted


class SubstringFallbackStrategy:
    """Score raw content by substring hits when the term index found nothing.

    Tokenization boundaries can hide a term from the index (punctuation
    next to it, for example); matching substrings trades precision for
    recall.
    """

    name = "fallback"

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self.limit = limit

    def applies(self, query: ParsedQuery, filters: SearchFilters) -> bool:
        return not query.is_empty

    def plan(self, query: ParsedQuery, filters: SearchFilters) -> Optional[ScoredCandidates]:
        items = fallback_weights(query)
        if not items:
            return None

        score_expr = " + ".join(f"(CASE WHEN {contains()} THEN ? ELSE 0 END)" for _ in items)
        score_args: list[Any] = []
        for text, weight in items:
            score_args.extend((text, weight))

        any_match = " OR ".join(contains() for _ in items)
        match_args = [text for text, _ in items]

        clauses, args = filter_clauses(query.phrases, filters)
        clauses.insert(0, f"({any_match})")
        sql = f"""SELECT {RESULT_COLUMNS}, ({score_expr}) AS score
                  FROM docs AS d
                  WHERE {_where(clauses)}
                  ORDER BY score DESC
                  LIMIT ?"""
        return ScoredCandidates(
            self.name,
            sql,
            (*score_args, *match_args, *args, self.limit),
            uses_index=False,
        )


@dataclass
class PlanOutcome:
    """Rows produced for a query and the strategies that were tried."""

    rows: list[dict] = field(default_factory=list)
    strategy: Optional[str] = None
    attempted: list[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.strategy == SubstringFallbackStrategy.name


class QueryPlanner:
    """Selects a primary strategy and falls back to substring scoring."""

    def __init__(
        self,
        primary: Optional[list[SearchStrategy]] = None,
        fallback: Optional[SearchStrategy] = None,
        limit: int = DEFAULT_LIMIT,
    ):
        self.primary = primary or [
            ErrorCollisionStrategy(limit),
            WeightedTermStrategy(limit),
            PhraseOnlyStrategy(limit),
        ]
        self.fallback = fallback or SubstringFallbackStrategy(limit)

    def select(self, query: ParsedQuery, filters: SearchFilters) -> Optional[SearchStrategy]:
        for strategy in self.primary:
            if strategy.applies(query, filters):
                return strategy
        return None

    def run(
        self,
        query: ParsedQuery,
        filters: SearchFilters,
        executor: CandidateExecutor,
    ) -> PlanOutcome:
        """Plan and execute a query against the store.

        Args:
            query: Parsed query
            filters: Type and package constraints
            executor: Object able to execute ScoredCandidates (the store)

        Returns:
            PlanOutcome with the scored rows and the strategy that produced them
        """
        outcome = PlanOutcome()
        strategy = self.select(query, filters)
        if strategy is None:
            return outcome

        candidates = strategy.plan(query, filters)
        outcome.attempted.append(strategy.name)
        if candidates is not None:
            outcome.rows = executor.execute(candidates)
            outcome.strategy = strategy.name

        if outcome.rows or not self._may_fall_back(strategy, query, filters):
            return outcome

        logger.debug(f"No index hits for {query.unique_terms}, trying substring fallback")
        candidates = self.fallback.plan(query, filters)
        outcome.attempted.append(self.fallback.name)
        if candidates is not None:
            outcome.rows = executor.execute(candidates)
            outcome.strategy = self.fallback.name
        return outcome

    def _may_fall_back(self, strategy: SearchStrategy, query: ParsedQuery, filters: SearchFilters) -> bool:
        term_based = strategy.name in (WeightedTermStrategy.name, ErrorCollisionStrategy.name)
        return term_based and self.fallback.applies(query, filters)
