"""Query surface: tokenize, plan, execute, categorize, assemble."""

import json
import logging
from typing import Optional

from sveltedocs.errors import InvalidQueryError
from sveltedocs.models import DocType, Package, SearchResponse, SearchResult
from sveltedocs.protocols import SearchFilters
from sveltedocs.search.assembler import assemble
from sveltedocs.search.categorizer import determine_category
from sveltedocs.search.planner import DEFAULT_LIMIT, CandidateExecutor, QueryPlanner
from sveltedocs.search.suggestions import DEFAULT_SUGGESTION_LIMIT, generate_related_suggestions
from sveltedocs.search.tokenizer import parse_query

logger = logging.getLogger(__name__)

ALL_TYPES = "all"


def parse_filters(doc_type: Optional[str] = ALL_TYPES, package: Optional[str] = None) -> SearchFilters:
    """Validate raw filter values before anything touches the store.

    Raises:
        InvalidQueryError: If a value is outside its enumeration
    """
    resolved_type: Optional[DocType] = None
    if doc_type not in (None, ALL_TYPES):
        try:
            resolved_type = DocType(doc_type)
        except ValueError:
            allowed = ", ".join([*(t.value for t in DocType), ALL_TYPES])
            raise InvalidQueryError(f"Invalid doc_type {doc_type!r}: expected one of {allowed}") from None

    resolved_package: Optional[Package] = None
    if package is not None:
        try:
            resolved_package = Package(package)
        except ValueError:
            allowed = ", ".join(p.value for p in Package)
            raise InvalidQueryError(f"Invalid package {package!r}: expected one of {allowed}") from None

    return SearchFilters(doc_type=resolved_type, package=resolved_package)


def row_to_result(row: dict) -> SearchResult:
    content = row["content"]
    return SearchResult(
        content=content,
        type=DocType(row["type"]),
        package=Package(row["package"]) if row["package"] else None,
        hierarchy=json.loads(row["hierarchy"]) if row["hierarchy"] else None,
        relevance_score=float(row["score"]),
        category=determine_category(content),
    )


class SearchEngine:
    """Runs ranked keyword and phrase queries against the term index."""

    def __init__(
        self,
        store: CandidateExecutor,
        planner: Optional[QueryPlanner] = None,
        result_limit: int = DEFAULT_LIMIT,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ):
        self.store = store
        self.result_limit = result_limit
        self.suggestion_limit = suggestion_limit
        self.planner = planner or QueryPlanner(limit=result_limit)

    def search(
        self,
        query: str,
        doc_type: Optional[str] = ALL_TYPES,
        package: Optional[str] = None,
    ) -> SearchResponse:
        """Search the documentation.

        Args:
            query: Keywords, $runes and "quoted phrases"
            doc_type: api, tutorial, example, error or all
            package: svelte, kit or cli; None searches every package

        Returns:
            SearchResponse with at most result_limit results sorted by
            descending relevance, plus related suggestions when any exist

        Raises:
            InvalidQueryError: If doc_type or package is not recognised
        """
        filters = parse_filters(doc_type, package)
        parsed = parse_query(query)

        outcome = self.planner.run(parsed, filters, self.store)
        logger.debug(
            f"Query {query!r}: {len(outcome.rows)} rows via {outcome.strategy} (tried {outcome.attempted})"
        )

        results = assemble([row_to_result(row) for row in outcome.rows], self.result_limit)
        suggestions = generate_related_suggestions(parsed.suggestion_seeds(), limit=self.suggestion_limit)

        return SearchResponse(
            results=results,
            related_suggestions=suggestions or None,
        )
