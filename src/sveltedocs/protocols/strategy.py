"""Protocol for query planning strategies."""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from sveltedocs.models import DocType, Package
from sveltedocs.search.tokenizer import ParsedQuery


@dataclass(frozen=True)
class SearchFilters:
    """Equality constraints applied to every plan. None means unfiltered."""

    doc_type: Optional[DocType] = None
    package: Optional[Package] = None


@dataclass(frozen=True)
class ScoredCandidates:
    """A retrieval plan: SQL yielding (id, content, type, package, hierarchy, score)."""

    strategy: str
    sql: str
    args: tuple[Any, ...]
    uses_index: bool


@runtime_checkable
class SearchStrategy(Protocol):
    """One way of turning a parsed query into scored candidates.

    Strategies only build plans; executing them is the store's job, which
    keeps every strategy testable without a database.
    """

    name: str

    def applies(self, query: ParsedQuery, filters: SearchFilters) -> bool:
        """Check whether this strategy handles the query's shape."""
        ...

    def plan(self, query: ParsedQuery, filters: SearchFilters) -> Optional[ScoredCandidates]:
        """Build the plan, or None when there is nothing to search for."""
        ...
