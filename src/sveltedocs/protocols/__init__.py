"""Protocol definitions for extensible components."""

from sveltedocs.protocols.fetcher import DocFetcher
from sveltedocs.protocols.strategy import ScoredCandidates, SearchFilters, SearchStrategy

__all__ = ["DocFetcher", "SearchStrategy", "ScoredCandidates", "SearchFilters"]
