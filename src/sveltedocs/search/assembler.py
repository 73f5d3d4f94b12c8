"""Final shaping of scored results."""

from sveltedocs.models import SearchResult

UNCATEGORIZED = "other"


def group_by_category(results: list[SearchResult]) -> dict[str, list[SearchResult]]:
    """Bucket results by category, keeping retrieval order inside each bucket."""
    groups: dict[str, list[SearchResult]] = {}
    for result in results:
        groups.setdefault(result.category or UNCATEGORIZED, []).append(result)
    return groups


def flatten_grouped_results(groups: dict[str, list[SearchResult]]) -> list[SearchResult]:
    """Merge category buckets back into one list ordered by descending score."""
    flat = [result for bucket in groups.values() for result in bucket]
    flat.sort(key=lambda r: r.relevance_score, reverse=True)
    return flat


def assemble(results: list[SearchResult], limit: int = 10) -> list[SearchResult]:
    return flatten_grouped_results(group_by_category(results))[:limit]
