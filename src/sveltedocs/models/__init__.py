"""Data models for svelte-docs."""

from sveltedocs.models.document import (
    Document,
    DocType,
    DocVariant,
    IndexedDocument,
    Package,
    RelatedSuggestion,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "Document",
    "DocType",
    "DocVariant",
    "IndexedDocument",
    "Package",
    "RelatedSuggestion",
    "SearchResponse",
    "SearchResult",
]
