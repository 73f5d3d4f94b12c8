"""Exception hierarchy for svelte-docs."""


class SvelteDocsError(Exception):
    """Base class for all svelte-docs failures."""


class FetchError(SvelteDocsError):
    """A documentation source could not be downloaded."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch docs from {url}: {reason}")
        self.url = url
        self.reason = reason


class IndexingError(SvelteDocsError):
    """A write batch failed and was rolled back."""


class InitializationError(SvelteDocsError):
    """Mandatory package documentation could not be indexed."""


class InvalidQueryError(SvelteDocsError, ValueError):
    """A search request used a filter outside the allowed values."""


class DocumentNotFoundError(SvelteDocsError, LookupError):
    """An operation referenced a document id that is not stored."""

    def __init__(self, doc_id: str):
        super().__init__(f"Document not found: {doc_id}")
        self.doc_id = doc_id
