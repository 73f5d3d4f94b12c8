"""Protocol for documentation sources."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class DocFetcher(Protocol):
    """Protocol for anything that can download raw documentation text.

    Implementations raise FetchError on any failure so callers never
    mistake a failed download for an empty document.
    """

    def fetch(self, url: str) -> str:
        """Return the body of the resource at url."""
        ...
