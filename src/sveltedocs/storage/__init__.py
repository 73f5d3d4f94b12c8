"""SQLite storage for documents and the term index."""

from sveltedocs.storage.store import DocStore

__all__ = ["DocStore"]
