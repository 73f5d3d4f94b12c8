"""Builds the term index from fetched documentation."""

import logging
import math
import sqlite3
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional

from sveltedocs.chunkers import SectionChunker
from sveltedocs.config import Settings
from sveltedocs.errors import DocumentNotFoundError, FetchError, IndexingError, InitializationError
from sveltedocs.models import DocVariant, IndexedDocument, Package
from sveltedocs.protocols import DocFetcher
from sveltedocs.search.tokenizer import extract_term_frequencies
from sveltedocs.sources import ALL_SOURCES, DocSource
from sveltedocs.storage import DocStore

logger = logging.getLogger(__name__)

REQUIRED_SOURCES = tuple(source for source in ALL_SOURCES if source.mandatory)
OPTIONAL_SOURCES = tuple(source for source in ALL_SOURCES if not source.mandatory)


class Indexer:
    """Turns llms.txt text into stored sections and term frequencies."""

    def __init__(
        self,
        store: DocStore,
        fetcher: DocFetcher,
        settings: Optional[Settings] = None,
        chunker: Optional[SectionChunker] = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.settings = settings or Settings()
        self.chunker = chunker or SectionChunker()

    def process(
        self,
        text: str,
        package: Optional[Package] = None,
        variant: Optional[DocVariant] = None,
    ) -> list[IndexedDocument]:
        """Split text into sections and count the terms of each."""
        return [
            IndexedDocument(document=doc, terms=extract_term_frequencies(doc.content))
            for doc in self.chunker.chunk(text, package, variant)
        ]

    def persist(self, docs: list[IndexedDocument]) -> None:
        """Write documents in batches, one transaction per batch.

        A failing batch is rolled back and the error re-raised; batches
        committed before it stay committed.

        Raises:
            IndexingError: If a batch could not be written
        """
        batch_size = self.settings.doc_batch_size
        total = math.ceil(len(docs) / batch_size)

        for number, start in enumerate(range(0, len(docs), batch_size), 1):
            batch = docs[start : start + batch_size]
            try:
                self.store.write_batch(batch, self.settings.index_batch_size)
            except sqlite3.Error as exc:
                logger.error(f"Error during batch {number} of {total}, rolled back: {exc}")
                raise IndexingError(f"Batch {number} of {total} failed and was rolled back: {exc}") from exc
            logger.info(f"Processed batch {number} of {total}")

    def index_document(self, doc_id: str, content: str, section_importance: float = 1.0) -> dict[str, int]:
        """Replace the term index of one stored document.

        Repeating the call with the same content leaves the same entries.

        Args:
            doc_id: Id of a stored document
            content: Text to extract terms from
            section_importance: Weight stored with every entry

        Returns:
            The term frequencies written

        Raises:
            DocumentNotFoundError: If doc_id is not stored
            IndexingError: If the write failed
        """
        if not self.store.document_exists(doc_id):
            raise DocumentNotFoundError(doc_id)

        terms = extract_term_frequencies(content)
        try:
            self.store.replace_index_entries(doc_id, terms, section_importance)
        except sqlite3.Error as exc:
            raise IndexingError(f"Failed to index {doc_id}: {exc}") from exc
        return terms

    def fetch_source(self, source: DocSource) -> str:
        return self.fetcher.fetch(source.url(self.settings.base_url))

    def index_source(self, source: DocSource, text: Optional[str] = None) -> list[IndexedDocument]:
        """Fetch (unless text is given), process and store one source.

        Stored sections of the source that the new text no longer contains
        are deleted once every batch has been written.

        Returns:
            The stored documents; empty when the source had no content
        """
        start = time.perf_counter()
        if text is None:
            text = self.fetch_source(source)

        docs = self.process(text, source.package, source.variant)
        if not docs:
            logger.warning(f"No documents processed for {source.label}, skipping")
            return []

        logger.info(f"Processed {len(docs)} documents for {source.label}")
        self.persist(docs)
        try:
            removed = self.store.prune_source({d.document.id for d in docs}, source.package, source.variant)
        except sqlite3.Error as exc:
            raise IndexingError(f"Failed to remove outdated sections of {source.label}: {exc}") from exc
        if removed:
            logger.info(f"Removed {removed} sections no longer published in {source.label}")
        logger.info(f"Indexing {source.label} took {(time.perf_counter() - start) * 1000:.0f}ms")
        return docs

    def initialize(self) -> int:
        """Populate an empty store with every source.

        Package docs are mandatory; root variants are indexed when
        available. A store that already holds documents is left alone.

        Returns:
            Number of stored documents

        Raises:
            InitializationError: If any package source failed, was empty or
                could not be stored; the store is left empty in that case
        """
        existing = self.store.count_documents()
        if existing > 0:
            logger.info(f"Found {existing} existing documents, skipping initial fetch")
            return existing

        logger.info("No existing docs found, initializing...")
        self.store.clear()

        # every package must fetch and chunk before anything is written
        processed: list[tuple[DocSource, list[IndexedDocument]]] = []
        for source, text, error in self._fetch_concurrently(REQUIRED_SOURCES):
            if error is not None:
                raise InitializationError(
                    f"Failed to fetch required package documentation for {source.label}: {error}"
                ) from error
            docs = self.process(text, source.package, source.variant)
            if not docs:
                raise InitializationError(f"Required package documentation for {source.label} is empty")
            processed.append((source, docs))

        try:
            for source, docs in processed:
                logger.info(f"Processed {len(docs)} documents for {source.label}")
                self.persist(docs)
        except IndexingError as exc:
            self.store.clear()
            raise InitializationError(f"Failed to store required package documentation: {exc}") from exc
        logger.info("Successfully fetched package documentation")

        for source, text, error in self._fetch_concurrently(OPTIONAL_SOURCES):
            if error is not None:
                logger.warning(f"Optional root docs not available: {error}")
                continue
            try:
                self.index_source(source, text)
            except IndexingError as exc:
                logger.warning(f"Optional root docs {source.label} could not be indexed: {exc}")

        count = self.store.count_documents()
        logger.info(f"Database populated with {count} documents")
        return count

    def should_update(
        self,
        package: Optional[str] = None,
        variant: Optional[str] = None,
        force: bool = False,
        now: Optional[datetime] = None,
    ) -> bool:
        """Check if a source is stale under the configured refresh mode."""
        if force:
            logger.info(f"Forced refresh requested for {package or variant or 'all'} docs")
            return True

        last_updated = self.store.last_updated(package, variant)
        if last_updated is None:
            return True

        now = now or datetime.now(timezone.utc)
        age = now - last_updated
        if age > self.settings.refresh_interval:
            hours = int(age.total_seconds() // 3600)
            logger.info(
                f"Update needed for {package or variant or 'docs'}: {hours} hours since last update "
                f"(refresh mode: {self.settings.refresh_mode})"
            )
            return True
        return False

    def refresh(self, source: DocSource, force: bool = False) -> bool:
        """Re-index a source if it is stale. Returns True when it was re-indexed."""
        if not self.should_update(source.package, source.variant, force=force):
            return False
        self.index_source(source)
        return True

    def _fetch_concurrently(
        self, sources: tuple[DocSource, ...]
    ) -> list[tuple[DocSource, Optional[str], Optional[FetchError]]]:
        with ThreadPoolExecutor(max_workers=self.settings.max_fetch_workers) as pool:
            futures = [(source, pool.submit(self.fetch_source, source)) for source in sources]

        outcomes: list[tuple[DocSource, Optional[str], Optional[FetchError]]] = []
        for source, future in futures:
            try:
                outcomes.append((source, future.result(), None))
            except FetchError as exc:
                logger.error(f"Error fetching docs for {source.label}: {exc}")
                outcomes.append((source, None, exc))
        return outcomes
