"""SQLite-backed storage for documentation sections and their term index."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from sveltedocs.models import IndexedDocument
from sveltedocs.protocols import ScoredCandidates
from sveltedocs.storage.schema import DROP_SCHEMA, SCHEMA

UPSERT_DOC = """INSERT INTO docs (id, type, package, variant, content, hierarchy, last_updated)
               VALUES (?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
               ON CONFLICT(id) DO UPDATE SET
                   type = excluded.type,
                   package = excluded.package,
                   variant = excluded.variant,
                   content = excluded.content,
                   hierarchy = excluded.hierarchy,
                   last_updated = excluded.last_updated"""

INSERT_ENTRY = """INSERT OR REPLACE INTO search_index
                  (doc_id, term, frequency, section_importance)
                  VALUES (?, ?, ?, ?)"""


def _text(value: Optional[str]) -> Optional[str]:
    return str(value) if value is not None else None


class DocStore:
    """SQLite-backed storage for the documentation index."""

    def __init__(self, path: Path | str, timeout: float = 30.0):
        self.path = Path(path)
        self.timeout = timeout

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections.

        Everything executed inside one block is a single transaction.
        """
        conn = sqlite3.connect(self.path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    def reset(self) -> None:
        """Drop all tables and recreate an empty schema."""
        with self.connection() as conn:
            conn.executescript(DROP_SCHEMA + SCHEMA)

    def is_initialized(self) -> bool:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'docs'"
            ).fetchone()
            return row is not None

    def count_documents(self) -> int:
        with self.connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM docs").fetchone()[0]

    def clear(self) -> None:
        """Delete every document and index entry, keeping the schema."""
        with self.connection() as conn:
            conn.execute("DELETE FROM search_index")
            conn.execute("DELETE FROM docs")

    def write_batch(self, docs: list[IndexedDocument], index_batch_size: int = 100) -> None:
        """Upsert documents and replace their index entries in one transaction.

        Index entries are written in sub-batches of index_batch_size
        documents. Any failure rolls the whole batch back.
        """
        with self.connection() as conn:
            conn.executemany(
                UPSERT_DOC,
                [
                    (
                        d.document.id,
                        str(d.document.type),
                        _text(d.document.package),
                        _text(d.document.variant),
                        d.document.content,
                        d.document.hierarchy_json(),
                    )
                    for d in docs
                ],
            )

            for start in range(0, len(docs), index_batch_size):
                sub_batch = docs[start : start + index_batch_size]
                self._replace_entries(conn, sub_batch)

    def prune_source(
        self,
        keep_ids: set[str],
        package: Optional[str] = None,
        variant: Optional[str] = None,
    ) -> int:
        """Delete the sections of a source that are not in keep_ids.

        Index entries of the deleted sections go with them.

        Returns:
            Number of sections deleted
        """
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT id FROM docs WHERE package IS ? AND variant IS ?",
                (_text(package), _text(variant)),
            )
            stale = [row["id"] for row in cursor if row["id"] not in keep_ids]
            conn.executemany("DELETE FROM docs WHERE id = ?", [(doc_id,) for doc_id in stale])
        return len(stale)

    def document_exists(self, doc_id: str) -> bool:
        with self.connection() as conn:
            row = conn.execute("SELECT 1 FROM docs WHERE id = ?", (doc_id,)).fetchone()
            return row is not None

    def replace_index_entries(self, doc_id: str, terms: dict[str, int], section_importance: float) -> None:
        """Swap the index entries of one document for a new term set."""
        with self.connection() as conn:
            conn.execute("DELETE FROM search_index WHERE doc_id = ?", (doc_id,))
            conn.executemany(
                INSERT_ENTRY,
                [(doc_id, term, frequency, section_importance) for term, frequency in terms.items()],
            )

    def index_entries(self, doc_id: str) -> dict[str, tuple[int, float]]:
        """Return term -> (frequency, section_importance) for a document."""
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT term, frequency, section_importance FROM search_index WHERE doc_id = ?",
                (doc_id,),
            )
            return {row["term"]: (row["frequency"], row["section_importance"]) for row in cursor}

    # Query methods for the search engine and MCP tools

    def execute(self, candidates: ScoredCandidates) -> list[dict]:
        """Run a retrieval plan and return its rows."""
        with self.connection() as conn:
            cursor = conn.execute(candidates.sql, candidates.args)
            return [dict(row) for row in cursor]

    def last_updated(self, package: Optional[str] = None, variant: Optional[str] = None) -> Optional[datetime]:
        """Newest update time of the documents that came from one source."""
        with self.connection() as conn:
            row = conn.execute(
                """SELECT MAX(last_updated) AS last_updated FROM docs
                   WHERE package IS ? AND variant IS ?""",
                (_text(package), _text(variant)),
            ).fetchone()
        if row is None or row["last_updated"] is None:
            return None
        # CURRENT_TIMESTAMP is UTC without an offset
        return datetime.fromisoformat(row["last_updated"]).replace(tzinfo=timezone.utc)

    def read_source_document(
        self,
        package: Optional[str] = None,
        variant: Optional[str] = None,
        offset: int = 0,
    ) -> Optional[str]:
        """Read the offset-th stored section of a source, ordered by id."""
        with self.connection() as conn:
            row = conn.execute(
                """SELECT content FROM docs
                   WHERE package IS ? AND variant IS ?
                   ORDER BY id
                   LIMIT 1 OFFSET ?""",
                (_text(package), _text(variant), offset),
            ).fetchone()
            return row["content"] if row else None

    def stats(self) -> dict:
        """Document and term counts, overall and per package."""
        with self.connection() as conn:
            documents = conn.execute("SELECT COUNT(*) FROM docs").fetchone()[0]
            entries = conn.execute("SELECT COUNT(*) FROM search_index").fetchone()[0]
            terms = conn.execute("SELECT COUNT(DISTINCT term) FROM search_index").fetchone()[0]
            cursor = conn.execute(
                """SELECT COALESCE(package, variant, 'root') AS source, COUNT(*) AS count
                   FROM docs GROUP BY source ORDER BY source"""
            )
            per_source = {row["source"]: row["count"] for row in cursor}
        return {
            "documents": documents,
            "index_entries": entries,
            "distinct_terms": terms,
            "per_source": per_source,
        }

    @staticmethod
    def _replace_entries(conn: sqlite3.Connection, docs: list[IndexedDocument]) -> None:
        conn.executemany(
            "DELETE FROM search_index WHERE doc_id = ?",
            [(d.document.id,) for d in docs],
        )
        conn.executemany(
            INSERT_ENTRY,
            [
                (d.document.id, term, frequency, d.section_importance)
                for d in docs
                for term, frequency in d.terms.items()
            ],
        )
