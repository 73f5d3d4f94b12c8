"""Database schema for the documentation index."""

SCHEMA = """
-- Documentation sections, one row per logical section
CREATE TABLE IF NOT EXISTS docs (
    id TEXT PRIMARY KEY,
    type TEXT NOT NULL,
    package TEXT,
    variant TEXT,
    content TEXT NOT NULL,
    hierarchy TEXT,            -- JSON array of section titles
    last_updated DATETIME DEFAULT CURRENT_TIMESTAMP
);

-- Term frequencies per section
CREATE TABLE IF NOT EXISTS search_index (
    doc_id TEXT NOT NULL,
    term TEXT NOT NULL,
    frequency INTEGER NOT NULL,
    section_importance REAL NOT NULL,
    FOREIGN KEY (doc_id) REFERENCES docs(id) ON DELETE CASCADE,
    PRIMARY KEY (doc_id, term)
);

CREATE INDEX IF NOT EXISTS idx_search_term ON search_index(term);
CREATE INDEX IF NOT EXISTS idx_docs_package ON docs(package);
CREATE INDEX IF NOT EXISTS idx_docs_variant ON docs(variant);
CREATE INDEX IF NOT EXISTS idx_docs_type ON docs(type);
"""

DROP_SCHEMA = """
DROP TABLE IF EXISTS search_index;
DROP TABLE IF EXISTS docs;
"""
