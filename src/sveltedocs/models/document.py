"""Core data models for documentation sections and search results."""

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional


class DocType(StrEnum):
    API = "api"
    TUTORIAL = "tutorial"
    EXAMPLE = "example"
    ERROR = "error"


class Package(StrEnum):
    SVELTE = "svelte"
    KIT = "kit"
    CLI = "cli"


class DocVariant(StrEnum):
    """Compression tiers of the root llms.txt files."""

    LLMS = "llms"
    LLMS_FULL = "llms-full"
    LLMS_SMALL = "llms-small"


@dataclass
class Document:
    """A documentation section as stored in the docs table."""

    id: str
    type: DocType
    content: str
    package: Optional[Package] = None
    variant: Optional[DocVariant] = None
    hierarchy: list[str] = field(default_factory=list)

    @property
    def section_importance(self) -> float:
        """Top-level sections (no subsection) weigh twice as much."""
        return 2.0 if len(self.hierarchy) == 1 else 1.0

    def hierarchy_json(self) -> Optional[str]:
        return json.dumps(self.hierarchy) if self.hierarchy else None


@dataclass
class IndexedDocument:
    """A document paired with the term frequencies extracted from it."""

    document: Document
    terms: dict[str, int]

    @property
    def section_importance(self) -> float:
        return self.document.section_importance


@dataclass
class SearchResult:
    """A scored match returned from a query."""

    content: str
    type: DocType
    relevance_score: float
    package: Optional[Package] = None
    hierarchy: Optional[list[str]] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class RelatedSuggestion:
    term: str
    relevance: float


@dataclass
class SearchResponse:
    results: list[SearchResult] = field(default_factory=list)
    related_suggestions: Optional[list[RelatedSuggestion]] = None
