"""FastMCP server implementation for svelte-docs."""

import logging
import re
import sqlite3
import threading
from typing import Annotated, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ResourceError, ToolError
from pydantic import Field

from sveltedocs.config import Settings
from sveltedocs.errors import SvelteDocsError
from sveltedocs.fetchers import HttpFetcher
from sveltedocs.indexer import Indexer
from sveltedocs.models import SearchResponse
from sveltedocs.search.engine import SearchEngine
from sveltedocs.sources import ALL_SOURCES, DocSource, source_for_uri
from sveltedocs.storage import DocStore

logger = logging.getLogger(__name__)

SEPARATOR = "------------------------"
CODE_FENCE_OPEN = re.compile(r"```[a-z]*\n")
CODE_FENCE_CLOSE = re.compile(r"```$")


def clean_content(content: str) -> str:
    """Strip markdown code fences from a section."""
    return CODE_FENCE_CLOSE.sub("", CODE_FENCE_OPEN.sub("", content))


def format_search_response(query: str, response: SearchResponse, include_hierarchy: bool = True) -> str:
    """Render a search response as plain text for the calling agent."""
    suggestions = response.related_suggestions or []

    if not response.results:
        text = f'No results found for your query: "{query}"'
        if suggestions:
            text += "\n\nRelated terms:\n"
            text += "".join(f"- {s.term}\n" for s in suggestions)
        return text

    lines = ["SEARCH RESULTS:\n\n"]
    for i, result in enumerate(response.results, 1):
        lines.append(f"[{i}] ")
        if result.hierarchy and include_hierarchy:
            lines.append(" > ".join(title for title in result.hierarchy if title) + "\n")
        lines.append(f"Type: {result.type} | Package: {result.package or 'core'}\n")
        lines.append(f"{clean_content(result.content)}\n{SEPARATOR}\n\n")

    if suggestions:
        lines.append("RELATED TOPICS:\n")
        lines.extend(f"- {s.term}\n" for s in suggestions)

    return "".join(lines)


def start_background_init(indexer: Indexer) -> threading.Thread:
    """Populate the index without blocking the server.

    Failures are logged; the server keeps answering from whatever is stored.
    """

    def _run() -> None:
        try:
            indexer.initialize()
        except SvelteDocsError as exc:
            logger.error(f"Error during background init: {exc}")

    thread = threading.Thread(target=_run, name="svelte-docs-init", daemon=True)
    thread.start()
    return thread


def create_mcp_server(
    settings: Optional[Settings] = None,
    store: Optional[DocStore] = None,
    indexer: Optional[Indexer] = None,
    force_refresh: bool = False,
    initialize_in_background: bool = False,
) -> FastMCP:
    """Create an MCP server over a documentation index.

    Args:
        settings: Configuration; loaded from the environment when omitted
        store: Store to serve; built from settings.database_path when omitted
        indexer: Indexer used to refresh resources on read
        force_refresh: Re-fetch every resource on read regardless of age
        initialize_in_background: Populate an empty index in a worker thread

    Returns:
        Configured FastMCP server instance
    """
    settings = settings or Settings()
    store = store or DocStore(settings.database_path)
    store.initialize()
    indexer = indexer or Indexer(store, HttpFetcher(timeout=settings.http_timeout), settings)
    engine = SearchEngine(store, result_limit=settings.result_limit, suggestion_limit=settings.suggestion_limit)

    mcp = FastMCP(name="svelte-docs")

    @mcp.tool()
    def svelte_search_docs(
        query: str,
        doc_type: Literal["api", "tutorial", "example", "error", "all"] = "all",
        include_hierarchy: bool = True,
        package: Optional[Literal["svelte", "kit", "cli"]] = None,
    ) -> str:
        """Search Svelte documentation using specific technical terms and concepts.

        Returns relevant documentation sections with context.

        Args:
            query: Search keywords, $runes or "quoted exact phrases"
            doc_type: One of api, tutorial, example, error, or all (default)
            include_hierarchy: Include section hierarchy in results
            package: Filter by package (svelte, kit, or cli)
        """
        try:
            response = engine.search(query, doc_type=doc_type, package=package)
        except (SvelteDocsError, sqlite3.Error) as exc:
            raise ToolError(f'Error running tool "svelte_search_docs": {exc}') from exc
        return format_search_response(query, response, include_hierarchy)

    @mcp.tool()
    def svelte_get_next_chunk(uri: str, chunk_number: Annotated[int, Field(ge=1)]) -> str:
        """Retrieve subsequent chunks of large Svelte documentation by URI.

        Args:
            uri: Document URI (e.g., svelte-docs://docs/llms.txt)
            chunk_number: Chunk number to retrieve (1-based)
        """
        source = source_for_uri(uri)
        if source is None:
            raise ToolError(f"Invalid URI: {uri}")

        content = store.read_source_document(source.package, source.variant, offset=chunk_number - 1)
        if content is None:
            raise ToolError("No more chunks available")
        return content

    def make_reader(source: DocSource):
        def read_resource() -> str:
            try:
                indexer.refresh(source, force=force_refresh)
            except SvelteDocsError as exc:
                logger.warning(f"Refresh of {source.label} failed, serving stored copy: {exc}")

            content = store.read_source_document(source.package, source.variant)
            if content is None:
                raise ResourceError(f"Documentation not found for URI: {source.uri}")
            return content

        return read_resource

    for source in ALL_SOURCES:
        mcp.resource(
            source.uri,
            name=source.name,
            description=source.description,
            mime_type="text/plain",
        )(make_reader(source))

    if initialize_in_background:
        start_background_init(indexer)

    return mcp
