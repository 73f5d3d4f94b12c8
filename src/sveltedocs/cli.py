"""CLI entry point for svelte-docs."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Literal, Optional, cast

from sveltedocs.config import Settings
from sveltedocs.errors import SvelteDocsError
from sveltedocs.fetchers import HttpFetcher
from sveltedocs.indexer import Indexer
from sveltedocs.models import DocType, Package
from sveltedocs.search.engine import ALL_TYPES, SearchEngine
from sveltedocs.sources import ALL_SOURCES, get_source
from sveltedocs.storage import DocStore

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def build_settings(database: Optional[str] = None, refresh: Optional[str] = None) -> Settings:
    overrides: dict = {}
    if database:
        overrides["database_path"] = database
    if refresh:
        overrides["refresh_mode"] = refresh
    return Settings(**overrides)


def open_store(settings: Settings) -> DocStore:
    store = DocStore(settings.database_path)
    store.initialize()
    return store


def init(settings: Settings, reset: bool = False) -> None:
    """Fetch and index every documentation source into an empty database.

    Args:
        settings: Configuration
        reset: Drop existing tables first
    """
    store = DocStore(settings.database_path)
    if reset:
        logger.info("Dropping existing index")
        store.reset()
    else:
        store.initialize()

    with HttpFetcher(timeout=settings.http_timeout) as fetcher:
        count = Indexer(store, fetcher, settings).initialize()
    logger.info(f"Indexed {count} documents -> {settings.database_path}")


def refresh(settings: Settings, package: Optional[str] = None, variant: Optional[str] = None, force: bool = False) -> None:
    """Re-index stale sources, or only the one named by package/variant."""
    store = open_store(settings)
    sources = ALL_SOURCES if package is None and variant is None else (get_source(package, variant),)

    with HttpFetcher(timeout=settings.http_timeout) as fetcher:
        indexer = Indexer(store, fetcher, settings)
        for source in sources:
            if source is None:
                continue
            if indexer.refresh(source, force=force):
                logger.info(f"Refreshed {source.uri}")
            else:
                logger.info(f"{source.uri} is up to date")


def search(settings: Settings, query: str, doc_type: str = ALL_TYPES, package: Optional[str] = None) -> None:
    """Run a query and print the formatted results."""
    from sveltedocs.server import format_search_response

    engine = SearchEngine(open_store(settings), result_limit=settings.result_limit)
    response = engine.search(query, doc_type=doc_type, package=package)
    print(format_search_response(query, response))


def serve(settings: Settings, transport: str = "stdio", force_refresh: bool = False) -> None:
    """Start the MCP server, indexing in the background if the database is empty.

    Args:
        settings: Configuration
        transport: Transport protocol (stdio or sse)
        force_refresh: Re-fetch resources on every read
    """
    # Import here to avoid loading MCP unless needed
    from sveltedocs.server import create_mcp_server

    logger.info(f"Serving {settings.database_path} via {transport}")
    mcp = create_mcp_server(settings, force_refresh=force_refresh, initialize_in_background=True)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def info(settings: Settings) -> None:
    """Show information about the index."""
    db_path = Path(settings.database_path)
    if not db_path.exists():
        logger.error(f"Database not found: {db_path}")
        sys.exit(1)

    stats = open_store(settings).stats()

    print(f"Index: {db_path.name}")
    print(f"  Size: {db_path.stat().st_size / 1024:.1f} KB")
    print(f"  Refresh mode: {settings.refresh_mode}")
    print(f"")
    print(f"Contents:")
    print(f"  Documents: {stats['documents']}")
    print(f"  Index entries: {stats['index_entries']}")
    print(f"  Distinct terms: {stats['distinct_terms']}")
    for source, count in stats["per_source"].items():
        print(f"  {source}: {count}")


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="svelte-docs",
        description="svelte-docs - Keyword search over the Svelte documentation",
    )
    parser.add_argument("--db", help="SQLite database path (default: SVELTE_DOCS_DATABASE_PATH)")
    parser.add_argument(
        "--refresh",
        type=str.lower,
        choices=["daily", "weekly"],
        help="Refresh mode; when given, resources are re-fetched on read",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init command
    init_parser = subparsers.add_parser("init", help="Fetch and index all documentation")
    init_parser.add_argument("--reset", action="store_true", help="Drop the existing index first")

    # refresh command
    refresh_parser = subparsers.add_parser("refresh", help="Re-index stale documentation sources")
    refresh_parser.add_argument("--package", choices=[p.value for p in Package])
    refresh_parser.add_argument("--variant", choices=["llms", "llms-full", "llms-small"])
    refresh_parser.add_argument("--force", action="store_true", help="Ignore the refresh interval")

    # search command
    search_parser = subparsers.add_parser("search", help="Search the index")
    search_parser.add_argument("query", help='Keywords, $runes or "quoted phrases"')
    search_parser.add_argument(
        "--type",
        dest="doc_type",
        choices=[*(t.value for t in DocType), ALL_TYPES],
        default=ALL_TYPES,
    )
    search_parser.add_argument("--package", choices=[p.value for p in Package])

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start the MCP server")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    # info command
    subparsers.add_parser("info", help="Show information about the index")

    args = parser.parse_args(argv)
    settings = build_settings(args.db, args.refresh)
    if args.refresh:
        logger.info(f"Setting documentation refresh mode to: {args.refresh}")

    try:
        if args.command == "init":
            init(settings, reset=args.reset)
        elif args.command == "refresh":
            refresh(settings, args.package, args.variant, force=args.force)
        elif args.command == "search":
            search(settings, args.query, args.doc_type, args.package)
        elif args.command == "serve":
            serve(settings, args.transport, force_refresh=args.refresh is not None)
        elif args.command == "info":
            info(settings)
    except SvelteDocsError as exc:
        logger.error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
