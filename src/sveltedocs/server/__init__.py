"""MCP server exposing search and documentation resources."""

from sveltedocs.server.mcp_server import create_mcp_server, format_search_response

__all__ = ["create_mcp_server", "format_search_response"]
