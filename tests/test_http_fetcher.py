"""Tests for the httpx-backed fetcher."""

import httpx
import pytest

from sveltedocs.errors import FetchError
from sveltedocs.fetchers import HttpFetcher
from sveltedocs.protocols import DocFetcher


def fetcher_for(handler) -> HttpFetcher:
    return HttpFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


@pytest.mark.unit
class TestHttpFetcher:
    def test_returns_body(self):
        fetcher = fetcher_for(lambda request: httpx.Response(200, text="# Docs"))

        assert fetcher.fetch("https://svelte.dev/llms.txt") == "# Docs"

    def test_status_errors_raise_fetch_error(self):
        fetcher = fetcher_for(lambda request: httpx.Response(404))

        with pytest.raises(FetchError, match="404") as excinfo:
            fetcher.fetch("https://svelte.dev/missing.txt")
        assert excinfo.value.url == "https://svelte.dev/missing.txt"

    def test_transport_errors_raise_fetch_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError, match="connection refused"):
            fetcher_for(handler).fetch("https://svelte.dev/llms.txt")

    def test_context_manager_and_protocol(self):
        with fetcher_for(lambda request: httpx.Response(200, text="")) as fetcher:
            assert isinstance(fetcher, DocFetcher)
