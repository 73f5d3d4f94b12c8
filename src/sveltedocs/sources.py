"""The documentation sources that can be indexed and served as resources."""

from dataclasses import dataclass
from typing import Optional

from sveltedocs.models import DocVariant, Package

URI_PREFIX = "svelte-docs://docs/"


@dataclass(frozen=True)
class DocSource:
    """One llms.txt file: either a package's docs or a root variant."""

    path: str
    name: str
    description: str
    package: Optional[Package] = None
    variant: Optional[DocVariant] = None

    @property
    def uri(self) -> str:
        return f"{URI_PREFIX}{self.path}"

    @property
    def mandatory(self) -> bool:
        """Package docs must index successfully; root variants are optional."""
        return self.package is not None

    @property
    def label(self) -> str:
        return str(self.package or self.variant)

    def url(self, base_url: str) -> str:
        base = base_url.rstrip("/")
        if self.package is not None:
            return f"{base}/docs/{self.path}"
        return f"{base}/{self.path}"


ROOT_SOURCES: tuple[DocSource, ...] = (
    DocSource(
        path="llms.txt",
        name="Svelte Documentation (Standard)",
        description="Standard documentation covering Svelte core concepts and features",
        variant=DocVariant.LLMS,
    ),
    DocSource(
        path="llms-full.txt",
        name="Svelte Documentation (Full)",
        description="Comprehensive documentation including advanced topics and detailed examples",
        variant=DocVariant.LLMS_FULL,
    ),
    DocSource(
        path="llms-small.txt",
        name="Svelte Documentation (Concise)",
        description="Condensed documentation focusing on essential concepts",
        variant=DocVariant.LLMS_SMALL,
    ),
)

PACKAGE_SOURCES: tuple[DocSource, ...] = (
    DocSource(
        path="svelte/llms.txt",
        name="Svelte Core Documentation",
        description="Documentation specific to Svelte core library features and APIs",
        package=Package.SVELTE,
    ),
    DocSource(
        path="kit/llms.txt",
        name="SvelteKit Documentation",
        description="Documentation for SvelteKit application framework and routing",
        package=Package.KIT,
    ),
    DocSource(
        path="cli/llms.txt",
        name="Svelte CLI Documentation",
        description="Documentation for Svelte command-line tools and utilities",
        package=Package.CLI,
    ),
)

ALL_SOURCES = ROOT_SOURCES + PACKAGE_SOURCES


def get_source(package: Optional[str] = None, variant: Optional[str] = None) -> Optional[DocSource]:
    """Find the source for a package or root variant.

    With neither given, the standard root llms.txt is returned.
    """
    if package is None and variant is None:
        return ROOT_SOURCES[0]
    for source in ALL_SOURCES:
        if package is not None and source.package == package:
            return source
        if package is None and source.variant == variant:
            return source
    return None


def source_for_uri(uri: str) -> Optional[DocSource]:
    """Resolve a svelte-docs:// URI to its source, or None if unknown."""
    if not uri.startswith(URI_PREFIX):
        return None
    path = uri[len(URI_PREFIX) :]
    for source in ALL_SOURCES:
        if source.path == path:
            return source
    return None
