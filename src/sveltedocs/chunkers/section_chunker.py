"""Heading-aware section splitting for llms.txt files."""

from typing import Optional

from sveltedocs.models import Document, DocType, DocVariant, Package

TOP_LEVEL_MARKER = "# "
SECOND_LEVEL_MARKER = "## "

# Heading keywords checked in order when sniffing the document type
TYPE_KEYWORDS: tuple[tuple[str, DocType], ...] = (
    ("api", DocType.API),
    ("tutorial", DocType.TUTORIAL),
    ("example", DocType.EXAMPLE),
    ("error", DocType.ERROR),
)


def sniff_doc_type(heading: str, previous: DocType) -> DocType:
    """Guess the document type from a heading, keeping previous if nothing matches."""
    lower = heading.lower()
    for keyword, doc_type in TYPE_KEYWORDS:
        if keyword in lower:
            return doc_type
    return previous


class SectionChunker:
    """Split documentation on blank lines, tracking a two-level heading path.

    - ``# Title`` starts a new top-level section and re-derives the doc type
    - ``## Title`` replaces the second level of the path
    - any other non-empty block is content under the current path

    Blocks that resolve to the same section id are merged, so every logical
    section is stored exactly once.
    """

    SEPARATOR = "\n\n"

    def chunk(
        self,
        text: str,
        package: Optional[Package] = None,
        variant: Optional[DocVariant] = None,
    ) -> list[Document]:
        """Split text into section documents.

        Args:
            text: Raw llms.txt content
            package: Package the text belongs to, if any
            variant: Root variant the text belongs to, if any

        Returns:
            Documents in order of first appearance
        """
        if not text or not text.strip():
            return []

        current_type = DocType.API
        hierarchy: list[str] = []
        sections: dict[str, Document] = {}

        for block in text.split(self.SEPARATOR):
            if block.startswith(TOP_LEVEL_MARKER):
                heading, _, body = block.partition("\n")
                hierarchy = [heading[len(TOP_LEVEL_MARKER) :].strip()]
                current_type = sniff_doc_type(heading, current_type)
            elif block.startswith(SECOND_LEVEL_MARKER):
                heading, _, body = block.partition("\n")
                # a subsection before any top-level heading keeps an empty parent
                parent = hierarchy[0] if hierarchy else ""
                hierarchy = [parent, heading[len(SECOND_LEVEL_MARKER) :].strip()]
            else:
                body = block

            if not body.strip():
                continue

            doc_id = self.section_id(hierarchy, package, variant)
            existing = sections.get(doc_id)
            if existing is not None:
                existing.content += self.SEPARATOR + body
                continue

            sections[doc_id] = Document(
                id=doc_id,
                type=current_type,
                content=body,
                package=package,
                variant=variant,
                hierarchy=list(hierarchy),
            )

        return list(sections.values())

    @staticmethod
    def section_id(
        hierarchy: list[str],
        package: Optional[Package] = None,
        variant: Optional[DocVariant] = None,
    ) -> str:
        """Build the section id: package, variant, lower-cased path, hyphen-joined."""
        parts = [str(p) for p in (package, variant) if p is not None]
        parts.extend(title.lower() for title in hierarchy)
        return "-".join(parts) or "root"
