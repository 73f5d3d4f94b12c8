"""Splitting of raw documentation text into sections."""

from sveltedocs.chunkers.section_chunker import SectionChunker, sniff_doc_type

__all__ = ["SectionChunker", "sniff_doc_type"]
